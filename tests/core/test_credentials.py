"""Tests for credential stores."""

import pytest

from agentchat.core.credentials import CredentialStore, EnvCredentialStore, InMemoryCredentialStore


class TestInMemoryCredentialStore:
    def test_case_insensitive(self) -> None:
        store = InMemoryCredentialStore({"OpenAI": "sk"})
        assert store.get_api_key("openai") == "sk"
        assert store.get_api_key("OPENAI") == "sk"

    def test_missing_returns_none(self) -> None:
        assert InMemoryCredentialStore().get_api_key("grok") is None

    def test_satisfies_protocol(self) -> None:
        assert isinstance(InMemoryCredentialStore(), CredentialStore)


class TestEnvCredentialStore:
    def test_variable_name(self) -> None:
        assert EnvCredentialStore.variable_name("openai-assistants") == "OPENAI_ASSISTANTS_API_KEY"
        assert EnvCredentialStore.variable_name("DeepSeek") == "DEEPSEEK_API_KEY"

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MISTRAL_API_KEY", "m-key")
        assert EnvCredentialStore().get_api_key("mistral") == "m-key"

    def test_empty_is_absent(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GROK_API_KEY", "")
        assert EnvCredentialStore().get_api_key("grok") is None

    def test_alias(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENAI_API_KEY", "shared")
        store = EnvCredentialStore(aliases={"openai-assistants": "openai"})
        assert store.get_api_key("openai-assistants") == "shared"
