"""Tests for ``agentchat providers`` and ``agentchat validate``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from click.testing import CliRunner

from agentchat.cli import main

if TYPE_CHECKING:
    from pathlib import Path

_CUSTOM = """\
providers:
  - name: {name}
    base_url: "{base_url}"
    supported_models: [llama-3-8b]
"""


class TestProvidersList:
    def test_table(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["providers", "list"])

        assert result.exit_code == 0
        assert "anthropic" in result.output
        assert "n8n" in result.output

    def test_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["providers", "list", "--format", "json"])

        assert result.exit_code == 0
        assert '"openai-assistants"' in result.output
        assert '"claude-sonnet-4-20250514"' in result.output

    def test_with_custom_file(self, tmp_path: Path) -> None:
        path = tmp_path / "providers.yaml"
        path.write_text(_CUSTOM.format(name="local", base_url="http://localhost:8080"))

        runner = CliRunner()
        result = runner.invoke(
            main, ["providers", "list", "--custom", str(path), "--format", "json"]
        )

        assert result.exit_code == 0
        assert '"local"' in result.output
        assert '"llama-3-8b"' in result.output

    def test_bad_custom_file(self, tmp_path: Path) -> None:
        path = tmp_path / "providers.yaml"
        path.write_text("providers: [unclosed")

        runner = CliRunner()
        result = runner.invoke(main, ["providers", "list", "--custom", str(path)])

        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestValidate:
    def test_builtin_valid(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["validate", "anthropic"])

        assert result.exit_code == 0
        assert "configuration is valid" in result.output

    def test_assistants_need_an_id(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["validate", "openai-assistants"])

        assert result.exit_code == 1
        assert "assistant id" in result.output

    def test_assistants_with_id(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["validate", "openai-assistants", "-m", "asst_1"])

        assert result.exit_code == 0
        assert "configuration is valid" in result.output

    def test_unknown_provider(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["validate", "nope"])

        assert result.exit_code == 1
        assert "unknown provider" in result.output

    def test_custom_without_base_url(self, tmp_path: Path) -> None:
        path = tmp_path / "providers.yaml"
        path.write_text(_CUSTOM.format(name="broken", base_url=""))

        runner = CliRunner()
        result = runner.invoke(main, ["validate", "broken", "--custom", str(path)])

        assert result.exit_code == 1
        assert "base URL is required" in result.output

    def test_custom_valid(self, tmp_path: Path) -> None:
        path = tmp_path / "providers.yaml"
        path.write_text(_CUSTOM.format(name="local", base_url="http://localhost:8080"))

        runner = CliRunner()
        result = runner.invoke(main, ["validate", "local", "--custom", str(path)])

        assert result.exit_code == 0
        assert "local configuration is valid" in result.output


class TestVersion:
    def test_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "agentchat" in result.output
        assert "0.1.0" in result.output
