"""Credential lookup used when building provider auth headers.

Secure storage lives outside this library; it is consumed through the
:class:`CredentialStore` protocol. Two simple stores are provided for
scripts, the CLI and tests.
"""

from __future__ import annotations

import os
import re
from typing import Protocol, runtime_checkable


@runtime_checkable
class CredentialStore(Protocol):
    """Read-only lookup of API keys by provider name."""

    def get_api_key(self, provider_name: str) -> str | None:
        """Return the key for *provider_name*, or ``None`` if none is stored."""
        ...


class InMemoryCredentialStore:
    """Dict-backed :class:`CredentialStore`. Names are case-insensitive."""

    def __init__(self, keys: dict[str, str] | None = None) -> None:
        self._keys: dict[str, str] = {}
        for name, key in (keys or {}).items():
            self.set_api_key(name, key)

    def set_api_key(self, provider_name: str, key: str) -> None:
        self._keys[provider_name.lower()] = key

    def get_api_key(self, provider_name: str) -> str | None:
        return self._keys.get(provider_name.lower())


class EnvCredentialStore:
    """Reads ``<PROVIDER>_API_KEY`` from the environment.

    ``openai-assistants`` maps to ``OPENAI_ASSISTANTS_API_KEY``. Names listed
    in *aliases* are looked up under another provider's variable, e.g.
    ``{"openai-assistants": "openai"}``.
    """

    def __init__(self, aliases: dict[str, str] | None = None) -> None:
        self._aliases = {k.lower(): v.lower() for k, v in (aliases or {}).items()}

    @staticmethod
    def variable_name(provider_name: str) -> str:
        return re.sub(r"[^A-Z0-9]+", "_", provider_name.upper()).strip("_") + "_API_KEY"

    def get_api_key(self, provider_name: str) -> str | None:
        name = self._aliases.get(provider_name.lower(), provider_name)
        value = os.environ.get(self.variable_name(name))
        return value or None
