"""Error taxonomy for the provider layer.

Every error renders a single human-readable message via ``str(err)`` and
carries the structured fields a caller needs to react to it.
"""

from __future__ import annotations


class AgentChatError(Exception):
    """Base error for all agentchat failures."""


# ---------------------------------------------------------------------------
# Wire encoding / decoding
# ---------------------------------------------------------------------------


class TransformError(AgentChatError):
    """A unified request could not be serialized for the provider."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Request transformation failed" + (f": {detail}" if detail else ""))


class ParseError(AgentChatError):
    """A provider response could not be mapped to a unified response."""


class InvalidFormatError(ParseError):
    """The response body is not a decodable JSON object."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Invalid response format" + (f": {detail}" if detail else ""))


class MissingContentError(ParseError):
    """The envelope decoded but carries no reply content."""

    def __init__(self) -> None:
        super().__init__("Response did not contain any content")


class APIError(ParseError):
    """The provider returned a structured error object."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code
        super().__init__(message if code is None else f"{message} (code: {code})")


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------


class ServerError(AgentChatError):
    """The provider answered with a non-success HTTP status."""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(f"Server error {status_code}" + (f": {message}" if message else ""))


class AuthenticationError(ServerError):
    """The provider rejected the credential (401/403)."""


class RateLimitError(ServerError):
    """The provider throttled the request (429)."""


class NetworkError(AgentChatError):
    """The request never produced an HTTP response."""

    def __init__(self, underlying: BaseException) -> None:
        self.underlying = underlying
        super().__init__(f"Network error: {underlying}")


# ---------------------------------------------------------------------------
# Configuration and asynchronous runs
# ---------------------------------------------------------------------------


class InvalidConfigurationError(AgentChatError):
    """An agent or provider configuration failed validation."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid configuration: {reason}")


class RunFailedError(AgentChatError):
    """An asynchronous run reached a terminal non-success state."""

    def __init__(self, status: str) -> None:
        self.status = status
        super().__init__(f"Run failed with status: {status}")


class PollingTimeoutError(AgentChatError):
    """An asynchronous run did not complete within the polling budget."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"Polling timeout after {attempts} attempts")


class OperationCancelledError(AgentChatError):
    """The caller cancelled an in-flight operation."""

    def __init__(self) -> None:
        super().__init__("Operation cancelled")
