"""OpenTelemetry tracing helpers for agentchat.

A thin wrapper around the OpenTelemetry API so the rest of the codebase can
call ``get_tracer()`` whether or not the SDK is installed. Without the SDK
the API hands out no-op tracers.

Usage::

    from agentchat.utils.telemetry import get_tracer

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("provider.request") as span:
        span.set_attribute(ATTR_PROVIDER, "openai")

Call :func:`configure_telemetry` once at startup to export spans (requires
the ``otel`` extra: ``pip install agentchat[otel]``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from opentelemetry import trace

if TYPE_CHECKING:
    from agentchat.core.models import TokenUsage

# ---------------------------------------------------------------------------
# Semantic attribute keys used throughout agentchat instrumentation
# ---------------------------------------------------------------------------

ATTR_PROVIDER = "agentchat.provider"
ATTR_MODEL = "agentchat.model"
ATTR_AGENT_ID = "agentchat.agent.id"
ATTR_CONVERSATION_ID = "agentchat.conversation.id"
ATTR_HTTP_STATUS = "agentchat.http.status_code"
ATTR_TOKENS_PROMPT = "agentchat.tokens.prompt"
ATTR_TOKENS_COMPLETION = "agentchat.tokens.completion"
ATTR_TOKENS_TOTAL = "agentchat.tokens.total"
ATTR_RUN_ID = "agentchat.run.id"
ATTR_RUN_STATUS = "agentchat.run.status"
ATTR_POLL_ATTEMPTS = "agentchat.run.poll_attempts"
ATTR_WORKFLOW_ID = "agentchat.workflow.id"

_INSTRUMENTATION_NAME = "agentchat"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def record_usage(span: trace.Span, usage: TokenUsage) -> None:
    """Attach token counts to *span*. The total is only set when reported."""
    span.set_attribute(ATTR_TOKENS_PROMPT, usage.prompt_tokens)
    span.set_attribute(ATTR_TOKENS_COMPLETION, usage.completion_tokens)
    if usage.total_tokens is not None:
        span.set_attribute(ATTR_TOKENS_TOTAL, usage.total_tokens)


def configure_telemetry(
    *,
    service_name: str = "agentchat",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Configure OpenTelemetry tracing (requires ``agentchat[otel]``).

    Parameters
    ----------
    service_name:
        The ``service.name`` resource attribute.
    export_to_console:
        If ``True``, export spans as JSON to stdout.
    otlp_endpoint:
        If set, export spans via OTLP/gRPC to this endpoint.

    Raises
    ------
    ImportError
        If the ``opentelemetry-sdk`` package is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = (
            "opentelemetry-sdk is required for configure_telemetry(). "
            "Install it with: pip install agentchat[otel]"
        )
        raise ImportError(msg) from exc

    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)

    if export_to_console:
        _add_console_exporter(provider, SimpleSpanProcessor)

    if otlp_endpoint:
        _add_otlp_exporter(provider, BatchSpanProcessor, otlp_endpoint)

    trace.set_tracer_provider(provider)


def _add_console_exporter(provider: Any, processor_cls: Any) -> None:
    from opentelemetry.sdk.trace.export import ConsoleSpanExporter  # pyright: ignore[reportMissingImports]

    provider.add_span_processor(processor_cls(ConsoleSpanExporter()))


def _add_otlp_exporter(provider: Any, processor_cls: Any, endpoint: str) -> None:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
            OTLPSpanExporter,
        )
    except ImportError as exc:
        msg = (
            "opentelemetry-exporter-otlp is required for OTLP export. "
            "Install it with: pip install agentchat[otel]"
        )
        raise ImportError(msg) from exc

    provider.add_span_processor(processor_cls(OTLPSpanExporter(endpoint=endpoint)))
