"""OpenTelemetry tracing backend.

Requires ``opentelemetry-api`` (and an SDK to export anything) to be
installed.  Install with ``pip install stepflow[otel]``.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from stepflow.backends.base import TracingBackend

try:
    from opentelemetry import trace  # type: ignore[import-not-found]
    from opentelemetry.trace import Status, StatusCode  # type: ignore[import-not-found]

    _HAS_OTEL = True
except ImportError:  # pragma: no cover
    _HAS_OTEL = False


class OTelBackend(TracingBackend):
    """Emits one OpenTelemetry span per step execution attempt.

    Spans come from the global tracer provider unless *tracer_provider* is
    given.  Raises :class:`RuntimeError` at construction time if
    ``opentelemetry-api`` is missing.
    """

    def __init__(
        self, tracer_name: str = "stepflow", tracer_provider: Any = None
    ) -> None:
        if not _HAS_OTEL:
            raise RuntimeError(
                "opentelemetry-api is required for OTelBackend. "
                "Install it with: pip install opentelemetry-api opentelemetry-sdk"
            )
        self._tracer = trace.get_tracer(tracer_name, tracer_provider=tracer_provider)

    @contextmanager
    def span(self, step_name: str, flow_name: str, **attrs: Any) -> Iterator[None]:
        attributes = {"stepflow.flow": flow_name}
        attributes.update({f"stepflow.{key}": value for key, value in attrs.items()})
        with self._tracer.start_as_current_span(
            step_name,
            attributes=attributes,
            record_exception=True,
            set_status_on_exception=False,
        ) as span:
            try:
                yield
            except Exception as exc:
                span.set_status(Status(StatusCode.ERROR, str(exc)))
                raise

    def get_correlation_id(self) -> str:
        span = trace.get_current_span()
        ctx = span.get_span_context()
        if ctx is not None and ctx.trace_id:
            return format(ctx.trace_id, "032x")
        return ""
