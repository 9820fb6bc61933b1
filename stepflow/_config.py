"""Global tracing backend configuration (thread-safe).

When nothing is configured explicitly the backend is chosen on first use:
the ``STEPFLOW_BACKEND`` environment variable wins if set, otherwise
OpenTelemetry is used when installed and logging otherwise.
"""

from __future__ import annotations

import os
import threading

from stepflow.backends.base import NullBackend, TracingBackend

ENV_VAR = "STEPFLOW_BACKEND"
BACKEND_NAMES = ("auto", "logging", "otel", "none")

_lock = threading.Lock()
_backend: TracingBackend | None = None
_configured = False


def configure(backend: TracingBackend | str = "auto") -> None:
    """Set the tracing backend used by every flow run.

    *backend* can be:
    - A :class:`TracingBackend` instance
    - ``"logging"`` — use the built-in :class:`LoggingBackend`
    - ``"otel"`` — use :class:`OTelBackend` (requires ``opentelemetry-api``)
    - ``"none"`` — trace nothing
    - ``"auto"`` — try OTel, fall back to logging
    """
    global _backend, _configured
    with _lock:
        if isinstance(backend, TracingBackend):
            _backend = backend
        else:
            _backend = _build(backend)
        _configured = True


def get_backend() -> TracingBackend:
    """Return the configured backend, auto-detecting on first call."""
    global _backend, _configured
    if _configured:
        assert _backend is not None
        return _backend
    with _lock:
        if _configured:
            assert _backend is not None
            return _backend
        _backend = _build(os.environ.get(ENV_VAR, "auto").strip().lower() or "auto")
        _configured = True
        return _backend


def reset() -> None:
    """Reset configuration to unconfigured state. Intended for testing."""
    global _backend, _configured
    with _lock:
        _backend = None
        _configured = False


def _build(name: str) -> TracingBackend:
    if name == "logging":
        from stepflow.backends.logging import LoggingBackend

        return LoggingBackend()
    if name == "otel":
        from stepflow.backends.otel import OTelBackend

        return OTelBackend()
    if name == "none":
        return NullBackend()
    if name == "auto":
        return _auto_detect()
    raise ValueError(f"Unknown backend: {name!r}")


def _auto_detect() -> TracingBackend:
    """Try to build an OTel backend; fall back to LoggingBackend."""
    try:
        from stepflow.backends.otel import OTelBackend

        return OTelBackend()
    except RuntimeError:
        from stepflow.backends.logging import LoggingBackend

        return LoggingBackend()
