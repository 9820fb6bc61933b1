"""Logging-based tracing backend (zero external dependencies)."""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from stepflow._context import current_run_id
from stepflow.backends.base import TracingBackend

logger = logging.getLogger("stepflow.trace")


class LoggingBackend(TracingBackend):
    """Emits structured log records when a step attempt starts and ends.

    The end record carries ``outcome`` (``"ok"`` or the exception class name)
    and ``duration_ms``.
    """

    @contextmanager
    def span(self, step_name: str, flow_name: str, **attrs: Any) -> Iterator[None]:
        extra = {
            "flow": flow_name,
            "step": step_name,
            "correlation_id": self.get_correlation_id(),
            **attrs,
        }
        logger.info("step.start", extra=extra)
        start = time.monotonic()
        outcome = "ok"
        try:
            yield
        except BaseException as exc:
            outcome = type(exc).__name__
            raise
        finally:
            duration_ms = (time.monotonic() - start) * 1000
            logger.info(
                "step.end",
                extra={**extra, "outcome": outcome, "duration_ms": duration_ms},
            )

    def get_correlation_id(self) -> str:
        run_id = current_run_id()
        if run_id is not None:
            return run_id
        return uuid.uuid4().hex
