"""Tracing backend interface and the no-op backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any


class TracingBackend(ABC):
    """Wraps every step execution attempt of a flow run.

    ``span`` is entered once per call to a step's ``execute``; a step that
    is retried three times produces three spans.  Exceptions raised by the
    step must propagate out of the span unchanged.
    """

    @abstractmethod
    @contextmanager
    def span(self, step_name: str, flow_name: str, **attrs: Any) -> Iterator[None]:
        """Open a span around one execution attempt of *step_name*."""

    @abstractmethod
    def get_correlation_id(self) -> str:
        """Return the ID correlating records of the current run."""


class NullBackend(TracingBackend):
    """Records nothing."""

    @contextmanager
    def span(self, step_name: str, flow_name: str, **attrs: Any) -> Iterator[None]:
        yield

    def get_correlation_id(self) -> str:
        return ""
