"""Tracing backends for step execution attempts."""

from stepflow.backends.base import NullBackend, TracingBackend
from stepflow.backends.logging import LoggingBackend

__all__ = ["LoggingBackend", "NullBackend", "TracingBackend"]
