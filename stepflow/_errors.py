"""Exception hierarchy for stepflow."""

from __future__ import annotations

from stepflow._types import StepKind


class StepflowError(Exception):
    """Base class for every error raised by stepflow."""


class ExecutionError(StepflowError):
    """A step could not complete its side effect.

    Always recoverable: :meth:`stepflow.Flow.run` counts it against the step
    and retries.
    """

    def __init__(self, kind: StepKind, detail: str = "") -> None:
        self.kind = kind
        self.detail = detail
        message = f"Error during flow execution in step: {kind.display_name}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class FlowNotFound(StepflowError, KeyError):
    """No flow with the given name is registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Flow not found: {self.name}"


class DuplicateFlowError(StepflowError, ValueError):
    """A flow with the given name is already registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Flow '{name}' already exists")
