"""Run context propagation via contextvars."""

from __future__ import annotations

import uuid
from contextvars import ContextVar


class RunContext:
    """Identifies one execution of a flow.

    Bound for the duration of :meth:`stepflow.Flow.run` so that tracing
    backends and log processors can tag records with the flow name, a run ID
    and the step currently being handled.
    """

    __slots__ = ("flow_name", "run_id", "step_index")

    def __init__(
        self,
        flow_name: str,
        run_id: str | None = None,
        step_index: int | None = None,
    ) -> None:
        self.flow_name = flow_name
        self.run_id: str = run_id or uuid.uuid4().hex
        self.step_index = step_index

    def __repr__(self) -> str:
        return (
            f"RunContext(flow_name={self.flow_name!r}, run_id={self.run_id!r}, "
            f"step_index={self.step_index!r})"
        )


# ---------------------------------------------------------------------------
# ContextVar holding the current RunContext (None when no flow is running)
# ---------------------------------------------------------------------------

_run_context_var: ContextVar[RunContext | None] = ContextVar(
    "stepflow_run_context", default=None
)


def _set_context(ctx: RunContext) -> None:
    """Replace the current RunContext."""
    _run_context_var.set(ctx)


def _reset_context() -> None:
    """Clear the current RunContext (set to ``None``)."""
    _run_context_var.set(None)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_run_context() -> RunContext | None:
    """Return the active :class:`RunContext`, or ``None``."""
    return _run_context_var.get()


def current_run_id() -> str | None:
    """Return the current run ID, or ``None`` if no flow is running."""
    ctx = _run_context_var.get()
    return ctx.run_id if ctx is not None else None
