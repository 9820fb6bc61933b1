"""structlog processor that tags log entries with the active flow run.

Usage::

    import structlog
    from stepflow.contrib.structlog import run_processor

    structlog.configure(
        processors=[
            run_processor,
            structlog.dev.ConsoleRenderer(),
        ]
    )

Every log entry emitted while :meth:`stepflow.Flow.run` is active gets
``flow``, ``run_id`` and (once a step is being handled) ``step_index`` keys.
"""

from __future__ import annotations

from typing import Any

from stepflow._context import get_run_context


def run_processor(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor that adds run metadata to every log event.

    Keys already present in *event_dict* are left alone.  Outside a run
    nothing is added.
    """
    ctx = get_run_context()
    if ctx is None:
        return event_dict
    event_dict.setdefault("flow", ctx.flow_name)
    event_dict.setdefault("run_id", ctx.run_id)
    if ctx.step_index is not None:
        event_dict.setdefault("step_index", ctx.step_index)
    return event_dict
