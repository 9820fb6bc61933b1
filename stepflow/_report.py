"""Rendering of flow analytics snapshots."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal, overload

from stepflow._types import FlowAnalytics

ReportFormat = Literal["text", "json"]


def format_report(analytics: FlowAnalytics) -> str:
    """Render *analytics* as the human-readable analytics printout."""
    lines: list[str] = [
        f"Flow Analytics for '{analytics.name}':",
        f"a. Flow started {analytics.started} times.",
        f"b. Flow completed {analytics.completed} times.",
        "c. Step-wise analytics:",
    ]
    lines.extend(
        f"   Step {step.index + 1} ({step.kind.display_name}: {step.label}): "
        f"Started {step.started} times, Completed {step.completed} times, "
        f"Skipped {step.skipped} times, Errors {step.errors} times."
        for step in analytics.steps
    )
    lines.append(f"d. Total errors across all runs: {analytics.total_errors}")

    average = analytics.average_errors_per_completed_flow
    if average is None:
        lines.append(
            "e. Average number of errors per flow completed: N/A (No completed flows)"
        )
    else:
        lines.append(f"e. Average number of errors per flow completed: {average:g}")
    return "\n".join(lines) + "\n"


def report_to_dict(analytics: FlowAnalytics) -> dict[str, object]:
    """Return *analytics* as JSON-compatible primitives."""
    return {
        "name": analytics.name,
        "created_at": analytics.created_at.isoformat(),
        "started": analytics.started,
        "completed": analytics.completed,
        "total_errors": analytics.total_errors,
        "average_errors_per_completed_flow": analytics.average_errors_per_completed_flow,
        "steps": [
            {
                "index": step.index,
                "kind": step.kind.display_name,
                "label": step.label,
                "started": step.started,
                "completed": step.completed,
                "skipped": step.skipped,
                "errors": step.errors,
            }
            for step in analytics.steps
        ],
    }


@overload
def generate_report(
    analytics: FlowAnalytics,
    *,
    format: ReportFormat = ...,
    output: None = ...,
) -> str: ...


@overload
def generate_report(
    analytics: FlowAnalytics,
    *,
    format: ReportFormat = ...,
    output: str,
) -> None: ...


def generate_report(
    analytics: FlowAnalytics,
    *,
    format: ReportFormat = "text",
    output: str | None = None,
) -> str | None:
    """Render an analytics report for a flow.

    Parameters
    ----------
    analytics:
        Snapshot returned by :meth:`stepflow.Flow.analytics` or
        :meth:`stepflow.Flow.run`.
    format:
        ``"text"`` for the printout, ``"json"`` for a machine-readable dump.
    output:
        Optional file path. When provided the report is written to this path
        and the function returns ``None``. Otherwise the report string is
        returned.

    Raises
    ------
    ValueError
        If *format* is not supported.
    """
    if format == "text":
        report = format_report(analytics)
    elif format == "json":
        report = json.dumps(report_to_dict(analytics), indent=2) + "\n"
    else:
        raise ValueError(f"Unsupported format: {format!r}")

    if output is not None:
        Path(output).write_text(report, encoding="utf-8")
        return None

    return report
