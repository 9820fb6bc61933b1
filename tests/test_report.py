"""Tests for stepflow._report."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from stepflow import (
    FlowAnalytics,
    StepKind,
    StepReport,
    format_report,
    generate_report,
    report_to_dict,
)


def _analytics(completed: int = 2, total_errors: int = 4) -> FlowAnalytics:
    return FlowAnalytics(
        name="demo",
        created_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        started=3,
        completed=completed,
        total_errors=total_errors,
        steps=(
            StepReport(
                index=0,
                kind=StepKind.TITLE,
                label="My Title",
                started=3,
                completed=2,
                skipped=0,
                errors=0,
            ),
            StepReport(
                index=1,
                kind=StepKind.CSV_INPUT,
                label="Enter CSV file path:",
                started=3,
                completed=1,
                skipped=1,
                errors=4,
            ),
        ),
    )


class TestFormatReport:
    def test_layout(self) -> None:
        text = format_report(_analytics())
        assert text.splitlines() == [
            "Flow Analytics for 'demo':",
            "a. Flow started 3 times.",
            "b. Flow completed 2 times.",
            "c. Step-wise analytics:",
            "   Step 1 (TitleStep: My Title): Started 3 times, Completed 2 times, "
            "Skipped 0 times, Errors 0 times.",
            "   Step 2 (CSVInputStep: Enter CSV file path:): Started 3 times, "
            "Completed 1 times, Skipped 1 times, Errors 4 times.",
            "d. Total errors across all runs: 4",
            "e. Average number of errors per flow completed: 2",
        ]

    def test_fractional_average(self) -> None:
        text = format_report(_analytics(completed=4, total_errors=3))
        assert "per flow completed: 0.75" in text

    def test_no_completed_runs(self) -> None:
        text = format_report(_analytics(completed=0))
        assert text.rstrip().endswith("N/A (No completed flows)")


class TestGenerateReport:
    def test_text_default(self) -> None:
        assert generate_report(_analytics()) == format_report(_analytics())

    def test_json(self) -> None:
        data = json.loads(generate_report(_analytics(), format="json"))
        assert data == report_to_dict(_analytics())
        assert data["average_errors_per_completed_flow"] == 2.0
        assert data["created_at"] == "2024-01-02T03:04:05+00:00"
        assert data["steps"][1]["kind"] == "CSVInputStep"

    def test_json_average_null_without_runs(self) -> None:
        data = json.loads(generate_report(_analytics(completed=0), format="json"))
        assert data["average_errors_per_completed_flow"] is None

    def test_writes_output(self, tmp_path: Path) -> None:
        target = tmp_path / "report.txt"
        assert generate_report(_analytics(), output=str(target)) is None
        assert target.read_text() == format_report(_analytics())

    def test_unsupported_format(self) -> None:
        with pytest.raises(ValueError, match="Unsupported format"):
            generate_report(_analytics(), format="xml")  # type: ignore[call-overload]
