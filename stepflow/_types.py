"""Core type definitions for stepflow flows and analytics."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime


class StepKind(enum.Enum):
    """The closed set of step variants a flow can hold."""

    TITLE = "TitleStep"
    TEXT = "TextStep"
    TEXT_INPUT = "TextInputStep"
    CSV_INPUT = "CSVInputStep"
    FILE_INPUT = "FileInputStep"
    TEXT_FILE_INPUT = "TextFileInputStep"
    CSV_FILE_INPUT = "CSVFileInputStep"
    DISPLAY = "DisplayStep"
    NUMBER_INPUT = "NumberInputStep"
    CALCULUS = "CalculusStep"
    OUTPUT = "OutputStep"
    END = "EndStep"

    @property
    def display_name(self) -> str:
        return self.value


class StepState(enum.Enum):
    """Where a single step is inside :meth:`stepflow.Flow.run`."""

    PENDING = "pending"
    RUNNING = "running"
    SKIPPED = "skipped"
    ADVANCE = "advance"


@dataclass(slots=True)
class StepAnalytics:
    """Mutable per-step counters owned by a flow."""

    started: int = 0
    completed: int = 0
    skipped: int = 0
    errors: int = 0


@dataclass(frozen=True, slots=True)
class StepReport:
    """Read-only counters for one step, in flow order."""

    index: int
    kind: StepKind
    label: str
    started: int
    completed: int
    skipped: int
    errors: int


@dataclass(frozen=True, slots=True)
class FlowAnalytics:
    """Snapshot of a flow's analytics at the time it was taken."""

    name: str
    created_at: datetime
    started: int
    completed: int
    total_errors: int
    steps: tuple[StepReport, ...]

    @property
    def average_errors_per_completed_flow(self) -> float | None:
        """Errors across all runs divided by completed runs, ``None`` if none."""
        if self.completed == 0:
            return None
        return self.total_errors / self.completed
