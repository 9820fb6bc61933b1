"""stepflow: interactive step flows with run/skip/retry analytics."""

from stepflow._config import configure, get_backend, reset
from stepflow._context import RunContext, current_run_id, get_run_context
from stepflow._errors import (
    DuplicateFlowError,
    ExecutionError,
    FlowNotFound,
    StepflowError,
)
from stepflow._flow import Flow
from stepflow._prompt import ConsolePrompter, Prompter
from stepflow._registry import FlowRegistry
from stepflow._report import format_report, generate_report, report_to_dict
from stepflow._steps import (
    STEP_TYPES,
    CalculusStep,
    CSVFileInputStep,
    CSVInputStep,
    DisplayStep,
    EndStep,
    FileInputStep,
    NumberInputStep,
    OutputStep,
    Step,
    StepContext,
    TextFileInputStep,
    TextInputStep,
    TextStep,
    TitleStep,
)
from stepflow._types import (
    FlowAnalytics,
    StepAnalytics,
    StepKind,
    StepReport,
    StepState,
)

__all__ = [
    "STEP_TYPES",
    "CSVFileInputStep",
    "CSVInputStep",
    "CalculusStep",
    "ConsolePrompter",
    "DisplayStep",
    "DuplicateFlowError",
    "EndStep",
    "ExecutionError",
    "FileInputStep",
    "Flow",
    "FlowAnalytics",
    "FlowNotFound",
    "FlowRegistry",
    "NumberInputStep",
    "OutputStep",
    "Prompter",
    "RunContext",
    "Step",
    "StepAnalytics",
    "StepContext",
    "StepKind",
    "StepReport",
    "StepState",
    "StepflowError",
    "TextFileInputStep",
    "TextInputStep",
    "TextStep",
    "TitleStep",
    "configure",
    "current_run_id",
    "format_report",
    "generate_report",
    "get_backend",
    "get_run_context",
    "report_to_dict",
    "reset",
]
