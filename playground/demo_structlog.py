"""Demo: structlog integration.

Run this to see the flow name, run ID and step index injected into
structlog output while a flow runs. Every question is answered "yes".
"""

from __future__ import annotations

import structlog

from stepflow import (
    CalculusStep,
    EndStep,
    Flow,
    Step,
    TitleStep,
    format_report,
)
from stepflow.contrib.structlog import run_processor

structlog.configure(
    processors=[
        run_processor,
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.BoundLogger,
    logger_factory=structlog.PrintLoggerFactory(),
)

log = structlog.get_logger()


class AlwaysYes:
    def ask_run(self, index: int, step: Step) -> bool:
        log.info("asked to run", step=step.label)
        return True

    def ask_skip(self, index: int, step: Step) -> bool:
        return False

    def ask_completed(self, index: int, step: Step) -> bool:
        return True

    def ask_text(self, message: str) -> str:
        return "demo"


if __name__ == "__main__":
    # Outside a run: no run metadata injected.
    log.info("before flow")

    flow = Flow("structlog_demo")
    flow.add_step(TitleStep("structlog demo", "run metadata in every line"))
    flow.add_step(CalculusStep(4, [1, 2, 3, 4], "*"))
    flow.add_step(EndStep())
    analytics = flow.run(AlwaysYes())

    log.info("after flow", kinds=[s.kind.display_name for s in analytics.steps])
    print(format_report(analytics))
