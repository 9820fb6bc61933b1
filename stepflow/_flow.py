"""Flows: owned step sequences, their analytics and the run state machine."""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import TextIO

from stepflow._config import get_backend
from stepflow._context import RunContext, _reset_context, _set_context
from stepflow._errors import ExecutionError
from stepflow._prompt import Prompter
from stepflow._steps import Step, StepContext
from stepflow._types import FlowAnalytics, StepAnalytics, StepReport, StepState

logger = logging.getLogger("stepflow.flow")


class Flow:
    """A named, append-only sequence of steps plus usage analytics.

    A step's identity inside the flow is its index; :meth:`add_step` returns
    it so later steps (e.g. :class:`~stepflow.DisplayStep`) can refer back.
    """

    def __init__(self, name: str, created_at: datetime | None = None) -> None:
        self.name = name
        self.created_at = created_at or datetime.now(timezone.utc)
        self._steps: list[Step] = []
        self._analytics: list[StepAnalytics] = []
        self._started = 0
        self._completed = 0
        self._total_errors = 0

    def __repr__(self) -> str:
        return f"<Flow {self.name!r} steps={len(self._steps)}>"

    def __len__(self) -> int:
        return len(self._steps)

    @property
    def steps(self) -> tuple[Step, ...]:
        return tuple(self._steps)

    def add_step(self, step: Step) -> int:
        """Append *step* and return its index.

        Raises ``ValueError`` if *step* already belongs to a flow.
        """
        if step._owner is not None:
            raise ValueError(f"{step!r} already belongs to flow {step._owner!r}")
        step._owner = self.name
        self._steps.append(step)
        self._analytics.append(StepAnalytics())
        return len(self._steps) - 1

    def step_analytics(self, index: int) -> StepAnalytics:
        """Return a copy of the counters for the step at *index*."""
        stats = self._analytics[index]
        return StepAnalytics(
            started=stats.started,
            completed=stats.completed,
            skipped=stats.skipped,
            errors=stats.errors,
        )

    def analytics(self) -> FlowAnalytics:
        """Snapshot of flow-level and per-step counters."""
        return FlowAnalytics(
            name=self.name,
            created_at=self.created_at,
            started=self._started,
            completed=self._completed,
            total_errors=self._total_errors,
            steps=tuple(
                StepReport(
                    index=index,
                    kind=step.kind,
                    label=step.label,
                    started=stats.started,
                    completed=stats.completed,
                    skipped=stats.skipped,
                    errors=stats.errors,
                )
                for index, (step, stats) in enumerate(zip(self._steps, self._analytics))
            ),
        )

    # -- execution ------------------------------------------------------------

    def run(
        self,
        prompter: Prompter,
        *,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> FlowAnalytics:
        """Walk every step, letting *prompter* decide to run, skip or retry.

        Step failures (:class:`ExecutionError`) are counted and retried until
        the prompter confirms completion; they never abort the run.  Any
        other exception propagates and leaves the run uncompleted.
        """
        out = out or sys.stdout
        err = err or sys.stderr
        run_ctx = RunContext(self.name)
        _set_context(run_ctx)
        self._started += 1
        logger.info(
            "flow.start",
            extra={"flow": self.name, "run_id": run_ctx.run_id, "steps": len(self._steps)},
        )
        try:
            steps = tuple(self._steps)
            for index, step in enumerate(steps):
                run_ctx.step_index = index
                context = StepContext(
                    flow_name=self.name,
                    steps=steps,
                    index=index,
                    prompter=prompter,
                    out=out,
                )
                self._run_step(context, step, self._analytics[index], out, err)
            run_ctx.step_index = None
            self._completed += 1
            logger.info(
                "flow.completed",
                extra={
                    "flow": self.name,
                    "run_id": run_ctx.run_id,
                    "total_errors": self._total_errors,
                },
            )
        finally:
            _reset_context()
        return self.analytics()

    def _run_step(
        self,
        context: StepContext,
        step: Step,
        stats: StepAnalytics,
        out: TextIO,
        err: TextIO,
    ) -> None:
        prompter = context.prompter
        index = context.index
        number = index + 1
        state = StepState.PENDING
        attempt = 0

        while state is not StepState.ADVANCE:
            if state is StepState.PENDING:
                stats.started += 1
                if prompter.ask_run(index, step):
                    state = StepState.RUNNING
                elif prompter.ask_skip(index, step):
                    state = StepState.SKIPPED
                else:
                    print("Invalid input. Please enter 'y' or 'n'.", file=err)

            elif state is StepState.RUNNING:
                attempt += 1
                try:
                    self._execute(context, step, attempt)
                except ExecutionError as exc:
                    stats.errors += 1
                    self._total_errors += 1
                    logger.warning(
                        "step.error",
                        extra={
                            "flow": self.name,
                            "step": step.kind.display_name,
                            "index": index,
                            "attempt": attempt,
                            "error": str(exc),
                        },
                    )
                    print(f"Flow Execution Error: {exc}", file=err)
                    print("Retrying the step...", file=out)
                    continue
                if prompter.ask_completed(index, step):
                    stats.completed += 1
                    print(f"Step {number} completed.", file=out)
                    state = StepState.ADVANCE

            elif state is StepState.SKIPPED:
                stats.skipped += 1
                print(f"Step {number} skipped.", file=out)
                state = StepState.ADVANCE

    def _execute(self, context: StepContext, step: Step, attempt: int) -> None:
        backend = get_backend()
        with backend.span(
            step.kind.display_name, self.name, index=context.index, attempt=attempt
        ):
            step.execute(context)
