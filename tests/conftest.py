from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest
import structlog

from stepflow import Step, StepContext, StepKind, configure, reset
from stepflow._context import _reset_context
from stepflow._errors import ExecutionError


class ScriptedPrompter:
    """Deterministic prompter for driving :meth:`Flow.run` in tests.

    Each answer source is either a bool (always that answer) or a list that
    is consumed call by call. Running out of answers fails the test instead
    of looping forever.
    """

    def __init__(
        self,
        run: bool | list[bool] = True,
        skip: bool | list[bool] = False,
        completed: bool | list[bool] = True,
        texts: list[str] | None = None,
    ) -> None:
        self._answers: dict[str, Any] = {
            "run": list(run) if isinstance(run, list) else run,
            "skip": list(skip) if isinstance(skip, list) else skip,
            "completed": list(completed) if isinstance(completed, list) else completed,
        }
        self.texts = list(texts or [])
        self.calls: list[tuple[str, int]] = []

    def _next(self, question: str, index: int) -> bool:
        self.calls.append((question, index))
        answers = self._answers[question]
        if isinstance(answers, bool):
            return answers
        if not answers:
            raise AssertionError(f"no scripted answer left for {question!r} (step {index})")
        return answers.pop(0)

    def ask_run(self, index: int, step: Step) -> bool:
        return self._next("run", index)

    def ask_skip(self, index: int, step: Step) -> bool:
        return self._next("skip", index)

    def ask_completed(self, index: int, step: Step) -> bool:
        return self._next("completed", index)

    def ask_text(self, message: str) -> str:
        if not self.texts:
            raise AssertionError(f"no scripted text left for {message!r}")
        return self.texts.pop(0)


class FlakyStep(Step):
    """Fails a fixed number of times before succeeding."""

    kind = StepKind.TEXT

    def __init__(self, failures: int = 0) -> None:
        self.failures = failures
        self.executions = 0

    def execute(self, context: StepContext) -> None:
        self.executions += 1
        if self.executions <= self.failures:
            raise ExecutionError(self.kind, f"attempt {self.executions} failed")
        context.emit(f"flaky ok after {self.executions}")


@pytest.fixture(autouse=True)
def _clean_state() -> Iterator[None]:
    configure("logging")
    yield
    reset()
    _reset_context()
    structlog.reset_defaults()


@pytest.fixture
def prompter() -> ScriptedPrompter:
    return ScriptedPrompter()
