"""Interactive decisions the run loop asks for."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Callable, Protocol, TextIO

if TYPE_CHECKING:
    from stepflow._steps import Step

_YES = frozenset({"y", "yes"})
_NO = frozenset({"n", "no"})


class Prompter(Protocol):
    """Answers the questions :meth:`stepflow.Flow.run` asks about each step.

    Indexes are zero-based; implementations decide how to present them.
    """

    def ask_run(self, index: int, step: Step) -> bool: ...

    def ask_skip(self, index: int, step: Step) -> bool: ...

    def ask_completed(self, index: int, step: Step) -> bool: ...

    def ask_text(self, message: str) -> str: ...


class ConsolePrompter:
    """Prompter reading answers from ``input()``.

    Anything other than ``y``/``yes``/``n``/``no`` (case-insensitive) is
    reported on *err* and the same question is asked again.  ``EOFError``
    from *input_fn* propagates.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] | None = None,
        err: TextIO | None = None,
    ) -> None:
        self._input = input_fn or input
        self._err = err

    def ask_run(self, index: int, step: Step) -> bool:
        return self._ask_yes_no(f"Do you want to run step {index + 1}? (y/n): ")

    def ask_skip(self, index: int, step: Step) -> bool:
        return self._ask_yes_no(f"Do you want to skip step {index + 1}? (y/n): ")

    def ask_completed(self, index: int, step: Step) -> bool:
        return self._ask_yes_no(
            f"Have you completed the action of step {index + 1}? (y/n): "
        )

    def ask_text(self, message: str) -> str:
        return self._input(message).strip()

    def _ask_yes_no(self, question: str) -> bool:
        while True:
            answer = self._input(question).strip().lower()
            if answer in _YES:
                return True
            if answer in _NO:
                return False
            print("Invalid input. Please enter 'y' or 'n'.", file=self._err or sys.stderr)
