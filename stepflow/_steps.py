"""The closed set of step capabilities a flow can execute."""

from __future__ import annotations

import operator
import os
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Callable, ClassVar, Generic, TextIO, TypeVar

from stepflow._errors import ExecutionError
from stepflow._prompt import Prompter
from stepflow._types import StepKind

N = TypeVar("N", int, float)


@dataclass(frozen=True, slots=True)
class StepContext:
    """What a step sees of the flow while it executes."""

    flow_name: str
    steps: tuple[Step, ...]
    index: int
    prompter: Prompter
    out: TextIO

    def emit(self, line: str = "") -> None:
        print(line, file=self.out)


class Step(ABC):
    """A single unit of work inside a flow.

    Concrete steps are exactly the classes listed in :data:`STEP_TYPES`.
    ``execute`` either returns or raises :class:`ExecutionError`.
    """

    kind: ClassVar[StepKind]
    _owner: str | None = None

    @property
    def label(self) -> str:
        return self.kind.display_name

    @abstractmethod
    def execute(self, context: StepContext) -> None:
        """Perform the step's side effect."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.label!r}>"


def _read_lines(path: str, kind: StepKind) -> list[str]:
    try:
        with open(path, encoding="utf-8") as fh:
            return fh.read().splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise ExecutionError(kind, f"unable to open file '{path}'") from exc


def _has_extension(path: str, extension: str) -> bool:
    return os.path.splitext(path)[1] == extension


# ---------------------------------------------------------------------------
# Text steps
# ---------------------------------------------------------------------------


class TitleStep(Step):
    kind = StepKind.TITLE

    def __init__(self, title: str, subtitle: str = "") -> None:
        self.title = title
        self.subtitle = subtitle

    @property
    def label(self) -> str:
        return self.title

    def execute(self, context: StepContext) -> None:
        context.emit(f"Title: {self.title}")
        context.emit(f"Subtitle: {self.subtitle}")


class TextStep(Step):
    kind = StepKind.TEXT

    def __init__(self, title: str, content: str) -> None:
        self.title = title
        self.content = content

    @property
    def label(self) -> str:
        return self.title

    def execute(self, context: StepContext) -> None:
        context.emit(f"Title: {self.title}")
        context.emit(f"Content: {self.content}")


class TextInputStep(Step):
    """Shows literal text, or the content of *text* when it names a ``.txt`` file."""

    kind = StepKind.TEXT_INPUT

    def __init__(self, description: str, text: str) -> None:
        self.description = description
        self.text = text

    @property
    def label(self) -> str:
        return self.description

    def execute(self, context: StepContext) -> None:
        if not _has_extension(self.text, ".txt"):
            context.emit(f"Text Input: {self.text}")
            return
        content = "\n".join(_read_lines(self.text, self.kind))
        context.emit(f"Text Input (from file): {content}")


class CSVInputStep(Step):
    kind = StepKind.CSV_INPUT

    def __init__(self, description: str, path: str) -> None:
        self.description = description
        self.path = path

    @property
    def label(self) -> str:
        return self.description

    def execute(self, context: StepContext) -> None:
        if not _has_extension(self.path, ".csv"):
            raise ExecutionError(self.kind, f"invalid file type for '{self.path}'")
        for line in _read_lines(self.path, self.kind):
            context.emit(f"CSV Input: {line}")


# ---------------------------------------------------------------------------
# File content steps
# ---------------------------------------------------------------------------


class FileInputStep(Step):
    """Prints a file line by line.

    File input steps expose their content to :class:`DisplayStep` through
    :meth:`show_content`; subclasses override :attr:`header`.
    """

    kind = StepKind.FILE_INPUT
    header: ClassVar[str | None] = None

    def __init__(self, description: str, path: str) -> None:
        self.description = description
        self.path = path

    @property
    def label(self) -> str:
        return self.description

    def read_lines(self) -> list[str]:
        """Return the file's lines. Raises :class:`ExecutionError` if unreadable."""
        return _read_lines(self.path, self.kind)

    def show_content(self, context: StepContext) -> None:
        if self.header is not None:
            context.emit(self.header)
        context.emit(f"Description: {self.description}")
        for line in self.read_lines():
            context.emit(line)

    def execute(self, context: StepContext) -> None:
        self.show_content(context)


class TextFileInputStep(FileInputStep):
    kind = StepKind.TEXT_FILE_INPUT
    header = "Text File Content:"


class CSVFileInputStep(FileInputStep):
    kind = StepKind.CSV_FILE_INPUT
    header = "CSV File Content:"


class DisplayStep(Step):
    """Re-displays an earlier step of the same flow.

    *source_index* is a position in the owning flow, resolved each time the
    step executes.  It must point strictly before this step.
    """

    kind = StepKind.DISPLAY

    def __init__(self, source_index: int | None) -> None:
        self.source_index = source_index

    @property
    def label(self) -> str:
        if self.source_index is None:
            return "Display (no source)"
        return f"Display step {self.source_index + 1}"

    def execute(self, context: StepContext) -> None:
        index = self.source_index
        if index is None or not 0 <= index < context.index:
            raise ExecutionError(self.kind, f"no earlier step at index {index}")
        source = context.steps[index]
        source_context = replace(context, index=index)
        if isinstance(source, FileInputStep):
            source.show_content(source_context)
        else:
            source.execute(source_context)


# ---------------------------------------------------------------------------
# Numeric steps
# ---------------------------------------------------------------------------


class NumberInputStep(Step, Generic[N]):
    kind = StepKind.NUMBER_INPUT

    def __init__(self, description: str, value: N) -> None:
        self.description = description
        self.value = value

    @property
    def label(self) -> str:
        return self.description

    def execute(self, context: StepContext) -> None:
        context.emit(f"Description: {self.description}")
        context.emit(f"Number Input: {self.value}")


_OPERATIONS: dict[str, Callable[[Any, Any], Any]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "min": min,
    "max": max,
}


class CalculusStep(Step, Generic[N]):
    """Folds *values* left to right with *operation*.

    The fold starts at ``values[0]`` and consumes at most ``steps - 1``
    further values.  Invalid configuration, unknown operations and division
    by zero raise :class:`ExecutionError`.
    """

    kind = StepKind.CALCULUS
    operations: ClassVar[frozenset[str]] = frozenset(_OPERATIONS)

    def __init__(self, steps: int, values: Sequence[N], operation: str) -> None:
        self.steps = steps
        self.values: tuple[N, ...] = tuple(values)
        self.operation = operation

    @property
    def label(self) -> str:
        return f"Calculus '{self.operation}' over {len(self.values)} values"

    def compute(self) -> N | float:
        if self.steps <= 0 or len(self.values) < 2:
            raise ExecutionError(
                self.kind,
                f"invalid configuration (steps={self.steps}, values={len(self.values)})",
            )
        func = _OPERATIONS.get(self.operation)
        if func is None:
            raise ExecutionError(
                self.kind, f"unsupported operation {self.operation!r}"
            )

        result: Any = self.values[0]
        for value in self.values[1 : self.steps]:
            if self.operation == "/" and value == 0:
                raise ExecutionError(self.kind, "division by zero")
            result = func(result, value)
        return result

    def execute(self, context: StepContext) -> None:
        context.emit(f"Calculus Result: {self.compute()}")


# ---------------------------------------------------------------------------
# Output and terminator
# ---------------------------------------------------------------------------


class OutputStep(Step):
    """Writes description and content to ``<name>.<file_type>``.

    The file name is asked from the prompter every time the step executes.
    Relative names resolve against *directory* (default: the working
    directory).
    """

    kind = StepKind.OUTPUT

    def __init__(
        self,
        file_type: str,
        description: str,
        content: str,
        directory: str | os.PathLike[str] | None = None,
    ) -> None:
        self.file_type = file_type
        self.description = description
        self.content = content
        self.directory = Path(directory) if directory is not None else None

    @property
    def label(self) -> str:
        return self.description

    def execute(self, context: StepContext) -> None:
        name = context.prompter.ask_text(
            "Enter the output file name (without extension): "
        )
        if not name:
            raise ExecutionError(self.kind, "empty output file name")

        path = Path(f"{name}.{self.file_type}")
        if self.directory is not None:
            path = self.directory / path
        try:
            path.write_text(
                f"Description: {self.description}\nContent: {self.content}\n",
                encoding="utf-8",
            )
        except OSError as exc:
            raise ExecutionError(
                self.kind, f"unable to open output file '{path}'"
            ) from exc
        context.emit(f"Output written to file: {path}")


class EndStep(Step):
    """Marks the end of a flow. Does nothing."""

    kind = StepKind.END

    @property
    def label(self) -> str:
        return "End"

    def execute(self, context: StepContext) -> None:
        pass


STEP_TYPES: dict[StepKind, type[Step]] = {
    cls.kind: cls
    for cls in (
        TitleStep,
        TextStep,
        TextInputStep,
        CSVInputStep,
        FileInputStep,
        TextFileInputStep,
        CSVFileInputStep,
        DisplayStep,
        NumberInputStep,
        CalculusStep,
        OutputStep,
        EndStep,
    )
}
