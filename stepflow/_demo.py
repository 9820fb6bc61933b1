"""The sample flow installed by the interactive menu."""

from __future__ import annotations

import os
from pathlib import Path

from stepflow._flow import Flow
from stepflow._steps import (
    CalculusStep,
    CSVInputStep,
    DisplayStep,
    EndStep,
    FileInputStep,
    NumberInputStep,
    OutputStep,
    TextFileInputStep,
    TextInputStep,
    TextStep,
    TitleStep,
)


def build_demo_flow(flow: Flow, workdir: str | os.PathLike[str] = ".") -> Flow:
    """Append the sample steps to *flow* and return it.

    ``example.csv``, ``example.txt`` and the output file are resolved
    against *workdir*.
    """
    base = Path(workdir)
    csv_path = str(base / "example.csv")
    txt_path = str(base / "example.txt")

    flow.add_step(TitleStep("My Title", "Subtitle"))
    flow.add_step(TextStep("Text Step", "Some text content"))
    flow.add_step(TextInputStep("Enter some text:", "User input text"))
    flow.add_step(CSVInputStep("Enter CSV file path:", csv_path))
    flow.add_step(NumberInputStep("Enter a number:", 42))
    flow.add_step(CalculusStep(3, [2, 3, 4], "+"))
    flow.add_step(FileInputStep("Enter file path:", txt_path))
    text_file = flow.add_step(TextFileInputStep("Enter text file path:", txt_path))
    flow.add_step(DisplayStep(text_file))
    flow.add_step(OutputStep("txt", "Output Description", "Output Content", base))
    flow.add_step(EndStep())
    return flow
