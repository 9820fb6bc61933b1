"""Interactive menu for creating, running and deleting flows."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, TextIO

import structlog

from stepflow._config import BACKEND_NAMES, configure
from stepflow._demo import build_demo_flow
from stepflow._errors import FlowNotFound
from stepflow._prompt import ConsolePrompter
from stepflow._registry import FlowRegistry
from stepflow._report import format_report
from stepflow.contrib.structlog import run_processor

log = structlog.get_logger("stepflow.cli")

MENU = (
    "Choose an option:",
    "1. Create Flow",
    "2. Delete Flow",
    "3. Run Flow",
    "4. Print Available Flows",
    "5. Exit",
)
EXIT_CHOICE = 5


def configure_logging(level: str = "WARNING") -> None:
    """Route library records and CLI events to stderr at *level*."""
    numeric = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=numeric,
        stream=sys.stderr,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )
    structlog.configure(
        processors=[
            run_processor,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


class Menu:
    """The five-choice loop driving a :class:`FlowRegistry`."""

    def __init__(
        self,
        registry: FlowRegistry,
        *,
        input_fn: Callable[[str], str] | None = None,
        out: TextIO | None = None,
        err: TextIO | None = None,
        workdir: str = ".",
    ) -> None:
        self.registry = registry
        self._input = input_fn or input
        self._out = out
        self._err = err
        self.workdir = workdir

    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err or sys.stderr

    def loop(self) -> int:
        """Serve menu choices until *Exit* or end of input."""
        while True:
            for line in MENU:
                print(line, file=self.out)
            try:
                raw = self._input("Enter your choice: ")
                choice = _parse_choice(raw)
                if choice == EXIT_CHOICE:
                    print("Exiting program.", file=self.out)
                    return 0
                handler = self._handlers().get(choice)
                if handler is None:
                    print("Invalid choice. Try again.", file=self.out)
                    continue
                handler()
            except EOFError:
                print(file=self.out)
                log.info("menu.eof")
                return 0

    def _handlers(self) -> dict[int, Callable[[], None]]:
        return {
            1: self.create_flow,
            2: self.delete_flow,
            3: self.run_flow,
            4: self.print_flows,
        }

    def create_flow(self) -> None:
        name = self._input("Enter the name for the new flow: ").strip()
        try:
            flow = self.registry.create(name)
        except ValueError as exc:
            print(f"Error: {exc}", file=self.err)
            log.warning("flow.create_failed", flow=name, error=str(exc))
            return
        build_demo_flow(flow, self.workdir)
        print(f"Flow '{name}' created with {len(flow)} steps.", file=self.out)
        log.info("flow.created", flow=name, steps=len(flow))

    def delete_flow(self) -> None:
        name = self._input("Enter the name of the flow to delete: ").strip()
        try:
            self.registry.delete(name)
        except FlowNotFound as exc:
            print(f"Error: {exc}", file=self.err)
            log.warning("flow.delete_failed", flow=name)
            return
        print(f"Flow '{name}' deleted from the system.", file=self.out)
        log.info("flow.deleted", flow=name)

    def run_flow(self) -> None:
        self.print_flows()
        name = self._input("Enter the name of the flow to run: ").strip()
        prompter = ConsolePrompter(self._input, err=self.err)
        try:
            analytics = self.registry.run(name, prompter, out=self.out, err=self.err)
        except FlowNotFound as exc:
            print(f"Error: {exc}", file=self.err)
            log.warning("flow.run_failed", flow=name)
            return
        print(format_report(analytics), end="", file=self.out)
        log.info(
            "flow.run_finished",
            flow=name,
            completed=analytics.completed,
            total_errors=analytics.total_errors,
        )

    def print_flows(self) -> None:
        print("Available Flows:", file=self.out)
        for name in self.registry.names():
            print(f"- {name}", file=self.out)


def _parse_choice(raw: str) -> int | None:
    try:
        return int(raw.strip())
    except ValueError:
        return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stepflow",
        description="Create and run interactive step flows.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="verbosity of diagnostics written to stderr (default: WARNING)",
    )
    parser.add_argument(
        "--backend",
        default="logging",
        choices=BACKEND_NAMES,
        help="tracing backend for step executions (default: logging)",
    )
    parser.add_argument(
        "--workdir",
        default=".",
        help="directory holding example.csv / example.txt and receiving output files",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)

    configure_logging(ns.log_level)
    try:
        configure(ns.backend)
    except RuntimeError as exc:
        parser.error(str(exc))

    return Menu(FlowRegistry(), workdir=ns.workdir).loop()
