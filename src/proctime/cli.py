"""
Command line entry point.

Usage:
    proctime [-s] [-v] [-n NAME] program [arguments ...]

Flags must come before the program; everything after the program is passed
to it verbatim.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .exceptions import UsageError

PROG_NAME = "proctime"


@dataclass(frozen=True)
class ParsedOptions:
    """What to run and how to report it."""

    program: str
    arguments: List[str] = field(default_factory=list)
    silent: bool = False
    verbose: bool = False
    measured_process_name: Optional[str] = None

    @property
    def has_measured_process_name(self) -> bool:
        return self.measured_process_name is not None

    @property
    def command(self) -> List[str]:
        return [self.program, *self.arguments]

    @property
    def command_line(self) -> str:
        return " ".join(self.command)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting on bad input."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=PROG_NAME,
        description="Run a program and report wall, kernel and user time of its whole process tree.",
    )
    parser.add_argument("-s", dest="silent", action="store_true", help="do not capture the output of the measured program")
    parser.add_argument("-v", dest="verbose", action="store_true", help="report every process of the tree")
    parser.add_argument("-n", dest="measured_process_name", metavar="NAME", help="report only the process with this name")
    parser.add_argument("program", help="program to run")
    parser.add_argument("arguments", nargs=argparse.REMAINDER, help="arguments passed to the program")
    return parser


def parse_arguments(argv: Sequence[str]) -> ParsedOptions:
    """
    Parse command line arguments.

    Raises:
        UsageError: For unknown flags, a missing flag value or a missing program
    """
    namespace = build_parser().parse_args(list(argv))
    return ParsedOptions(
        program=namespace.program,
        arguments=list(namespace.arguments),
        silent=namespace.silent,
        verbose=namespace.verbose,
        measured_process_name=namespace.measured_process_name,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, run the program and report its times."""
    from .config import ConfigurationError, TimerSettings
    from .console import ConsoleWriter
    from .logging_config import setup_logging
    from .orchestrator import TimedRun

    args = sys.argv[1:] if argv is None else list(argv)

    try:
        settings = TimerSettings.from_env()
    except ConfigurationError as exc:
        ConsoleWriter().error(f"Configuration error: {exc}")
        return 2

    console = ConsoleWriter(use_color=settings.use_color)
    setup_logging(debug=settings.debug, use_color=settings.use_color)

    try:
        options = parse_arguments(args)
    except UsageError as exc:
        console.error(build_parser().format_usage().rstrip())
        console.error(f"{PROG_NAME}: error: {exc}")
        return 2

    return TimedRun(options, settings, console=console).run()


if __name__ == "__main__":
    sys.exit(main())
