"""
Exceptions and explicit I/O outcomes for the capture subsystem.

Every file primitive of the redirector returns one of the outcome types below
instead of raising. Callers then decide how to surface a failure:

  - Fail-fast callers (`touch()`, `read_file()`, `write_file()`,
    `flush(strict=True)`) call `unwrap()`, which raises the matching exception.
  - Best-effort callers (`stop()`, periodic flushes, teardown) hand the outcome
    to `report()`, which prints it on the diagnostic console.

Outcomes are built while the redirector's lock is held, but they are only
unwrapped or reported after the lock has been released, so raising or printing
never happens inside a guarded region.
"""

from dataclasses import dataclass
from typing import Any

from rich.markup import escape

from .console import err_console


class TermCaptureError(Exception):
    """Base class for all termcapture errors."""


class FileUnavailableError(TermCaptureError, ValueError):
    """The target file could not be opened for reading nor created."""

    def __init__(self, filename: str, reason: str | None = None):
        self.filename = filename
        self.reason = reason
        message = f"Could not open file '{filename}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class WriteFailureError(FileUnavailableError):
    """Merged content could not be written back to the target file."""


class FormattingError(TermCaptureError):
    """The formatter raised while rendering captured text."""


class UnsupportedFeatureError(TermCaptureError, KeyError):
    """A style table was asked for a feature it does not define."""

    def __str__(self) -> str:
        # KeyError quotes its argument, which garbles the message
        return str(self.args[0]) if self.args else ""


@dataclass(frozen=True)
class Success:
    value: Any = None

    ok = True

    def unwrap(self) -> Any:
        return self.value


@dataclass(frozen=True)
class FileUnavailable:
    filename: str
    reason: str | None = None

    ok = False

    def unwrap(self) -> Any:
        raise FileUnavailableError(self.filename, self.reason)


@dataclass(frozen=True)
class WriteFailure:
    filename: str
    reason: str | None = None

    ok = False

    def unwrap(self) -> Any:
        raise WriteFailureError(self.filename, self.reason)


@dataclass(frozen=True)
class FormatFailure:
    reason: str

    ok = False

    def unwrap(self) -> Any:
        raise FormattingError(self.reason)


Outcome = Success | FileUnavailable | WriteFailure | FormatFailure


def report(outcome: Outcome) -> None:
    """Print a failed outcome on the diagnostic console. Successes are ignored."""
    if outcome.ok:
        return
    try:
        outcome.unwrap()
    except TermCaptureError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
