"""
Standard output capture with terminal-faithful persistence.

OutputRedirector swaps the process output target for an in-memory
CaptureBuffer, and merges what was captured into a file on every flush:

    redirector = OutputRedirector("run.log")
    redirector.start()
    print("hello")          # lands in the buffer, not on the terminal
    redirector.stop()       # terminal output restored, "hello\\n" merged into run.log

Merge rule (flush):
  1. make sure the file exists
  2. read it and drop its last line (see formatting.erase_last_line)
  3. render the buffer through the formatter (formatting.format_output)
  4. write trimmed contents + rendered capture back, truncating the file
  5. remove the persisted text from the buffer

An empty buffer leaves the file as it is (apart from creating it), so idle
or periodic flushes never eat into earlier output.

The last line is dropped because the previous flush ended with whatever line
the cursor was on. If the program keeps redrawing that line (progress bars,
spinners), the next capture starts by rewriting it, and keeping the old copy
would leave one stale frame per flush in the file. When that line is still
the one this redirector wrote, the new capture is rendered on top of it, so
text that continues a partial line ("Downloading... " then "done") is kept.

Locking:
  - `_lock` guards the filename, the buffer, the saved output target and
    every individual file open/close. CaptureBuffer.write() takes it too.
  - `_flush_lock` serialises whole flushes so two read-trim-write sequences
    never interleave. start() and stop() take it too, so a new capture cannot
    reset the buffer between a stop and the flush that persists it. It is
    always taken before `_lock`, never after.
  - Nothing is raised or printed while `_lock` is held: file primitives return
    an outcome (see errors.py) that is unwrapped or reported afterwards.
"""

import atexit
import os
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from .buffer import CaptureBuffer
from .config import DEFAULT_FILENAME, ENCODING
from .errors import (
    FileUnavailable,
    FormatFailure,
    Outcome,
    Success,
    WriteFailure,
    report,
)
from .formatting import erase_last_line, format_output, last_line
from .sink import OutputSink, stdout_sink


class OutputRedirector:
    """Captures standard output into a buffer and merges it into a file."""

    def __init__(
        self,
        filename: str | os.PathLike | None = None,
        *,
        formatter: Callable[[str], str] = format_output,
        sink: OutputSink = stdout_sink,
        encoding: str | None = None,
    ):
        self._lock = threading.Lock()
        self._flush_lock = threading.Lock()
        self._filename = os.fspath(filename) if filename else DEFAULT_FILENAME
        self._formatter = formatter
        self._sink = sink
        self._encoding = encoding or ENCODING
        self._buffer = CaptureBuffer(self._lock, self._encoding)
        self._saved_target = None
        # (filename, line) the last merge left under the cursor
        self._cursor_line: tuple[str, str] | None = None

    def __enter__(self) -> "OutputRedirector":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    # Filename

    def set_filename(self, filename: str | os.PathLike | None) -> None:
        """Set the target file. Empty values fall back to the default filename."""
        with self._lock:
            self._filename = os.fspath(filename) if filename else DEFAULT_FILENAME

    def get_filename(self) -> str:
        with self._lock:
            return self._filename

    filename = property(get_filename, set_filename)

    @property
    def capturing(self) -> bool:
        with self._lock:
            return self._saved_target is not None

    def getvalue(self) -> str:
        """Raw text captured since the last successful flush."""
        with self._lock:
            return self._buffer.getvalue()

    # Lifecycle

    def start(self) -> bool:
        """Install the capture buffer as the output target.

        Returns False, and changes nothing, if a capture is already running:
        replacing the saved target would make the real one unrecoverable.
        """
        with self._flush_lock, self._lock:
            if self._saved_target is not None:
                return False
            self._saved_target = self._sink.get()
            self._buffer.reset()
            self._sink.set(self._buffer)

        # Interpreter exit counts as teardown: flush whatever is still buffered
        atexit.register(self.close)
        return True

    def stop(self) -> Outcome:
        """Restore the real output target, then flush. Never raises."""
        with self._flush_lock:
            with self._lock:
                if self._saved_target is not None:
                    self._sink.set(self._saved_target)
                    self._saved_target = None
            outcome = self._merge()

        atexit.unregister(self.close)
        report(outcome)
        return outcome

    def close(self) -> None:
        """Stop capturing if needed and release the buffer storage."""
        if self.capturing:
            self.stop()
        with self._lock:
            self._buffer.release()
        atexit.unregister(self.close)

    # Persistence

    def flush(self, strict: bool = False) -> Outcome:
        """Merge the buffer into the target file.

        Failures are printed on the diagnostic console and returned; the buffer
        keeps its contents so a later flush can retry. With strict=True the
        failure is raised instead.
        """
        with self._flush_lock:
            outcome = self._merge()

        if strict:
            outcome.unwrap()
        else:
            report(outcome)
        return outcome

    def touch(self) -> None:
        """Create the target file if it does not exist yet.

        Raises FileUnavailableError if it can neither be opened nor created.
        """
        self._touch(self.get_filename()).unwrap()

    ensure_exists = touch

    def read_file(self, filename: str | os.PathLike | None = None) -> str:
        """Return the whole contents of `filename` (default: the target file)."""
        filename = os.fspath(filename) if filename else self.get_filename()
        return self._read(filename).unwrap()

    def write_file(self, text: str, filename: str | os.PathLike | None = None) -> None:
        """Replace the contents of `filename` (default: the target file) with `text`."""
        filename = os.fspath(filename) if filename else self.get_filename()
        self._write(filename, text).unwrap()

    def _merge(self) -> Outcome:
        filename = self.get_filename()

        outcome = self._touch(filename)
        if not outcome.ok:
            return outcome

        outcome = self._read(filename)
        if not outcome.ok:
            return outcome
        contents = erase_last_line(outcome.value)
        trimmed = last_line(outcome.value)

        failure = None
        with self._lock:
            raw = self._buffer.getvalue()
            # Continue our own cursor line; a line someone else left is just dropped
            seed = trimmed if self._cursor_line == (filename, trimmed) else ""
            if raw:
                try:
                    formatted = self._formatter(seed + raw)
                except Exception as e:
                    failure = FormatFailure(f"{type(e).__name__}: {e}")
        if failure is not None:
            return failure
        if not raw:
            # Nothing new: keep the cursor line for the next capture to redraw
            return Success()

        outcome = self._write(filename, contents + formatted)
        if outcome.ok:
            with self._lock:
                self._buffer.discard(len(raw))
                self._cursor_line = (filename, last_line(formatted))
        return outcome

    def _touch(self, filename: str) -> Outcome:
        with self._lock:
            try:
                with open(filename, encoding=self._encoding):
                    pass
                outcome = Success()
            except OSError:
                try:
                    with open(filename, "w", encoding=self._encoding):
                        pass
                    outcome = Success()
                except OSError as e:
                    outcome = FileUnavailable(filename, e.strerror)
        return outcome

    def _read(self, filename: str) -> Outcome:
        with self._lock:
            try:
                with open(filename, encoding=self._encoding) as f:
                    outcome = Success(f.read())
            except (OSError, UnicodeDecodeError) as e:
                outcome = FileUnavailable(filename, getattr(e, "strerror", None) or str(e))
        return outcome

    def _write(self, filename: str, text: str) -> Outcome:
        with self._lock:
            try:
                with open(filename, "w", encoding=self._encoding) as f:
                    f.write(text)
                outcome = Success()
            except (OSError, UnicodeEncodeError) as e:
                outcome = WriteFailure(filename, getattr(e, "strerror", None) or str(e))
        return outcome


@contextmanager
def capture_to_file(filename: str | os.PathLike | None = None, **kwargs) -> Iterator[OutputRedirector]:
    """Capture standard output for the duration of a `with` block.

    The redirector is closed on exit, which restores the output target and
    merges the captured text into `filename`.
    """
    redirector = OutputRedirector(filename, **kwargs)
    redirector.start()
    try:
        yield redirector
    finally:
        redirector.close()
