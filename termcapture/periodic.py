"""
Background flushing for long-running captures.

A capture that runs for minutes should not keep everything in memory until
`stop()`. PeriodicFlusher calls `redirector.flush()` from a daemon thread at a
fixed interval, so the target file follows the program's output while it runs.

The worker sleeps on `threading.Event.wait(timeout=...)` rather than
`time.sleep()`, so `stop()` wakes it immediately instead of waiting out the
rest of the interval.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from rich.markup import escape

from .config import FLUSH_INTERVAL
from .console import err_console

if TYPE_CHECKING:
    from .redirector import OutputRedirector


class PeriodicFlusher:
    """Flush a redirector every `interval` seconds until stopped."""

    def __init__(self, redirector: OutputRedirector, interval: float | None = None):
        interval = FLUSH_INTERVAL if interval is None else interval
        if interval <= 0:
            raise ValueError(f"Flush interval must be positive, got {interval}")

        self.redirector = redirector
        self.interval = interval
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def __enter__(self) -> PeriodicFlusher:
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._worker,
            name="TermCapturePeriodicFlush",
            daemon=True,
        )
        self._thread.start()

    def stop(self, timeout: float = 2.0) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def _worker(self) -> None:
        try:
            while not self._stop_event.wait(timeout=self.interval):
                # flush() reports its own I/O failures and keeps the buffer
                self.redirector.flush()
        except Exception as e:
            err_console.print(f"[red]Periodic flush stopped: {escape(str(e))}[/red]")
