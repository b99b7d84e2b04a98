"""
In-memory accumulator for captured standard output.

CaptureBuffer is a text stream (an `io.TextIOBase`), so it can be installed
as `sys.stdout` and receive whatever `print()`, `sys.stdout.write()` or a Rich
console writes. It shares the redirector's lock:

  - `write()` takes the lock itself, because it is called by arbitrary code
    on arbitrary threads.
  - `getvalue()`, `reset()`, `discard()` and `release()` do NOT take it. The
    redirector calls them from regions that already hold the lock, and
    `threading.Lock` is not re-entrant.
"""

from __future__ import annotations

import io
import threading

from .config import ENCODING


class CaptureBuffer(io.TextIOBase):
    def __init__(self, lock: threading.Lock | None = None, encoding: str = ENCODING):
        super().__init__()
        self._lock = lock or threading.Lock()
        self._encoding = encoding
        self._storage: io.StringIO | None = io.StringIO()

    @property
    def encoding(self) -> str:
        return self._encoding

    def writable(self) -> bool:
        return True

    def isatty(self) -> bool:
        return False

    def flush(self) -> None:
        pass

    def write(self, text: str) -> int:
        if not isinstance(text, str):
            raise TypeError(f"write() argument must be str, not {type(text).__name__}")
        with self._lock:
            if self._storage is None:
                self._storage = io.StringIO()
            return self._storage.write(text)

    def getvalue(self) -> str:
        """Current raw text. Caller holds the lock."""
        if self._storage is None:
            return ""
        return self._storage.getvalue()

    def reset(self) -> None:
        """Empty the buffer, reallocating its storage if it was released. Caller holds the lock."""
        self._storage = io.StringIO()

    def discard(self, count: int) -> None:
        """Drop the first `count` characters, keeping anything written after them. Caller holds the lock."""
        remainder = self.getvalue()[count:]
        self.reset()
        if remainder:
            self._storage.write(remainder)

    def release(self) -> None:
        """Free the underlying storage. The next write or reset reallocates it. Caller holds the lock."""
        self._storage = None
