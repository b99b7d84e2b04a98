"""
The process output target, behind a small injectable interface.

`sys.stdout` is one piece of global state shared by the whole process. Rather
than reading and assigning it directly, the redirector talks to an output sink:
an object with `get()` and `set(stream)`. The default `stdout_sink` forwards to
`sys.stdout`; tests pass their own sink so a capture never touches the real
stream.
"""

import sys
from typing import Protocol, TextIO


class OutputSink(Protocol):
    def get(self) -> TextIO: ...

    def set(self, stream: TextIO) -> None: ...


class StdoutSink:
    """Reads and replaces the process-wide `sys.stdout`."""

    def get(self) -> TextIO:
        return sys.stdout

    def set(self, stream: TextIO) -> None:
        sys.stdout = stream


stdout_sink = StdoutSink()
