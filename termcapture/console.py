"""
Shared Rich Console singletons for terminal output.

Two consoles are created here and imported everywhere else instead of each
module building its own:

  - `console` writes to standard output. Because Rich resolves `sys.stdout`
    at write time, anything printed through it while a capture is active
    lands in the capture buffer, exactly like a plain `print()`.
  - `err_console` writes to standard error. It is the diagnostic channel:
    flush failures that are absorbed instead of raised (during `stop()`,
    periodic flushes and teardown) are reported here. Writing to stderr keeps
    those reports out of the capture buffer, so a failing flush never feeds
    its own error message into the next one.

Usage:
    from .console import err_console
    err_console.print("[red]Something went wrong[/red]")
"""

from rich.console import Console

console = Console()

err_console = Console(stderr=True)
