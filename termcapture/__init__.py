"""termcapture - terminal styling and terminal-faithful stdout capture"""

from .buffer import CaptureBuffer
from .config import (
    CONFIG_FILE,
    DEFAULT_CONFIG,
    DEFAULT_FILENAME,
    ENCODING,
    FLUSH_INTERVAL,
    TERMCAPTURE_DIR,
    get_float_setting,
    get_setting,
    load_config,
)
from .console import console, err_console
from .errors import (
    FileUnavailable,
    FileUnavailableError,
    FormatFailure,
    FormattingError,
    Success,
    TermCaptureError,
    UnsupportedFeatureError,
    WriteFailure,
    WriteFailureError,
)
from .formatting import erase_last_line, format_output, last_line
from .periodic import PeriodicFlusher
from .redirector import OutputRedirector, capture_to_file
from .sink import OutputSink, StdoutSink, stdout_sink
from .styles import BACKGROUNDS, COLORS, CONTROLS, CURSOR, STYLES, feat, go_to, styled

__all__ = [
    # Config
    "CONFIG_FILE",
    "DEFAULT_CONFIG",
    "DEFAULT_FILENAME",
    "ENCODING",
    "FLUSH_INTERVAL",
    "TERMCAPTURE_DIR",
    "get_float_setting",
    "get_setting",
    "load_config",
    # Console
    "console",
    "err_console",
    # Errors
    "FileUnavailable",
    "FileUnavailableError",
    "FormatFailure",
    "FormattingError",
    "Success",
    "TermCaptureError",
    "UnsupportedFeatureError",
    "WriteFailure",
    "WriteFailureError",
    # Capture
    "CaptureBuffer",
    "OutputRedirector",
    "PeriodicFlusher",
    "capture_to_file",
    "OutputSink",
    "StdoutSink",
    "stdout_sink",
    # Formatting
    "erase_last_line",
    "format_output",
    "last_line",
    # Styles
    "BACKGROUNDS",
    "COLORS",
    "CONTROLS",
    "CURSOR",
    "STYLES",
    "feat",
    "go_to",
    "styled",
]
