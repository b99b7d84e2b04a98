"""
ANSI escape-sequence tables for styling terminal text.

This module is the single source of truth for the escape sequences termcapture
knows about. The tables are plain dictionaries so they are easy to scan, and
every lookup goes through `feat()`, which turns a missing key into a readable
error instead of a bare KeyError.

Tables:
  - COLORS, BACKGROUNDS, STYLES: SGR ("Select Graphic Rendition") sequences.
    Each ends in "m" and changes how the following characters are drawn.
  - CURSOR: (prefix, suffix) pairs for cursor moves that take a count, such as
    "move up 3 lines" -> "\\033[3A".
  - CONTROLS: fixed control sequences (bell, carriage return, erase line...).

Every table has an "error" entry holding its own name; `feat()` uses it in the
error message so the caller knows which table was searched.

Usage:
    from termcapture.styles import COLORS, CURSOR, feat, styled
    print(feat(COLORS, "red") + "alert" + feat(STYLES, "reset"))
    print(feat(CURSOR, "up", 2), end="")
    print(styled("done", "green", "bold"))
"""

from .errors import UnsupportedFeatureError

ESC = "\033["

COLORS: dict[str, str] = {
    "error": "color",
    "black": ESC + "30m",
    "red": ESC + "31m",
    "green": ESC + "32m",
    "yellow": ESC + "33m",
    "blue": ESC + "34m",
    "magenta": ESC + "35m",
    "cyan": ESC + "36m",
    "white": ESC + "37m",
    "bd black": ESC + "90m",
    "bd red": ESC + "91m",
    "bd green": ESC + "92m",
    "bd yellow": ESC + "93m",
    "bd blue": ESC + "94m",
    "bd magenta": ESC + "95m",
    "bd cyan": ESC + "96m",
    "bd white": ESC + "97m",
}

BACKGROUNDS: dict[str, str] = {
    "error": "background color",
    "black": ESC + "40m",
    "red": ESC + "41m",
    "green": ESC + "42m",
    "yellow": ESC + "43m",
    "blue": ESC + "44m",
    "magenta": ESC + "45m",
    "cyan": ESC + "46m",
    "white": ESC + "47m",
    "bd black": ESC + "100m",
    "bd red": ESC + "101m",
    "bd green": ESC + "102m",
    "bd yellow": ESC + "103m",
    "bd blue": ESC + "104m",
    "bd magenta": ESC + "105m",
    "bd cyan": ESC + "106m",
    "bd white": ESC + "107m",
}

STYLES: dict[str, str] = {
    "error": "style",
    "reset": ESC + "0m",
    "bold": ESC + "1m",
    "faint": ESC + "2m",
    "italics": ESC + "3m",
    "underlined": ESC + "4m",
    "blink": ESC + "5m",
    "inverse": ESC + "7m",
    "invisible": ESC + "8m",
    "crossed-out": ESC + "9m",
    "double-underlined": ESC + "21m",
}

# Moves that take a count: feat(CURSOR, "up", 3) -> "\033[3A"
CURSOR: dict[str, tuple[str, str] | str] = {
    "error": "cursor",
    "up": (ESC, "A"),
    "down": (ESC, "B"),
    "right": (ESC, "C"),
    "left": (ESC, "D"),
    "ln_down": (ESC, "E"),
    "ln_up": (ESC, "F"),
    "column": (ESC, "G"),
}

CONTROLS: dict[str, str] = {
    "error": "terminal control sequence",
    "bell": "\a",
    "bksp": "\b",
    "tab": "\t",
    "newln": "\n",
    "cr": "\r",
    "erase_line": ESC + "2K",
    "erase_to_end": ESC + "K",
    "clear": ESC + "2J",
    "home": ESC + "H",
    "hide_cursor": ESC + "?25l",
    "show_cursor": ESC + "?25h",
}


def feat(table: dict, name: str, amount: int | None = None) -> str:
    """Return the escape sequence called `name` in `table`.

    For tables of (prefix, suffix) pairs the sequence is built around `amount`,
    which defaults to 1. Raises UnsupportedFeatureError if `name` is not in the
    table (the "error" entry itself is not a feature).
    """
    if name == "error" or name not in table:
        raise UnsupportedFeatureError(
            f'"{name}" is not supported! (unknown {table.get("error", "feature")})'
        )

    value = table[name]
    if isinstance(value, tuple):
        prefix, suffix = value
        return f"{prefix}{1 if amount is None else amount}{suffix}"
    return value


def go_to(x: int, y: int) -> str:
    """Absolute cursor position, 1-based column `x` and row `y`."""
    return f"{ESC}{y};{x}H"


def styled(text: str, *features: str) -> str:
    """Wrap `text` in the named colors/styles and reset afterwards.

    Names are looked up in COLORS, then STYLES. A "bg:" prefix selects a
    background color, e.g. styled("warn", "bg:yellow", "black").
    """
    prefix = ""
    for name in features:
        if name.startswith("bg:"):
            prefix += feat(BACKGROUNDS, name[3:])
        elif name in COLORS and name != "error":
            prefix += COLORS[name]
        else:
            prefix += feat(STYLES, name)
    return prefix + text + STYLES["reset"]
