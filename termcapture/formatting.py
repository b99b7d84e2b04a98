"""
Terminal-faithful rendering of captured output.

Captured stdout is a stream of characters and control sequences, not a
document: a progress bar prints "10%", then "\\r20%", then "\\r30%", and a
terminal shows only "30%". Writing the raw stream to a file would keep every
intermediate frame. `format_output()` replays the stream on a small virtual
screen (a list of lines plus a cursor) and returns what a person watching the
terminal would have ended up seeing.

Supported input:
  - printable characters overwrite the cell under the cursor
  - "\\n" (next line), "\\r" (column 0), "\\b" (one column left), "\\t" (next
    tab stop, every 8 columns)
  - CSI cursor moves A/B/C/D/E/F/G/H/f and erasing K/J
  - SGR color and style codes, OSC sequences and any other escape sequence
    are dropped, as are the remaining C0 control characters

The screen has no height limit and never scrolls away: moving down past the
last line adds empty lines, moving up stops at the first one.

The rendered text always ends with the last screen line followed by "\\n".
For output ending in "\\n" that last line is the empty one the cursor sits
on, so "hello\\n" renders as "hello\\n\\n". This trailing line is the marker
the next flush trims before appending (see erase_last_line).

`erase_last_line()` implements the trim rule used when merging a new capture
into an existing file. It lives here because it is the other half of making
the file look like the terminal did.
"""

import re

TAB_WIDTH = 8

# Cursor moves are clamped so a bogus count cannot allocate a huge line
MAX_COLUMNS = 4096

# CSI (ECMA-48 parameter bytes 0x30-0x3F), OSC up to BEL/ST, or any other two-character escape.
_ESCAPE = re.compile(
    r"\x1b(?:"
    r"\[(?P<params>[0-?]*)[ -/]*(?P<final>[@-~])"
    r"|\][^\x07\x1b]*(?:\x07|\x1b\\)?"
    r"|[@-Z\\-_]"
    r")?"
)


class _Screen:
    def __init__(self):
        self.lines: list[list[str]] = [[]]
        self.row = 0
        self.col = 0

    def put(self, char: str) -> None:
        line = self.lines[self.row]
        if self.col < len(line):
            line[self.col] = char
        else:
            line.extend(" " * (self.col - len(line)))
            line.append(char)
        self.col += 1

    def move_to_row(self, row: int) -> None:
        self.row = max(row, 0)
        while self.row >= len(self.lines):
            self.lines.append([])

    def newline(self) -> None:
        self.move_to_row(self.row + 1)
        self.col = 0

    def erase_in_line(self, mode: int) -> None:
        line = self.lines[self.row]
        if mode == 0:
            del line[self.col :]
        elif mode == 1:
            end = min(self.col + 1, len(line))
            line[:end] = [" "] * end
        else:
            line.clear()

    def erase_in_display(self, mode: int) -> None:
        if mode == 0:
            del self.lines[self.row][self.col :]
            del self.lines[self.row + 1 :]
        elif mode == 1:
            for index in range(self.row):
                self.lines[index] = []
            self.erase_in_line(1)
        else:
            self.lines = [[]]
            self.row = 0
            self.col = 0

    def control(self, params: str, final: str) -> None:
        if params[:1] in ("<", "=", ">", "?"):
            # Private sequences (mode switches, device queries) draw nothing
            return
        values = []
        for param in params.split(";"):
            # Colon sub-parameters (38:5:196) only matter to SGR
            head = param.split(":", 1)[0]
            values.append(min(int(head), MAX_COLUMNS) if head.isdigit() else 0)
        first = values[0]
        count = first or 1

        if final == "A":
            self.move_to_row(self.row - count)
        elif final == "B":
            self.move_to_row(self.row + count)
        elif final == "C":
            self.col = min(self.col + count, MAX_COLUMNS)
        elif final == "D":
            self.col = max(self.col - count, 0)
        elif final == "E":
            self.move_to_row(self.row + count)
            self.col = 0
        elif final == "F":
            self.move_to_row(self.row - count)
            self.col = 0
        elif final == "G":
            self.col = count - 1
        elif final in "Hf":
            column = values[1] if len(values) > 1 else 0
            self.move_to_row((first or 1) - 1)
            self.col = (column or 1) - 1
        elif final == "K":
            self.erase_in_line(first)
        elif final == "J":
            self.erase_in_display(first)
        # Anything else (SGR "m", mode switches, ...) has no visible effect here

    def render(self) -> str:
        return "\n".join("".join(line) for line in self.lines) + "\n"


def format_output(raw: str) -> str:
    """Render raw captured text the way a terminal would have displayed it."""
    if not raw:
        return ""

    screen = _Screen()
    position = 0
    while position < len(raw):
        char = raw[position]

        if char == "\x1b":
            match = _ESCAPE.match(raw, position)
            if match.group("final"):
                screen.control(match.group("params"), match.group("final"))
            position = match.end()
            continue

        if char == "\n":
            screen.newline()
        elif char == "\r":
            screen.col = 0
        elif char == "\b":
            screen.col = max(screen.col - 1, 0)
        elif char == "\t":
            screen.col = min((screen.col // TAB_WIDTH + 1) * TAB_WIDTH, MAX_COLUMNS)
        elif char.isprintable():
            screen.put(char)
        position += 1

    return screen.render()


def erase_last_line(text: str) -> str:
    """Drop the last line of `text`, terminator included.

    "A\\nB\\nC\\n" and "A\\nB\\nC" both become "A\\nB\\n"; text without any
    newline becomes "".
    """
    if text.endswith("\n"):
        text = text[:-1]
    return text[: text.rfind("\n") + 1]


def last_line(text: str) -> str:
    """The line erase_last_line() would drop, without its terminator."""
    line = text[len(erase_last_line(text)):]
    return line[:-1] if line.endswith("\n") else line
