"""
Terminal rendering: ANSI colouring, the aligned outdated table and the
column-packed name grid used for update sections.

Widths are always measured on the *visible* text, with ANSI colour and
OSC 8 hyperlink sequences stripped first, so coloured and plain cells line
up with each other.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, Sequence

from wcwidth import wcswidth


# ANSI colour codes
COLOR_CODES = {
    "black": "\033[30m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
    "white": "\033[37m",
}
BOLD = "\033[1m"
RESET = "\033[0m"

# CSI (colour etc.): ESC [ ... cmd
CSI_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")
# OSC 8 hyperlinks: only the open/close sequences are removed, the text stays
OSC8_OPEN_RE = re.compile(r"\x1b\]8;[^\\]*\\")
OSC8_CLOSE_RE = re.compile(r"\x1b\]8;;\\")

HEADER_RE = re.compile(r"(?P<arrow>\S+) (?P<value>.+)")


def paint(text: str, color: str, enabled: bool = True) -> str:
    """Wrap text in an ANSI colour.

    Args:
        text: Text to colorize
        color: Colour name, one of COLOR_CODES
        enabled: When False the text is returned untouched

    Returns:
        Coloured text, or plain text if colours are disabled or text is empty
    """
    if not enabled or not text:
        return text
    return f"{COLOR_CODES[color]}{text}{RESET}"


def bold(text: str, enabled: bool = True) -> str:
    """Render text bold."""
    if not enabled or not text:
        return text
    return f"{BOLD}{text}{RESET}"


def strip_control_for_width(s: str) -> str:
    """Remove colour and hyperlink control sequences, keeping link text."""
    s = OSC8_OPEN_RE.sub("", s)
    s = OSC8_CLOSE_RE.sub("", s)
    s = CSI_RE.sub("", s)
    return s


def visible_width(s: str) -> int:
    """Number of terminal cells the text occupies once escapes are stripped."""
    visible = strip_control_for_width(s)
    width = wcswidth(visible)
    if width < 0:
        # Non-printable characters left in the text
        width = len(visible)
    return width


def tabulate(rows: Sequence[Sequence[str]], padding: int = 4) -> str:
    """Render rows as a left-aligned table.

    Each column is as wide as its widest visible cell, followed by
    ``padding`` spaces on the right and none on the left. Escape sequences
    are kept in the output but ignored when measuring. Trailing whitespace
    is trimmed from every line.

    Args:
        rows: Table rows, e.g. (name, installed, arrow, coloured candidate)
        padding: Spaces to the right of every column

    Returns:
        The table, one line per row
    """
    if not rows:
        return ""

    column_count = max(len(row) for row in rows)
    widths = [0] * column_count
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], visible_width(cell))

    lines = []
    for row in rows:
        cells = []
        for i, width in enumerate(widths):
            cell = row[i] if i < len(row) else ""
            space = width - visible_width(cell) + padding
            cells.append(cell + " " * space)
        lines.append("".join(cells).rstrip())
    return "\n".join(lines)


def layout_columns(
    names: Sequence[str],
    highlighted: Iterable[str],
    terminal_width: int,
    gap: int = 2,
    checkmark: str = "✔",
    checkmark_color: str = "green",
    color: bool = True,
) -> str:
    """Pack names into a column-major grid that fits the terminal.

    Names in ``highlighted`` (the outdated set) are rendered bold, and the
    first double space of their padding becomes a space plus a coloured
    checkmark so the row width does not change.

    Args:
        names: Names in display order
        highlighted: Names to mark as outdated
        terminal_width: Available width in cells (0 when unknown)
        gap: Spaces between columns
        checkmark: Glyph marking highlighted names
        checkmark_color: Colour name for the glyph
        color: Whether to emit escape sequences at all

    Returns:
        Grid text, rows separated by newlines
    """
    names = list(names)
    if not names or names == [""]:
        return ""

    marked = set(highlighted)
    gap_string = " " * gap
    name_count = len(names)
    name_widths = [visible_width(name) for name in names]
    column_count = (terminal_width + gap) // (max(name_widths) + gap)

    if column_count < 2:
        return "\n".join(names)

    row_count = math.ceil(name_count / column_count)
    column_width = (terminal_width + gap) // math.ceil(name_count / row_count) - gap
    mark = " " + paint(checkmark, checkmark_color, color)
    last = name_count - 1

    rows = []
    for nth_row in range(row_count):
        indices = list(range(nth_row, last, row_count))
        if last % row_count == nth_row:
            indices.append(last)

        cells = []
        for position, index in enumerate(indices):
            name = names[index]
            if position != len(indices) - 1:
                padding = " " * (column_width - name_widths[index])
            else:
                padding = "  "

            if name in marked:
                name = bold(name, color)
                padding = padding.replace("  ", mark, 1)
            cells.append(name + padding)
        rows.append(gap_string.join(cells))

    return "\n".join(rows)


def colorize_header(line: str, color: str = "blue", enabled: bool = True) -> str:
    """Colour a section header such as ``==> Updated Formulae``.

    The marker gets ``color`` and the label is bold. Lines without a
    ``<marker> <label>`` shape are returned unchanged.
    """
    match = HEADER_RE.match(line)
    if match is None:
        return line
    return f"{paint(match['arrow'], color, enabled)} {bold(match['value'], enabled)}"
