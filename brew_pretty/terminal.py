"""
Terminal width capability.

The renderer never queries the terminal itself; it is handed something
with a ``width()`` method so tests can pass a fixed value.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from typing import Protocol


class Terminal(Protocol):
    def width(self) -> int:
        ...


class TerminalInfo:
    """The real terminal. Reports 0 when the width cannot be determined."""

    def width(self) -> int:
        columns, _ = shutil.get_terminal_size(fallback=(0, 0))
        return max(columns, 0)


@dataclass(frozen=True)
class FixedTerminal:
    """A terminal of known width."""
    columns: int

    def width(self) -> int:
        return self.columns


def terminal_for(width: int | None) -> Terminal:
    """FixedTerminal when a width is configured, otherwise the real one."""
    if width is None:
        return TerminalInfo()
    return FixedTerminal(width)
