"""
Parsing of ``brew update`` output.

Two things are extracted: the status sentences brew prints ("Updated 2
taps ...", "Already up-to-date.") and the sections that list formula names
under a ``==> <label>`` header.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum


INFO_RE = re.compile(r"Updated .+|Already up-to-date\.|No changes to formulae\.")
DEFAULT_MARKER = "==>"


@dataclass(frozen=True)
class UpdateSection:
    """
    Names listed under one or more consecutive header lines.

    Attributes:
        headers: Header lines as printed, e.g. ("==> Updated Formulae",)
        names: Names in the order brew listed them
    """
    headers: tuple[str, ...]
    names: tuple[str, ...] = ()

    @property
    def header(self) -> str:
        return self.headers[-1]


@dataclass(frozen=True)
class UpdateLog:
    info: list[str] = field(default_factory=list)
    sections: list[UpdateSection] = field(default_factory=list)


class _State(Enum):
    OUTSIDE = "outside"
    HEADER = "header"
    BODY = "body"


def info_lines(text: str) -> list[str]:
    """Status sentences in the order they appear."""
    return [line for line in text.splitlines() if INFO_RE.fullmatch(line)]


def parse_sections(text: str, marker: str = DEFAULT_MARKER) -> list[UpdateSection]:
    """
    Pair every run of header lines with the run of lines that follows it.

    Lines before the first header are ignored. A header run at the end of
    the input has no body and is dropped. Blank lines belong to the body
    they appear in but are not names.

    Args:
        text: Raw update output
        marker: Prefix identifying header lines

    Returns:
        Sections in input order
    """
    sections: list[UpdateSection] = []
    headers: list[str] = []
    body: list[str] = []
    state = _State.OUTSIDE

    def emit() -> None:
        names = tuple(line.strip() for line in body if line.strip())
        sections.append(UpdateSection(tuple(headers), names))

    for line in text.splitlines():
        if line.startswith(marker):
            if state is _State.BODY:
                emit()
            if state is not _State.HEADER:
                headers = []
            headers.append(line)
            state = _State.HEADER
        elif state is _State.HEADER:
            body = [line]
            state = _State.BODY
        elif state is _State.BODY:
            body.append(line)

    if state is _State.BODY:
        emit()

    return sections


def parse_update_log(text: str, marker: str = DEFAULT_MARKER) -> UpdateLog:
    """Status lines and sections of one ``brew update`` run."""
    return UpdateLog(info=info_lines(text), sections=parse_sections(text, marker))
