"""
Version string diffing and colouring.

A version string is split into a single ordered stream of tagged tokens:
alphanumeric runs (parts) and the punctuation between them (delimiters).
Comparing two streams part by part gives the position of the first change,
which decides both where colouring starts and which colour is used.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from itertools import groupby, zip_longest
from typing import Sequence

from .config import ColorConfig
from .render import paint


class VersionRangeError(RuntimeError):
    """A token stream was sliced outside its part boundaries."""


class TokenKind(Enum):
    PART = "part"
    DELIMITER = "delimiter"


@dataclass(frozen=True)
class Token:
    """A maximal run of alphanumeric (part) or other (delimiter) characters."""
    kind: TokenKind
    text: str

    @property
    def is_part(self) -> bool:
        return self.kind is TokenKind.PART


class ColorTier(Enum):
    """How significant a version change is, from its diff position."""
    MAJOR = "major"
    MINOR = "minor"
    OTHER = "other"

    @classmethod
    def from_position(cls, position: int) -> ColorTier:
        if position == 0:
            return cls.MAJOR
        if position == 1:
            return cls.MINOR
        return cls.OTHER


def _is_alnum(char: str) -> bool:
    return char.isascii() and char.isalnum()


def tokenize(version: str) -> list[Token]:
    """Split a version string into parts and delimiters.

    Joining the tokens in order gives back the input exactly.

    >>> [t.text for t in tokenize("1.2_3-4")]
    ['1', '.', '2', '_', '3', '-', '4']
    """
    tokens = []
    for is_part, chars in groupby(version, key=_is_alnum):
        kind = TokenKind.PART if is_part else TokenKind.DELIMITER
        tokens.append(Token(kind, "".join(chars)))
    return tokens


def join_tokens(tokens: Sequence[Token]) -> str:
    return "".join(token.text for token in tokens)


def parts(tokens: Sequence[Token]) -> list[str]:
    return [token.text for token in tokens if token.is_part]


def _parts_differ(left: str, right: str) -> bool:
    # "02" and "2" have the same magnitude but still read as a change
    return left != right


def diff_position(installed: Sequence[Token], candidate: Sequence[Token]) -> int | None:
    """Index of the first part where the two versions disagree.

    Parts are compared pairwise, ignoring delimiters. When one version runs
    out of parts before the other, the first unmatched index is the
    difference. An installed version without any parts yields 0, so the
    whole candidate counts as changed.

    Args:
        installed: Tokens of the latest installed version
        candidate: Tokens of the available version

    Returns:
        Part index of the first difference, or None if the versions match
    """
    installed_parts = parts(installed)
    if not installed_parts:
        return 0

    for position, pair in enumerate(zip_longest(installed_parts, parts(candidate))):
        left, right = pair
        if left is None or right is None or _parts_differ(left, right):
            return position
    return None


def _split_index(tokens: Sequence[Token], position: int) -> int:
    """Token index where part number ``position`` starts.

    A position equal to the number of parts maps to the end of the stream.
    """
    seen = 0
    for index, token in enumerate(tokens):
        if token.is_part:
            if seen == position:
                if index > 0 and tokens[index - 1].is_part:
                    raise VersionRangeError(f"Parts are not separated at token {index}")
                return index
            seen += 1

    if position != seen:
        raise VersionRangeError(
            f"Part position {position} is outside a version with {seen} parts"
        )
    return len(tokens)


def colorize(
    candidate: Sequence[Token],
    position: int | None,
    colors: ColorConfig | None = None,
) -> str:
    """Rebuild the candidate version with its changed suffix coloured.

    Everything before part ``position`` is kept as is, including the
    delimiter right before it. The rest is wrapped in the colour of the
    tier derived from ``position``.

    Raises:
        VersionRangeError: If ``position`` lies beyond the candidate's parts
    """
    if position is None:
        return join_tokens(candidate)

    if colors is None:
        colors = ColorConfig()

    index = _split_index(candidate, position)
    tier = ColorTier.from_position(position)
    unchanged = join_tokens(candidate[:index])
    changed = paint(join_tokens(candidate[index:]), getattr(colors, tier.value), colors.enabled)
    return unchanged + changed


def colorize_version(installed: str, candidate: str, colors: ColorConfig | None = None) -> str:
    """Colour ``candidate`` relative to ``installed``.

    >>> colorize_version("1.0.0", "1.0.0")
    '1.0.0'
    """
    candidate_tokens = tokenize(candidate)
    position = diff_position(tokenize(installed), candidate_tokens)
    return colorize(candidate_tokens, position, colors)
