"""Token kinds and token values for glob patterns."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class GlobTokenKind(Enum):
    # Wildcards
    CHARACTER_WILDCARD = auto()  # ?
    WILDCARD = auto()  # *
    DIRECTORY_WILDCARD = auto()  # **

    # Structural
    PATH_SEPARATOR = auto()  # / or \
    WINDOWS_ROOT = auto()  # :

    # Navigation (segment-anchored)
    CURRENT = auto()  # . or ./ or \0
    PARENT = auto()  # ..

    # Content
    IDENTIFIER = auto()  # any run not matching another kind


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open range of 0-based character offsets into the pattern."""

    start: int
    end: int

    @property
    def column(self) -> int:
        """1-based column of the first character."""
        return self.start + 1


@dataclass(frozen=True, slots=True)
class GlobToken:
    """A single token: kind, literal value (identifiers only), and source text."""

    kind: GlobTokenKind
    value: str
    raw: str
    span: Span


# Kinds that may appear inside a single path segment
SEGMENT_KINDS = frozenset(
    {
        GlobTokenKind.IDENTIFIER,
        GlobTokenKind.WILDCARD,
        GlobTokenKind.CHARACTER_WILDCARD,
        GlobTokenKind.DIRECTORY_WILDCARD,
    }
)


def is_separator_char(ch: str) -> bool:
    """Return True if ch separates path segments."""
    return ch == "/" or ch == "\\"
