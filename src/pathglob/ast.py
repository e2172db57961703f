"""Pattern tree node types produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass

from pathglob.tokens import Span


@dataclass(frozen=True, slots=True)
class Root:
    """Absolute anchor: POSIX root when drive is None, else a drive such as "C"."""

    drive: str | None
    span: Span


@dataclass(frozen=True, slots=True)
class Literal:
    """Literal text inside a wildcard segment."""

    text: str


@dataclass(frozen=True, slots=True)
class AnyRun:
    """The '*' operator: zero or more characters within one segment."""


@dataclass(frozen=True, slots=True)
class AnyChar:
    """The '?' operator: exactly one character."""


@dataclass(frozen=True, slots=True)
class CurrentSegment:
    span: Span


@dataclass(frozen=True, slots=True)
class ParentSegment:
    span: Span


@dataclass(frozen=True, slots=True)
class RecursiveSegment:
    """The '**' segment: zero or more whole directory levels."""

    span: Span


@dataclass(frozen=True, slots=True)
class LiteralSegment:
    """A segment made only of literal text."""

    text: str
    span: Span


@dataclass(frozen=True, slots=True)
class WildcardSegment:
    """A segment mixing literal text with '*' and '?' operators."""

    parts: tuple[Literal | AnyRun | AnyChar, ...]
    span: Span


Segment = CurrentSegment | ParentSegment | RecursiveSegment | LiteralSegment | WildcardSegment


@dataclass(frozen=True, slots=True)
class Pattern:
    """Root node for a parsed glob pattern."""

    source: str
    root: Root | None
    segments: tuple[Segment, ...]
    directory_only: bool
    span: Span

    @property
    def is_absolute(self) -> bool:
        return self.root is not None
