"""--tokens and --debug dumps to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from pathglob.ast import (
    AnyChar,
    AnyRun,
    CurrentSegment,
    Literal,
    LiteralSegment,
    ParentSegment,
    Pattern,
    RecursiveSegment,
    Segment,
    WildcardSegment,
)
from pathglob.tokens import GlobToken, GlobTokenKind


def dump_tokens(tokens: Iterable[GlobToken], *, file: TextIO | None = None) -> None:
    """Print one line per token: offsets, kind, and identifier text (default: stderr)."""
    if file is None:
        file = sys.stderr
    for tok in tokens:
        line = f"{tok.span.start:>3}..{tok.span.end:<3} {tok.kind.name}"
        if tok.kind == GlobTokenKind.IDENTIFIER:
            line += f" {tok.value!r}"
        file.write(line + "\n")


def dump_pattern(pattern: Pattern, *, file: TextIO | None = None) -> None:
    """Print a human-readable pattern tree to *file* (default: stderr)."""
    if file is None:
        file = sys.stderr
    file.write(f"Pattern {pattern.source!r}\n")
    if pattern.root is not None:
        anchor = "/" if pattern.root.drive is None else f"{pattern.root.drive}:"
        file.write(f"{_indent(1)}Root {anchor}\n")
    for seg in pattern.segments:
        _dump_segment(seg, 1, file)
    if pattern.directory_only:
        file.write(f"{_indent(1)}(directories only)\n")


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_segment(seg: Segment, depth: int, f: TextIO) -> None:
    if isinstance(seg, CurrentSegment):
        f.write(f"{_indent(depth)}Current\n")
    elif isinstance(seg, ParentSegment):
        f.write(f"{_indent(depth)}Parent\n")
    elif isinstance(seg, RecursiveSegment):
        f.write(f"{_indent(depth)}Recursive\n")
    elif isinstance(seg, LiteralSegment):
        f.write(f"{_indent(depth)}Literal({seg.text!r})\n")
    elif isinstance(seg, WildcardSegment):
        f.write(f"{_indent(depth)}Wildcard(")
        for part in seg.parts:
            _dump_part(part, f)
        f.write(")\n")


def _dump_part(part: Literal | AnyRun | AnyChar, f: TextIO) -> None:
    if isinstance(part, Literal):
        f.write(repr(part.text))
    elif isinstance(part, AnyRun):
        f.write(" * ")
    elif isinstance(part, AnyChar):
        f.write(" ? ")
