"""pathglob parser — drives the tokenizer and builds a Pattern tree."""

from __future__ import annotations

from pathglob.ast import (
    AnyChar,
    AnyRun,
    CurrentSegment,
    Literal,
    LiteralSegment,
    ParentSegment,
    Pattern,
    RecursiveSegment,
    Root,
    Segment,
    WildcardSegment,
)
from pathglob.errors import PatternSyntaxError
from pathglob.lexer import GlobTokenizer
from pathglob.tokens import SEGMENT_KINDS, GlobToken, GlobTokenKind, Span


class GlobParser:
    """Single-pass parser over a token stream.

    Tokens are pulled with ``peek``/``scan`` only; nothing is re-read once
    consumed.
    """

    def __init__(self, tokenizer: GlobTokenizer) -> None:
        self._tokens = tokenizer
        self._pattern = tokenizer.pattern

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _at(self, *kinds: GlobTokenKind) -> bool:
        return not self._tokens.at_end() and self._tokens.peek().kind in kinds

    def _at_end(self) -> bool:
        return self._tokens.at_end()

    def _skip_separators(self) -> None:
        while self._at(GlobTokenKind.PATH_SEPARATOR):
            self._tokens.scan()

    # ------------------------------------------------------------------
    # Pattern level
    # ------------------------------------------------------------------

    def parse(self) -> Pattern:
        if self._at_end():
            raise self._error("empty pattern", Span(0, 0))

        root, leading = self._parse_root()
        segments: list[Segment] = []
        directory_only = False

        if leading is not None:
            segments.append(self._parse_segment(leading))

        while not self._at_end():
            if self._at(GlobTokenKind.PATH_SEPARATOR):
                self._skip_separators()
                # Trailing separator restricts the final segment to directories
                if self._at_end() and segments:
                    directory_only = True
                continue
            segments.append(self._parse_segment())

        return Pattern(
            self._pattern,
            root,
            tuple(segments),
            directory_only,
            Span(0, len(self._pattern)),
        )

    def _parse_root(self) -> tuple[Root | None, GlobToken | None]:
        """Parse an optional absolute anchor.

        Returns the root (if any) and an identifier token that was consumed
        while looking for a drive but turned out to start the first segment.
        """
        if self._at(GlobTokenKind.PATH_SEPARATOR):
            tok = self._tokens.scan()
            return Root(None, tok.span), None

        if not self._at(GlobTokenKind.IDENTIFIER):
            return None, None

        first = self._tokens.scan()
        is_drive = len(first.value) == 1 and first.value.isalpha()
        if not is_drive or not self._at(GlobTokenKind.WINDOWS_ROOT):
            return None, first

        colon = self._tokens.scan()
        if not self._at_end() and not self._at(GlobTokenKind.PATH_SEPARATOR):
            raise self._error(
                f"expected path separator after drive root '{first.value}:'",
                self._tokens.peek().span,
            )
        return Root(first.value, Span(first.span.start, colon.span.end)), None

    # ------------------------------------------------------------------
    # Segments
    # ------------------------------------------------------------------

    def _parse_segment(self, leading: GlobToken | None = None) -> Segment:
        if leading is None:
            if self._at(GlobTokenKind.CURRENT):
                return CurrentSegment(self._tokens.scan().span)
            if self._at(GlobTokenKind.PARENT):
                return ParentSegment(self._tokens.scan().span)

        parts: list[GlobToken] = [] if leading is None else [leading]
        while self._at(*SEGMENT_KINDS):
            parts.append(self._tokens.scan())

        if self._at(GlobTokenKind.WINDOWS_ROOT):
            raise self._error(
                "unexpected drive root marker ':' (only allowed after a drive name"
                " at the start of the pattern)",
                self._tokens.peek().span,
            )
        if not parts:
            raise self._error(
                f"unexpected {self._tokens.peek().kind.name.lower()} in path segment",
                self._tokens.peek().span,
            )

        span = Span(parts[0].span.start, parts[-1].span.end)
        kinds = [tok.kind for tok in parts]

        if kinds == [GlobTokenKind.DIRECTORY_WILDCARD]:
            return RecursiveSegment(span)
        if all(kind == GlobTokenKind.IDENTIFIER for kind in kinds):
            return LiteralSegment("".join(tok.value for tok in parts), span)
        return WildcardSegment(_segment_parts(parts), span)

    def _error(self, message: str, span: Span) -> PatternSyntaxError:
        return PatternSyntaxError(message, span, self._pattern)


def _segment_parts(tokens: list[GlobToken]) -> tuple[Literal | AnyRun | AnyChar, ...]:
    """Convert segment tokens into wildcard parts, collapsing adjacent '*' runs."""
    result: list[Literal | AnyRun | AnyChar] = []
    for tok in tokens:
        if tok.kind == GlobTokenKind.IDENTIFIER:
            result.append(Literal(tok.value))
        elif tok.kind == GlobTokenKind.CHARACTER_WILDCARD:
            result.append(AnyChar())
        elif not (result and isinstance(result[-1], AnyRun)):
            # '*' and an embedded '**' both mean "any run within this segment"
            result.append(AnyRun())
    return tuple(result)


def parse(pattern: str) -> Pattern:
    """Convenience function: parse a pattern string into a Pattern tree."""
    return GlobParser(GlobTokenizer(pattern)).parse()
