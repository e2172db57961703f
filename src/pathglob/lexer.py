"""pathglob tokenizer — converts a glob pattern into a lazily built token stream."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from pathglob.errors import ExhaustedStreamError
from pathglob.tokens import GlobToken, GlobTokenKind, Span, is_separator_char


@dataclass(frozen=True, slots=True)
class LexRule:
    """One entry of the lexical table.

    ``consumes`` is the number of characters a match swallows; it defaults to
    the trigger length and may be shorter when the trigger only looks ahead.
    Anchored rules apply at the start of a path segment and only when the
    consumed text is followed by a separator or the end of the pattern.
    """

    trigger: str
    kind: GlobTokenKind
    consumes: int | None = None
    anchored: bool = False

    def __post_init__(self) -> None:
        if not self.trigger:
            raise ValueError("lexical rule trigger must not be empty")
        if self.consumes is not None and not 0 < self.consumes <= len(self.trigger):
            raise ValueError(
                f"rule {self.trigger!r} must consume between 1 and {len(self.trigger)} characters"
            )

    @property
    def width(self) -> int:
        return len(self.trigger) if self.consumes is None else self.consumes


# Priority order: among matches of equal trigger length the earlier rule wins.
LEXICAL_RULES: tuple[LexRule, ...] = (
    LexRule("**", GlobTokenKind.DIRECTORY_WILDCARD),
    LexRule("./", GlobTokenKind.CURRENT, consumes=1, anchored=True),
    LexRule("..", GlobTokenKind.PARENT, anchored=True),
    LexRule("?", GlobTokenKind.CHARACTER_WILDCARD),
    LexRule("*", GlobTokenKind.WILDCARD),
    LexRule("/", GlobTokenKind.PATH_SEPARATOR),
    LexRule("\\", GlobTokenKind.PATH_SEPARATOR),
    LexRule(":", GlobTokenKind.WINDOWS_ROOT),
    LexRule(".", GlobTokenKind.CURRENT, anchored=True),
    LexRule("\0", GlobTokenKind.CURRENT, anchored=True),
)


class GlobTokenizer:
    """Pull-based token stream over a single glob pattern.

    Nothing is computed on construction. The first read tokenizes the whole
    pattern once and caches the result; ``peek`` and ``scan`` then walk the
    cached tuple with a cursor.
    """

    def __init__(self, pattern: str, rules: Iterable[LexRule] = LEXICAL_RULES) -> None:
        self._pattern = pattern
        self._rules = tuple(rules)
        self._tokens: tuple[GlobToken, ...] | None = None
        self._cursor = 0

    @property
    def pattern(self) -> str:
        return self._pattern

    def peek(self) -> GlobToken:
        """Return the next token without consuming it."""
        tokens = self._stream()
        if self._cursor >= len(tokens):
            raise ExhaustedStreamError(self._pattern, len(self._pattern))
        return tokens[self._cursor]

    def scan(self) -> GlobToken:
        """Consume and return the next token."""
        tok = self.peek()
        self._cursor += 1
        return tok

    def at_end(self) -> bool:
        return self._cursor >= len(self._stream())

    def tokens(self) -> tuple[GlobToken, ...]:
        """Return the full cached token sequence without moving the cursor."""
        return self._stream()

    # ------------------------------------------------------------------
    # Lexing
    # ------------------------------------------------------------------

    def _stream(self) -> tuple[GlobToken, ...]:
        if self._tokens is None:
            self._tokens = tuple(self._lex())
        return self._tokens

    def _lex(self) -> Iterator[GlobToken]:
        pattern = self._pattern
        end = len(pattern)
        pos = 0

        while pos < end:
            rule = self._longest_match(pos)
            if rule is not None:
                stop = pos + rule.width
                yield GlobToken(rule.kind, "", pattern[pos:stop], Span(pos, stop))
                pos = stop
                continue

            # Coalesce the identifier run up to the next rule match
            start = pos
            pos += 1
            while pos < end and self._longest_match(pos) is None:
                pos += 1
            text = pattern[start:pos]
            yield GlobToken(GlobTokenKind.IDENTIFIER, text, text, Span(start, pos))

    def _longest_match(self, pos: int) -> LexRule | None:
        best: LexRule | None = None
        for rule in self._rules:
            if not self._matches(rule, pos):
                continue
            if best is None or len(rule.trigger) > len(best.trigger):
                best = rule
        return best

    def _matches(self, rule: LexRule, pos: int) -> bool:
        pattern = self._pattern
        if not pattern.startswith(rule.trigger, pos):
            return False
        if not rule.anchored:
            return True

        if pos > 0 and not is_separator_char(pattern[pos - 1]):
            return False
        after = pos + rule.width
        return after == len(pattern) or is_separator_char(pattern[after])


def tokenize(pattern: str) -> list[GlobToken]:
    """Convenience function: tokenize a pattern and return the token list."""
    return list(GlobTokenizer(pattern).tokens())
