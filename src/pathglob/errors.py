"""Error types with formatted pattern context."""

from __future__ import annotations

from pathglob.tokens import Span


class GlobError(Exception):
    """Base class for all pathglob errors."""


class ExhaustedStreamError(GlobError):
    """Raised when a token is requested from a fully consumed stream."""

    def __init__(self, pattern: str, offset: int) -> None:
        self.pattern = pattern
        self.offset = offset
        super().__init__(f"token stream exhausted at offset {offset} of pattern {pattern!r}")


class PatternSyntaxError(GlobError):
    """Raised on the first grammar error, with span and pattern context."""

    def __init__(self, message: str, span: Span, pattern: str) -> None:
        self.message = message
        self.span = span
        self.pattern = pattern
        super().__init__(self.format())

    def format(self, filename: str = "<pattern>", line: int = 1) -> str:
        col = self.span.column

        # Patterns are single-line; strip anything after a stray newline
        source_line = self.pattern.split("\n", 1)[0].rstrip("\r")

        underline_len = max(1, self.span.end - self.span.start)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )
