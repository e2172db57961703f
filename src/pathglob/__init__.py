"""pathglob: glob pattern tokenizer and filesystem matcher."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import PurePath

__version__ = "0.1.0"


def glob(pattern: str, root: str | PurePath = ".", *, case_sensitive: bool = False) -> list[PurePath]:
    """Tokenize, parse, and match a pattern against the local filesystem."""
    from pathglob.matcher import glob as _glob

    return _glob(pattern, root, case_sensitive=case_sensitive)
