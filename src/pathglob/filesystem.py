"""Directory enumeration used by the matcher."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import PurePath
from typing import Protocol


@dataclass(frozen=True, slots=True)
class Entry:
    """An immediate child of a directory.

    ``is_dir`` follows symbolic links; ``is_link`` tells whether the entry
    itself is one.
    """

    name: str
    is_dir: bool
    is_link: bool = False


class FileSystem(Protocol):
    """The only capability the matcher needs: list a directory's children."""

    def list_dir(self, path: PurePath) -> Iterable[Entry]: ...


class LocalFileSystem:
    """FileSystem over the real disk via os.scandir.

    Errors (missing directory, permission denied) propagate as OSError.
    """

    def list_dir(self, path: PurePath) -> list[Entry]:
        with os.scandir(path) as it:
            return [Entry(entry.name, entry.is_dir(), entry.is_symlink()) for entry in it]
