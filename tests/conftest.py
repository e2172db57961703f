"""Shared test fixtures and helpers."""

from __future__ import annotations

from pathlib import PurePath, PurePosixPath

import pytest

from pathglob.filesystem import Entry
from pathglob.lexer import tokenize
from pathglob.matcher import Globber
from pathglob.tokens import GlobToken, GlobTokenKind


class FakeFileSystem:
    """In-memory FileSystem built from a list of POSIX paths.

    Paths ending in '/' are directories; every parent is created implicitly.
    Directories listed in ``unreadable`` raise PermissionError when listed.
    """

    def __init__(self, paths: list[str], unreadable: list[str] | None = None) -> None:
        self._dirs: dict[PurePosixPath, dict[str, bool]] = {PurePosixPath("/"): {}}
        self.unreadable = {PurePosixPath(p) for p in unreadable or []}
        self.listed: list[PurePath] = []
        for raw in paths:
            self.add(raw)

    def add(self, raw: str) -> None:
        path = PurePosixPath(raw)
        is_dir = raw.endswith("/")
        for parent in reversed(path.parents):
            self._dirs.setdefault(parent, {})
        for parent, child in zip(path.parents, [path, *path.parents]):
            if child == parent:
                continue
            self._dirs[parent].setdefault(child.name, child != path or is_dir)
        if is_dir:
            self._dirs.setdefault(path, {})

    def list_dir(self, path: PurePath) -> list[Entry]:
        self.listed.append(path)
        key = PurePosixPath(path)
        if key in self.unreadable:
            raise PermissionError(f"permission denied: {key}")
        if key not in self._dirs:
            raise FileNotFoundError(f"no such directory: {key}")
        return [Entry(name, is_dir) for name, is_dir in sorted(self._dirs[key].items())]


WORKING = PurePosixPath("/Working")


@pytest.fixture
def lex():
    """Return a helper that tokenizes a pattern and returns the token list."""

    def _lex(pattern: str) -> list[GlobToken]:
        return tokenize(pattern)

    return _lex


@pytest.fixture
def tool_tree() -> FakeFileSystem:
    """A small build tree rooted at /Working."""
    return FakeFileSystem(
        [
            "/Working/tools/NuGet.exe",
            "/Working/tools/sub/NuGet.exe",
            "/Working/tools/sub/deep/readme.txt",
            "/Working/tools/Cake/Cake.exe",
            "/Working/src/app.cs",
            "/Working/src/lib/util.cs",
            "/Working/empty/",
            "/Working/.gitignore",
        ]
    )


@pytest.fixture
def match_in(tool_tree):
    """Return a helper that matches a pattern against tool_tree from /Working."""

    def _match(pattern: str, **options) -> list[str]:
        globber = Globber(tool_tree, **options)
        return [str(m.path) for m in globber.match(pattern, WORKING)]

    return _match


def assert_kinds(tokens: list[GlobToken], expected: list[GlobTokenKind]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = [t.kind for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[GlobToken], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
