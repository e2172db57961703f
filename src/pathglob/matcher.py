"""pathglob matcher — resolves a parsed pattern against a file namespace."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path, PurePath

from pathglob.ast import (
    AnyChar,
    AnyRun,
    CurrentSegment,
    LiteralSegment,
    ParentSegment,
    Pattern,
    RecursiveSegment,
    WildcardSegment,
)
from pathglob.filesystem import Entry, FileSystem, LocalFileSystem
from pathglob.parser import parse

logger = logging.getLogger(__name__)

Predicate = Callable[[PurePath, Entry], bool]
NameMatcher = Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class GlobMatch:
    """A matched filesystem entry."""

    path: PurePath
    is_dir: bool


class Globber:
    """Walk a FileSystem and collect every entry satisfying a pattern.

    Literal and wildcard segments compare names case-insensitively (full
    case folding) unless ``case_sensitive`` is set. Unreadable directories
    are logged at INFO and skipped unless ``strict`` is set, in which case
    the OSError propagates. ``max_depth`` bounds how many levels a single
    '**' may descend, and ``predicate`` can veto descending into a directory
    during a '**' walk. Linked directories are always traversed by explicit
    segments; '**' descends into them only with ``follow_symlinks``.
    """

    def __init__(
        self,
        filesystem: FileSystem | None = None,
        *,
        case_sensitive: bool = False,
        strict: bool = False,
        max_depth: int | None = None,
        predicate: Predicate | None = None,
        follow_symlinks: bool = False,
    ) -> None:
        if max_depth is not None and max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        self._fs = filesystem if filesystem is not None else LocalFileSystem()
        self.case_sensitive = case_sensitive
        self.strict = strict
        self.max_depth = max_depth
        self.predicate = predicate
        self.follow_symlinks = follow_symlinks

    def match(self, pattern: str | Pattern, root: str | PurePath = ".") -> list[GlobMatch]:
        """Return all entries matching ``pattern``, sorted by path and deduplicated."""
        if isinstance(pattern, str):
            pattern = parse(pattern)
        base = root if isinstance(root, PurePath) else Path(root)
        start = _anchor(pattern, base)

        logger.debug("Matching %r from %s", pattern.source, start)
        walk = _Walk(self, pattern)
        found: dict[PurePath, GlobMatch] = {}
        for m in walk.run(start):
            found.setdefault(m.path, m)
        return sorted(found.values(), key=lambda m: str(m.path))

    def children(self, path: PurePath) -> list[Entry]:
        try:
            return list(self._fs.list_dir(path))
        except OSError as exc:
            if self.strict:
                raise
            logger.info("Skipping unreadable directory %s: %s", path, exc)
            return []


class _Walk:
    """State for one pattern walk: compiled name matchers and directory listings.

    Each directory is listed at most once per walk.
    """

    def __init__(self, globber: Globber, pattern: Pattern) -> None:
        self._globber = globber
        self._segments = pattern.segments
        self._directory_only = pattern.directory_only
        self._listings: dict[PurePath, list[Entry]] = {}
        self._matchers: dict[int, NameMatcher] = {}
        for i, seg in enumerate(pattern.segments):
            if isinstance(seg, LiteralSegment | WildcardSegment):
                self._matchers[i] = _compile_segment(seg, globber.case_sensitive)

    def run(self, start: PurePath) -> Iterator[GlobMatch]:
        return self._walk(start, True, 0)

    def _children(self, path: PurePath) -> list[Entry]:
        listing = self._listings.get(path)
        if listing is None:
            listing = self._listings[path] = self._globber.children(path)
        return listing

    def _is_last(self, index: int) -> bool:
        return index == len(self._segments) - 1

    def _walk(self, path: PurePath, is_dir: bool, index: int) -> Iterator[GlobMatch]:
        if index == len(self._segments):
            if is_dir or not self._directory_only:
                yield GlobMatch(path, is_dir)
            return

        seg = self._segments[index]

        if isinstance(seg, CurrentSegment):
            yield from self._walk(path, is_dir, index + 1)
        elif isinstance(seg, ParentSegment):
            yield from self._walk(_parent(path), True, index + 1)
        elif isinstance(seg, RecursiveSegment):
            yield from self._walk_recursive(path, index, 0)
        else:
            matcher = self._matchers[index]
            last = self._is_last(index)
            for entry in self._children(path):
                if not matcher(entry.name):
                    continue
                if not last and not entry.is_dir:
                    continue
                yield from self._walk(path / entry.name, entry.is_dir, index + 1)

    def _walk_recursive(self, path: PurePath, index: int, depth: int) -> Iterator[GlobMatch]:
        # Zero segments: continue with the rest of the pattern right here
        yield from self._walk(path, True, index + 1)

        globber = self._globber
        if globber.max_depth is not None and depth >= globber.max_depth:
            return

        last = self._is_last(index)
        for entry in self._children(path):
            child = path / entry.name
            if not entry.is_dir:
                # A trailing '**' also matches the files it walks past
                if last and not self._directory_only:
                    yield GlobMatch(child, False)
                continue
            if entry.is_link and not globber.follow_symlinks:
                if last and not self._directory_only:
                    yield GlobMatch(child, True)
                continue
            if globber.predicate is not None and not globber.predicate(child, entry):
                logger.debug("Predicate pruned %s", child)
                continue
            yield from self._walk_recursive(child, index, depth + 1)


def _compile_segment(seg: LiteralSegment | WildcardSegment, case_sensitive: bool) -> NameMatcher:
    if isinstance(seg, LiteralSegment):
        if case_sensitive:
            return seg.text.__eq__
        folded = seg.text.casefold()
        return lambda name: name.casefold() == folded

    regex = []
    for part in seg.parts:
        if isinstance(part, AnyRun):
            regex.append(".*")
        elif isinstance(part, AnyChar):
            regex.append(".")
        else:
            text = part.text if case_sensitive else part.text.casefold()
            regex.append(re.escape(text))
    compiled = re.compile("".join(regex), re.DOTALL)
    if case_sensitive:
        return lambda name: compiled.fullmatch(name) is not None
    # Same folding rule as literal segments: compare casefolded names
    return lambda name: compiled.fullmatch(name.casefold()) is not None


def _anchor(pattern: Pattern, base: PurePath) -> PurePath:
    """Return the directory a pattern starts walking from."""
    if pattern.root is None:
        return base
    flavour = type(base)
    if pattern.root.drive is None:
        return flavour("/")
    return flavour(f"{pattern.root.drive}:/")


def _parent(path: PurePath) -> PurePath:
    """Go up one level lexically, keeping '..' when there is no name to drop."""
    if path.name and path.name != "..":
        return path.parent
    if path.anchor and path == type(path)(path.anchor):
        return path
    return path / ".."


def glob(
    pattern: str,
    root: str | PurePath = ".",
    *,
    case_sensitive: bool = False,
    strict: bool = False,
    max_depth: int | None = None,
    follow_symlinks: bool = False,
    predicate: Predicate | None = None,
) -> list[PurePath]:
    """Convenience function: match ``pattern`` on the local disk and return the paths."""
    globber = Globber(
        LocalFileSystem(),
        case_sensitive=case_sensitive,
        strict=strict,
        max_depth=max_depth,
        predicate=predicate,
        follow_symlinks=follow_symlinks,
    )
    return [m.path for m in globber.match(pattern, root)]
