"""Command-line interface for pathglob."""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Any

from pathglob.errors import PatternSyntaxError
from pathglob.filesystem import Entry


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    patterns: list[str]
    root: Path
    case_sensitive: bool
    strict: bool
    max_depth: int | None
    follow_symlinks: bool
    exclude: list[str]
    entry_type: str | None
    print0: bool
    tokens: bool
    debug: bool
    verbose: bool


class ConfigError(Exception):
    """Invalid value in a pathglob.toml file."""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="pathglob",
        description="Match glob patterns against the filesystem",
    )
    p.add_argument("patterns", nargs="+", metavar="PATTERN", help="Glob pattern (repeatable)")
    p.add_argument("-C", "--root", default=".", metavar="DIR", help="Directory relative patterns start from")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover pathglob.toml in the root)",
    )
    p.add_argument(
        "--case-sensitive",
        action="store_true",
        default=None,
        help="Compare names exactly (default: case-insensitive)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on unreadable directories instead of skipping them",
    )
    p.add_argument(
        "--max-depth",
        type=int,
        default=None,
        metavar="N",
        help="Maximum number of levels a '**' may descend",
    )
    p.add_argument("--type", choices=("f", "d"), dest="entry_type", help="Only files (f) or directories (d)")
    p.add_argument("-0", "--print0", action="store_true", help="Separate results with NUL")
    p.add_argument("--tokens", action="store_true", help="Print the token stream and exit")
    p.add_argument("--debug", action="store_true", help="Dump parsed patterns to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Log skipped directories to stderr")
    return p


def load_config(config_path: Path | None, root_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else root_dir / "pathglob.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file [glob] table < CLI flags.
    """
    root = Path(args.root)
    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, root)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid config file: {exc}") from exc

    section = config.get("glob", {})
    if not isinstance(section, dict):
        raise ConfigError("[glob] must be a table")

    case_sensitive = _config_bool(section, "case_sensitive", False)
    if args.case_sensitive is not None:
        case_sensitive = args.case_sensitive

    strict = _config_bool(section, "strict", False)
    if args.strict is not None:
        strict = args.strict

    max_depth: int | None = None
    cfg_depth = section.get("max_depth")
    if cfg_depth is not None:
        if not isinstance(cfg_depth, int) or isinstance(cfg_depth, bool) or cfg_depth < 0:
            raise ConfigError("glob.max_depth must be a non-negative integer")
        max_depth = cfg_depth
    if args.max_depth is not None:
        if args.max_depth < 0:
            raise ConfigError("--max-depth must be a non-negative integer")
        max_depth = args.max_depth

    follow_symlinks = _config_bool(section, "follow_symlinks", False)

    exclude: list[str] = []
    cfg_exclude = section.get("exclude")
    if cfg_exclude is not None:
        if not isinstance(cfg_exclude, list):
            raise ConfigError("glob.exclude must be a list of directory names")
        exclude.extend(str(name) for name in cfg_exclude)

    return CliOptions(
        patterns=list(args.patterns),
        root=root,
        case_sensitive=case_sensitive,
        strict=strict,
        max_depth=max_depth,
        follow_symlinks=follow_symlinks,
        exclude=exclude,
        entry_type=args.entry_type,
        print0=args.print0,
        tokens=args.tokens,
        debug=args.debug,
        verbose=args.verbose,
    )


def _config_bool(section: dict[str, Any], key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"glob.{key} must be true or false")
    return value


def find_matches(options: CliOptions) -> list[PurePath]:
    """Parse and match every pattern, returning the merged, sorted results."""
    from pathglob.debug import dump_pattern
    from pathglob.filesystem import LocalFileSystem
    from pathglob.matcher import Globber
    from pathglob.parser import parse

    excluded = frozenset(options.exclude)

    def keep_dir(path: PurePath, entry: Entry) -> bool:
        return entry.name not in excluded

    globber = Globber(
        LocalFileSystem(),
        case_sensitive=options.case_sensitive,
        strict=options.strict,
        max_depth=options.max_depth,
        predicate=keep_dir if excluded else None,
        follow_symlinks=options.follow_symlinks,
    )

    found: dict[PurePath, bool] = {}
    for source in options.patterns:
        pattern = parse(source)
        if options.debug:
            dump_pattern(pattern)
        for m in globber.match(pattern, options.root):
            found.setdefault(m.path, m.is_dir)

    if options.entry_type == "f":
        paths = [path for path, is_dir in found.items() if not is_dir]
    elif options.entry_type == "d":
        paths = [path for path, is_dir in found.items() if is_dir]
    else:
        paths = list(found)
    return sorted(paths, key=str)


def print_tokens(options: CliOptions) -> None:
    """Write the token stream of each pattern to stdout."""
    from pathglob.debug import dump_tokens
    from pathglob.lexer import tokenize

    for source in options.patterns:
        sys.stdout.write(f"{source}\n")
        dump_tokens(tokenize(source), file=sys.stdout)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.verbose:
        logging.basicConfig(
            level=logging.DEBUG if options.debug else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    if options.tokens:
        print_tokens(options)
        return 0

    try:
        paths = find_matches(options)
    except PatternSyntaxError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    end = "\0" if options.print0 else "\n"
    for path in paths:
        sys.stdout.write(f"{path}{end}")

    return 0


def run() -> None:
    """Console-script wrapper around main()."""
    sys.exit(main())
