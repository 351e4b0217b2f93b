"""Command-line interface definition and argument validation."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Sequence

_VERSION = "1.0.0"

COLOR_MODES = ("always", "auto", "never")
ICON_THEMES = ("fancy", "unicode")
PERMISSION_MODES = ("rwx", "octal", "attributes", "disable")
SIZE_MODES = ("default", "short", "bytes")
SORT_TYPES = ("size", "time", "version", "extension", "git", "none")
DIR_GROUPINGS = ("none", "first", "last")
BLOCK_NAMES = (
    "permission",
    "user",
    "group",
    "context",
    "size",
    "date",
    "name",
    "inode",
    "links",
    "git",
)
DATE_KEYWORDS = ("date", "relative", "locale")

_PLAIN_SPECIFIERS = frozenset("AaBbCcDdeFfGgHhIjklMmnPpRrSsTtUuVvWwXxYyZz+%")
_PADDED_SPECIFIERS = frozenset("CdefGgHIjklMmSsUuVWwYy")
_MISSING = "missing format specifier"


class TimeFormatError(ValueError):
    """Raised when a date-time format string holds an unknown specifier."""


def _expect(chars: Iterator[str], accepted: str, prefix: str) -> None:
    nxt = next(chars, None)
    if nxt is None:
        raise TimeFormatError(_MISSING)
    if nxt not in accepted:
        raise TimeFormatError(f"invalid format specifier: {prefix}{nxt}")


def validate_time_format(formatter: str) -> str:
    """Check a strftime-like format string and return it unchanged."""
    chars = iter(formatter)
    for c in chars:
        if c != "%":
            continue
        spec = next(chars, None)
        if spec is None:
            raise TimeFormatError(_MISSING)
        if spec == ".":
            nxt = next(chars, None)
            if nxt is None:
                raise TimeFormatError(_MISSING)
            if nxt == "f":
                continue
            if nxt in "369":
                _expect(chars, "f", f"%.{nxt}")
                continue
            raise TimeFormatError(f"invalid format specifier: %.{nxt}")
        if spec in ":#":
            _expect(chars, "z", f"%{spec}")
        elif spec in "-_0":
            _expect(chars, _PADDED_SPECIFIERS, f"%{spec}")
        elif spec in _PLAIN_SPECIFIERS:
            continue
        elif spec in "369":
            _expect(chars, "f", f"%{spec}")
        else:
            raise TimeFormatError(f"invalid format specifier: %{spec}")
    return formatter


def validate_date_argument(arg: str) -> str:
    """Validate the value of ``--date``."""
    if arg.startswith("+"):
        return validate_time_format(arg)
    if arg in DATE_KEYWORDS:
        return arg
    raise ValueError("possible values: date, locale, relative, +date-time-format")


@dataclass
class Cli:
    """Parsed command-line arguments."""

    inputs: list[Path] = field(default_factory=lambda: [Path(".")])
    all: bool = False
    almost_all: bool = False
    color: str | None = None
    icon: str | None = None
    icon_theme: str | None = None
    indicators: bool = False
    long: bool = False
    ignore_config: bool = False
    config_file: Path | None = None
    oneline: bool = False
    recursive: bool = False
    human_readable: bool = False
    tree: bool = False
    depth: int | None = None
    directory_only: bool = False
    permission: str | None = None
    size: str | None = None
    total_size: bool = False
    date: str | None = None
    timesort: bool = False
    sizesort: bool = False
    extensionsort: bool = False
    gitsort: bool = False
    versionsort: bool = False
    sort: str | None = None
    no_sort: bool = False
    reverse: bool = False
    group_dirs: str | None = None
    group_directories_first: bool = False
    blocks: list[str] = field(default_factory=list)
    classic: bool = False
    no_symlink: bool = False
    ignore_glob: list[str] = field(default_factory=list)
    inode: bool = False
    git: bool = False
    dereference: bool = False
    context: bool = False
    hyperlink: str | None = None
    header: bool = False
    truncate_owner_after: int | None = None
    truncate_owner_marker: str | None = None
    system_protected: bool = False
    literal: bool = False


_CLEARED_VALUES = {"sort": None}
_SORT_FLAGS = ("timesort", "sizesort", "extensionsort", "versionsort", "gitsort")


def _clear(namespace: argparse.Namespace, dests: Sequence[str]) -> None:
    for dest in dests:
        setattr(namespace, dest, _CLEARED_VALUES.get(dest, False))


class _OverridingFlag(argparse.Action):
    """A boolean switch that resets other options when it appears later."""

    def __init__(self, option_strings, dest, overrides=(), **kwargs):
        self.overrides = tuple(overrides)
        super().__init__(option_strings, dest, nargs=0, default=False, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        _clear(namespace, self.overrides)
        setattr(namespace, self.dest, True)


class _OverridingStore(argparse.Action):
    """A valued option that resets other options when it appears later."""

    def __init__(self, option_strings, dest, overrides=(), **kwargs):
        self.overrides = tuple(overrides)
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        _clear(namespace, self.overrides)
        setattr(namespace, self.dest, values)


def _usize(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid digit found in string: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"invalid digit found in string: {text!r}")
    return value


def _date_type(text: str) -> str:
    try:
        return validate_date_argument(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _block_list(text: str) -> list[str]:
    parts = text.split(",")
    for part in parts:
        if part not in BLOCK_NAMES:
            raise argparse.ArgumentTypeError(
                f"invalid value {part!r} (possible values: {', '.join(BLOCK_NAMES)})"
            )
    return parts


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the listing command."""
    parser = argparse.ArgumentParser(
        prog="lsd",
        description="An ls command with a lot of pretty colors and some other stuff.",
        add_help=False,
    )
    add = parser.add_argument
    add("inputs", metavar="FILE", nargs="*", type=Path)
    add("-a", "--all", action=_OverridingFlag, overrides=("almost_all",),
        help="Do not ignore entries starting with .")
    add("-A", "--almost-all", action=_OverridingFlag, overrides=("all",),
        help="Do not list implied . and ..")
    add("--color", metavar="MODE", choices=COLOR_MODES,
        help="When to use terminal colours [default: auto]")
    add("--icon", metavar="MODE", choices=COLOR_MODES,
        help="When to print the icons [default: auto]")
    add("--icon-theme", metavar="THEME", choices=ICON_THEMES,
        help="Whether to use fancy or unicode icons [default: fancy]")
    add("-F", "--classify", dest="indicators", action="store_true",
        help="Append indicator (one of */=>@|) at the end of the file names")
    add("-l", "--long", action="store_true", help="Display extended file metadata as a table")
    add("--ignore-config", action="store_true", help="Ignore the configuration file")
    add("--config-file", metavar="PATH", type=Path,
        help="Provide a custom lsd configuration file")
    add("-1", "--oneline", action="store_true", help="Display one entry per line")
    add("-R", "--recursive", action="store_true", help="Recurse into directories")
    add("-h", "--human-readable", action="store_true",
        help="For ls compatibility purposes ONLY, currently set by default")
    add("--tree", action="store_true",
        help="Recurse into directories and present the result as a tree")
    add("--depth", metavar="NUM", type=_usize,
        help="Stop recursing into directories after reaching specified depth")
    add("-d", "--directory-only", action="store_true",
        help="Display directories themselves, and not their contents")
    add("--permission", metavar="MODE", choices=PERMISSION_MODES,
        help="How to display permissions")
    add("--size", metavar="MODE", choices=SIZE_MODES,
        help="How to display size [default: default]")
    add("--total-size", action="store_true", help="Display the total size of directories")
    add("--date", type=_date_type,
        help="How to display date [possible values: date, locale, relative, +date-time-format]")
    sort_overrides = ("sort", "no_sort")
    add("-t", "--timesort", action=_OverridingFlag, overrides=sort_overrides,
        help="Sort by time modified")
    add("-S", "--sizesort", action=_OverridingFlag, overrides=sort_overrides,
        help="Sort by size")
    add("-X", "--extensionsort", action=_OverridingFlag, overrides=sort_overrides,
        help="Sort by file extension")
    add("-G", "--gitsort", action=_OverridingFlag, overrides=sort_overrides,
        help="Sort by git status")
    add("-v", "--versionsort", action=_OverridingFlag, overrides=sort_overrides,
        help="Natural sort of (version) numbers within text")
    add("--sort", metavar="TYPE", choices=SORT_TYPES, action=_OverridingStore,
        overrides=_SORT_FLAGS + ("no_sort",), help="Sort by TYPE instead of name")
    add("-U", "--no-sort", action=_OverridingFlag, overrides=_SORT_FLAGS + ("sort",),
        help="Do not sort. List entries in directory order")
    add("-r", "--reverse", action="store_true", help="Reverse the order of the sort")
    add("--group-dirs", metavar="MODE", choices=DIR_GROUPINGS,
        help="Sort the directories then the files")
    add("--group-directories-first", action="store_true",
        help="Groups the directories at the top before the files")
    add("--blocks", type=_block_list, action="extend", default=[],
        help="Specify the blocks that will be displayed and in what order")
    add("--classic", action="store_true", help="Enable classic mode (display output similar to ls)")
    add("--no-symlink", action="store_true", help="Do not display symlink target")
    add("-I", "--ignore-glob", metavar="PATTERN", action="append", default=[],
        help="Do not display files/directories with names matching the glob pattern(s)")
    add("-i", "--inode", action="store_true", help="Display the index number of each file")
    add("-g", "--git", action="store_true", help="Show git status on file and directory")
    add("-L", "--dereference", action="store_true",
        help="Show information for the file a symbolic link references")
    add("-Z", "--context", action="store_true",
        help="Print security context (label) of each file")
    add("--hyperlink", metavar="MODE", choices=COLOR_MODES,
        help="Attach hyperlink to filenames [default: never]")
    add("--header", action="store_true", help="Display block headers")
    add("--truncate-owner-after", metavar="NUM", type=_usize,
        help="Truncate the user and group names if they exceed a certain number of characters")
    add("--truncate-owner-marker", metavar="STR",
        help="Truncation marker appended to a truncated user or group name")
    add("--system-protected", action="store_true",
        help=("Includes files with the windows system protection flag set"
              if os.name == "nt" else argparse.SUPPRESS))
    add("-N", "--literal", action="store_true", help="Print entry names without quoting")
    add("--help", action="help", help="Print help information")
    add("-V", "--version", action="version", version=f"%(prog)s {_VERSION}",
        help="Print version information")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> Cli:
    """Parse command-line arguments into a :class:`Cli`."""
    parser = build_parser()
    ns = parser.parse_args(argv)
    if ns.recursive and ns.tree:
        parser.error("the argument '--recursive' cannot be used with '--tree'")
    if ns.directory_only and ns.recursive:
        parser.error("the argument '--directory-only' cannot be used with '--recursive'")
    if ns.directory_only and ns.depth is not None:
        parser.error("the argument '--directory-only' cannot be used with '--depth'")
    values = vars(ns)
    values["inputs"] = values["inputs"] or [Path(".")]
    return Cli(**values)