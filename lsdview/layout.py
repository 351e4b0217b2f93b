"""Layout helpers shared by the grid and tree listings."""

from __future__ import annotations

import os
from typing import Iterable, Sequence

from lsdview.grid import Cell, get_visible_width

EDGE = "\u251c\u2500\u2500"  # "├──"
LINE = "\u2502  "  # "│  "
CORNER = "\u2514\u2500\u2500"  # "└──"
BLANK = "   "

_UNDERLINE_START = "\x1b[4m"
_RESET = "\x1b[0m"


def tree_prefixes(depth: int, prefix: str, is_last: bool) -> tuple[str, str]:
    """Return the prefix for an entry and the prefix for its children.

    At depth 0 both are ``prefix`` unchanged; deeper entries get a branch
    edge (or a corner for the last entry), and their children a vertical
    line (or blank space below a corner).
    """
    if depth <= 0:
        return prefix, prefix
    if is_last:
        return f"{prefix}{CORNER} ", f"{prefix}{BLANK} "
    return f"{prefix}{EDGE} ", f"{prefix}{LINE} "


def _center(text: str, width: int) -> str:
    padding = max(width - len(text), 0)
    left = padding // 2
    return " " * left + text + " " * (padding - left)


def header_cells(headers: Sequence[str], cells: Iterable[Cell], hyperlink: bool) -> list[Cell]:
    """Build one centred, underlined header cell per column.

    Each column is as wide as its widest cell or its header, whichever is
    wider; ``cells`` are laid out left to right over ``len(headers)`` columns.
    """
    if not headers:
        return []
    num_columns = len(headers)
    widths = [get_visible_width(header, hyperlink) for header in headers]
    for index, cell in enumerate(cells):
        column = index % num_columns
        widths[column] = max(widths[column], cell.width)
    return [
        Cell(f"{_UNDERLINE_START}{_center(header, width)}{_RESET}", width)
        for header, width in zip(headers, widths)
    ]


def should_display_folder_path(depth: int, dir_flags: Sequence[bool]) -> bool:
    """Whether a directory's path is printed above its listing.

    ``dir_flags`` tells, for each listed entry, whether it is a directory
    or a symbolic link to one.
    """
    if depth > 0:
        return True
    folder_number = sum(1 for is_dir in dir_flags if is_dir)
    return folder_number > 1 or folder_number < len(dir_flags)


def display_folder_path(path: str | os.PathLike[str]) -> str:
    """Return the heading printed above a directory's listing."""
    return f"\n{os.fspath(path)}:\n"