"""Arranging rendered cells into columns that fit the terminal."""

from __future__ import annotations

import enum
import math
import re
from dataclasses import dataclass

from wcwidth import wcwidth

_COLOR_START = "\x1b["
_HYPERLINK_START = "\x1b]8;;"
_HYPERLINK_END = "\x1b\\"


def _char_width(char: str) -> int:
    width = wcwidth(char)
    # Control characters such as ESC occupy one column in the raw count;
    # the escape-sequence accounting below removes them again.
    return 1 if width < 0 else width


def get_visible_width(text: str, hyperlink: bool = False) -> int:
    """Return the number of terminal columns ``text`` occupies.

    Colour escape sequences are not counted, and neither are hyperlink
    escape sequences when ``hyperlink`` is true.
    """
    invisible = 0
    for match in re.finditer(re.escape(_COLOR_START), text):
        end = text.find("m", match.start())
        if end != -1:
            invisible += end - match.start() + 1

    if hyperlink:
        for match in re.finditer(re.escape(_HYPERLINK_START), text):
            end = text.find(_HYPERLINK_END, match.start())
            if end != -1:
                invisible += end - match.start() + len(_HYPERLINK_END)

    total = sum(_char_width(char) for char in text)
    return max(total - invisible, 0)


class Direction(enum.Enum):
    """The order in which cells fill the grid."""

    LEFT_TO_RIGHT = "left-to-right"
    TOP_TO_BOTTOM = "top-to-bottom"


@dataclass(frozen=True)
class Cell:
    """A piece of rendered text and the columns it occupies on screen."""

    contents: str
    width: int | None = None

    def __post_init__(self) -> None:
        if self.width is None:
            object.__setattr__(self, "width", get_visible_width(self.contents))
        elif self.width < 0:
            raise ValueError("cell width must not be negative")


class Grid:
    """Cells laid out in columns, separated by spaces or by a fixed string."""

    def __init__(
        self,
        spaces: int = 1,
        direction: Direction = Direction.LEFT_TO_RIGHT,
        separator: str | None = None,
    ) -> None:
        if spaces < 0:
            raise ValueError("spacing must not be negative")
        self.spaces = spaces
        self.direction = direction
        self.separator = separator
        self.cells: list[Cell] = []

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def _filling_width(self) -> int:
        if self.separator is not None:
            return get_visible_width(self.separator)
        return self.spaces

    def add(self, cell: Cell) -> None:
        """Append a cell to the grid."""
        self.cells.append(cell)

    def _column_index(self, index: int, num_lines: int, num_columns: int) -> int:
        if self.direction is Direction.LEFT_TO_RIGHT:
            return index % num_columns
        return index // num_lines

    def _column_widths(self, num_lines: int, num_columns: int) -> list[int]:
        widths = [0] * num_columns
        for index, cell in enumerate(self.cells):
            column = self._column_index(index, num_lines, num_columns)
            widths[column] = max(widths[column], cell.width)
        return widths

    def _cell_number(self, line: int, column: int, num_lines: int, num_columns: int) -> int:
        if self.direction is Direction.LEFT_TO_RIGHT:
            return line * num_columns + column
        return line + num_lines * column

    def _pad(self, cell: Cell, width: int) -> str:
        extra = width - cell.width
        if self.separator is not None:
            return cell.contents + " " * extra + self.separator
        return cell.contents + " " * (extra + self.spaces)

    def _render(self, num_lines: int, widths: list[int]) -> str:
        num_columns = len(widths)
        lines = []
        for line in range(num_lines):
            row = [
                (column, self.cells[number])
                for column in range(num_columns)
                if (number := self._cell_number(line, column, num_lines, num_columns))
                < len(self.cells)
            ]
            parts = [
                cell.contents if position == len(row) - 1 else self._pad(cell, widths[column])
                for position, (column, cell) in enumerate(row)
            ]
            lines.append("".join(parts) + "\n")
        return "".join(lines)

    def fit_into_columns(self, count: int) -> str:
        """Render the grid with exactly ``count`` columns."""
        if count < 1:
            raise ValueError("a grid needs at least one column")
        if not self.cells:
            return ""
        num_lines = math.ceil(len(self.cells) / count)
        return self._render(num_lines, self._column_widths(num_lines, count))

    def fit_into_width(self, width: int) -> str | None:
        """Render the grid in as few lines as fit into ``width`` columns.

        Returns None when no arrangement fits.
        """
        if not self.cells:
            return ""
        if max(cell.width for cell in self.cells) > width:
            return None
        total = len(self.cells)
        if total == 1:
            return self._render(1, [self.cells[0].width])

        for num_lines in range(1, total + 1):
            num_columns = math.ceil(total / num_lines)
            separators = (num_columns - 1) * self._filling_width
            if width < separators:
                continue
            available = width - separators
            widths = self._column_widths(num_lines, num_columns)
            used = sum(widths)
            fits = used <= available if num_lines == 1 else used < available
            if fits:
                return self._render(num_lines, widths)
        return None