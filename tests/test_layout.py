import os
from pathlib import Path

import pytest

from lsdview.grid import Cell, Grid, get_visible_width
from lsdview.layout import (
    display_folder_path,
    header_cells,
    should_display_folder_path,
    tree_prefixes,
)


def test_tree_prefixes_top_level_unchanged():
    assert tree_prefixes(0, "", False) == ("", "")
    assert tree_prefixes(0, "abc", True) == ("abc", "abc")


def test_tree_prefixes_middle_entry():
    assert tree_prefixes(1, "", False) == ("├── ", "│   ")


def test_tree_prefixes_last_entry():
    assert tree_prefixes(1, "", True) == ("└── ", "    ")


def test_tree_prefixes_nested():
    _, child = tree_prefixes(1, "", False)
    current, _ = tree_prefixes(2, child, True)
    assert current == "│   └── "


def test_tree_output_with_hidden_entry():
    grid = Grid(spaces=1)
    grid.add(Cell("one.d"))
    children = [".hidden", "two"]
    for idx, name in enumerate(children):
        current, _ = tree_prefixes(1, "", idx + 1 == len(children))
        grid.add(Cell(current + name))
    assert grid.fit_into_columns(1) == "one.d\n├── .hidden\n└── two\n"


def test_header_cells_all_blocks():
    headers = ["Permissions", "User", "Group", "Size", "Date Modified", "Name", "INode", "Links"]
    cells = [Cell("x") for _ in headers]
    result = header_cells(headers, cells, False)
    joined = "".join(cell.contents for cell in result)
    for header in headers:
        assert header in joined
    assert len(result) == len(headers)


def test_header_cells_width_follows_widest_cell():
    cells = [Cell("abcdefgh"), Cell("n"), Cell("ab"), Cell("nm")]
    result = header_cells(["Size", "Name"], cells, False)
    assert [cell.width for cell in result] == [8, 4]
    assert result[0].contents == "\x1b[4m  Size  \x1b[0m"
    assert get_visible_width(result[0].contents) == 8


def test_header_cells_odd_padding_goes_right():
    result = header_cells(["Size"], [Cell("abcdefg")], False)
    assert result[0].contents == "\x1b[4m Size  \x1b[0m"


def test_header_cells_no_headers():
    assert header_cells([], [Cell("a")], False) == []


def test_should_display_folder_path_cases():
    file_, dir_ = False, True
    assert should_display_folder_path(0, [file_]) is True
    assert should_display_folder_path(0, [dir_]) is False
    assert should_display_folder_path(0, [file_, dir_]) is True
    assert should_display_folder_path(0, [dir_, dir_]) is True
    assert should_display_folder_path(0, [file_, file_]) is True


def test_should_display_folder_path_with_links():
    link_to_dir = True
    assert should_display_folder_path(0, [link_to_dir]) is False
    assert should_display_folder_path(0, [False, link_to_dir]) is True
    assert should_display_folder_path(0, [True, link_to_dir]) is True


@pytest.mark.parametrize("flags", [[], [True], [False]])
def test_should_display_folder_path_when_nested(flags):
    assert should_display_folder_path(1, flags) is True


def test_should_display_folder_path_empty_top_level():
    assert should_display_folder_path(0, []) is False


def test_display_folder_path(tmp_path):
    dir_path = tmp_path / "dir"
    dir_path.mkdir()
    expected = f"\n{tmp_path}{os.sep}dir:\n"
    assert display_folder_path(dir_path) == expected


def test_display_folder_path_string():
    assert display_folder_path("some/where") == "\nsome/where:\n"
    assert display_folder_path(Path("x")) == "\nx:\n"