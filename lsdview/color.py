"""Terminal colours for listing elements, from a built-in theme or LS_COLORS."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Union

Color = Union[int, tuple[int, int, int]]
"""A colour: an index into the 256-colour palette or an ``(r, g, b)`` triple."""

# Palette indices of the sixteen basic colours.
BLACK, DARK_RED, DARK_GREEN, DARK_YELLOW, DARK_BLUE, DARK_MAGENTA, DARK_CYAN, GREY = range(8)
DARK_GREY, RED, GREEN, YELLOW, BLUE, MAGENTA, CYAN, WHITE = range(8, 16)

SUID_BACKGROUND: Color = 124  # Red3

_ATTRIBUTE_CODES = {
    "bold": 1,
    "dim": 2,
    "italic": 3,
    "underlined": 4,
    "slow_blink": 5,
    "rapid_blink": 6,
    "reverse": 7,
    "hidden": 8,
    "crossed_out": 9,
}
_CODE_ATTRIBUTES = {code: name for name, code in _ATTRIBUTE_CODES.items()}

_DEFAULT_LS_COLORS = (
    "rs=0:di=01;34:ln=01;36:mh=00:pi=40;33:so=01;35:do=01;35:bd=40;33;01:"
    "cd=40;33;01:or=40;31;01:mi=00:su=37;41:sg=30;43:ca=30;41:tw=30;42:"
    "ow=34;42:st=37;44:ex=01;32"
)


class ElemKind(enum.Enum):
    """The kinds of element that can be coloured."""

    FILE = "file"
    SYMLINK = "symlink"
    BROKEN_SYMLINK = "broken-symlink"
    MISSING_SYMLINK_TARGET = "missing-symlink-target"
    DIR = "dir"
    PIPE = "pipe"
    BLOCK_DEVICE = "block-device"
    CHAR_DEVICE = "char-device"
    SOCKET = "socket"
    SPECIAL = "special"
    READ = "read"
    WRITE = "write"
    EXEC = "exec"
    EXEC_STICKY = "exec-sticky"
    NO_ACCESS = "no-access"
    OCTAL = "octal"
    ACL = "acl"
    CONTEXT = "context"
    ARCHIVE = "archive"
    ATTRIBUTE_READ = "attribute-read"
    HIDDEN = "hidden"
    SYSTEM = "system"
    DAY_OLD = "day-old"
    HOUR_OLD = "hour-old"
    OLDER = "older"
    USER = "user"
    GROUP = "group"
    NON_FILE = "non-file"
    FILE_LARGE = "file-large"
    FILE_MEDIUM = "file-medium"
    FILE_SMALL = "file-small"
    INODE = "inode"
    LINKS = "links"
    TREE_EDGE = "tree-edge"
    GIT_STATUS = "git-status"


_INDICATORS = {
    ElemKind.SYMLINK: "ln",
    ElemKind.PIPE: "pi",
    ElemKind.SOCKET: "so",
    ElemKind.BLOCK_DEVICE: "bd",
    ElemKind.CHAR_DEVICE: "cd",
    ElemKind.BROKEN_SYMLINK: "or",
    ElemKind.MISSING_SYMLINK_TARGET: "mi",
}


@dataclass(frozen=True)
class Elem:
    """An element to colour, with the variant data its kind needs."""

    kind: ElemKind
    exec: bool = False
    uid: bool = False
    valid: bool = True
    status: str | None = None

    def has_suid(self) -> bool:
        """Whether this is a file or directory with a set-uid bit."""
        return self.kind in (ElemKind.FILE, ElemKind.DIR) and self.uid

    def indicator(self) -> str | None:
        """The LS_COLORS indicator key for this element, if it has one."""
        if self.kind is ElemKind.FILE:
            if self.uid:
                return None
            return "ex" if self.exec else "fi"
        if self.kind is ElemKind.DIR:
            return None if self.uid else "di"
        return _INDICATORS.get(self.kind)


def _theme_key(elem: Elem) -> tuple:
    kind = elem.kind
    if kind is ElemKind.FILE:
        return (kind, elem.exec, elem.uid)
    if kind is ElemKind.DIR:
        return (kind, elem.uid)
    if kind in (ElemKind.INODE, ElemKind.LINKS):
        return (kind, elem.valid)
    if kind is ElemKind.GIT_STATUS:
        return (kind, elem.status)
    return (kind,)


DEFAULT_THEME: Mapping[tuple, Color] = {
    (ElemKind.USER,): 230,
    (ElemKind.GROUP,): 187,
    (ElemKind.READ,): GREEN,
    (ElemKind.WRITE,): YELLOW,
    (ElemKind.EXEC,): RED,
    (ElemKind.EXEC_STICKY,): MAGENTA,
    (ElemKind.NO_ACCESS,): 245,
    (ElemKind.OCTAL,): 6,
    (ElemKind.ACL,): DARK_CYAN,
    (ElemKind.CONTEXT,): CYAN,
    (ElemKind.ATTRIBUTE_READ,): GREEN,
    (ElemKind.ARCHIVE,): YELLOW,
    (ElemKind.HIDDEN,): RED,
    (ElemKind.SYSTEM,): MAGENTA,
    (ElemKind.FILE, True, True): 40,
    (ElemKind.FILE, False, True): 184,
    (ElemKind.FILE, True, False): 40,
    (ElemKind.FILE, False, False): 184,
    (ElemKind.DIR, True): 33,
    (ElemKind.DIR, False): 33,
    (ElemKind.PIPE,): 44,
    (ElemKind.SYMLINK,): 44,
    (ElemKind.BROKEN_SYMLINK,): 124,
    (ElemKind.MISSING_SYMLINK_TARGET,): 124,
    (ElemKind.BLOCK_DEVICE,): 44,
    (ElemKind.CHAR_DEVICE,): 172,
    (ElemKind.SOCKET,): 44,
    (ElemKind.SPECIAL,): 44,
    (ElemKind.HOUR_OLD,): 40,
    (ElemKind.DAY_OLD,): 42,
    (ElemKind.OLDER,): 36,
    (ElemKind.NON_FILE,): 245,
    (ElemKind.FILE_SMALL,): 229,
    (ElemKind.FILE_MEDIUM,): 216,
    (ElemKind.FILE_LARGE,): 172,
    (ElemKind.INODE, True): 13,
    (ElemKind.INODE, False): 245,
    (ElemKind.LINKS, True): 13,
    (ElemKind.LINKS, False): 245,
    (ElemKind.TREE_EDGE,): 245,
}


def _color_code(color: Color) -> str:
    if isinstance(color, tuple):
        r, g, b = color
        return f"2;{r};{g};{b}"
    return f"5;{color}"


@dataclass(frozen=True)
class Style:
    """Foreground, background and text attributes applied to a string."""

    fg: Color | None = None
    bg: Color | None = None
    attributes: frozenset[str] = field(default_factory=frozenset)

    def apply(self, text: str) -> str:
        """Wrap ``text`` in the escape sequences for this style."""
        prefix = ""
        if self.fg is not None:
            prefix += f"\x1b[38;{_color_code(self.fg)}m"
        if self.bg is not None:
            prefix += f"\x1b[48;{_color_code(self.bg)}m"
        for code in sorted(_ATTRIBUTE_CODES[name] for name in self.attributes):
            prefix += f"\x1b[{code}m"
        if not prefix:
            return text
        if self.attributes:
            suffix = "\x1b[0m"
        else:
            suffix = ""
            if self.bg is not None:
                suffix += "\x1b[49m"
            if self.fg is not None:
                suffix += "\x1b[39m"
        return f"{prefix}{text}{suffix}"


def _extended_color(codes: list[int], pos: int) -> tuple[Color | None, int]:
    """Read a ``5;n`` or ``2;r;g;b`` colour starting at ``codes[pos]``."""
    if pos < len(codes) and codes[pos] == 5 and pos + 1 < len(codes):
        return codes[pos + 1], pos + 2
    if pos < len(codes) and codes[pos] == 2 and pos + 3 < len(codes):
        r, g, b = codes[pos + 1 : pos + 4]
        return (r, g, b), pos + 4
    return None, len(codes)


def style_from_ls_code(code: str) -> Style:
    """Parse an SGR parameter string such as ``01;34`` into a style."""
    codes = []
    for part in code.split(";"):
        part = part.strip()
        if part.isdigit():
            codes.append(int(part))
    fg: Color | None = None
    bg: Color | None = None
    attributes: set[str] = set()
    pos = 0
    while pos < len(codes):
        value = codes[pos]
        pos += 1
        if value == 0:
            fg, bg = None, None
            attributes.clear()
        elif value in _CODE_ATTRIBUTES:
            attributes.add(_CODE_ATTRIBUTES[value])
        elif 30 <= value <= 37:
            fg = value - 30
        elif value == 38:
            fg, pos = _extended_color(codes, pos)
        elif value == 39:
            fg = None
        elif 40 <= value <= 47:
            bg = value - 40
        elif value == 48:
            bg, pos = _extended_color(codes, pos)
        elif value == 49:
            bg = None
        elif 90 <= value <= 97:
            fg = value - 90 + 8
        elif 100 <= value <= 107:
            bg = value - 100 + 8
    return Style(fg, bg, frozenset(attributes))


def parse_ls_colors(value: str) -> dict[str, Style]:
    """Parse an LS_COLORS value into a mapping of keys to styles."""
    styles: dict[str, Style] = {}
    for entry in value.split(":"):
        key, sep, code = entry.partition("=")
        if sep and key:
            styles[key] = style_from_ls_code(code)
    return styles


class Colors:
    """Chooses the style of each element from a theme and LS_COLORS.

    ``theme`` is one of ``default``, ``no-color``, ``no-lscolors``,
    ``custom``, or the name of a legacy theme file.
    """

    def __init__(
        self,
        theme: str = "default",
        ls_colors: str | None = None,
        color_theme: Mapping[tuple, Color] | None = None,
    ) -> None:
        base = dict(DEFAULT_THEME if color_theme is None else color_theme)
        if theme == "no-color":
            self.theme: dict[tuple, Color] | None = None
        elif theme in ("default", "no-lscolors", "custom"):
            self.theme = base
        else:
            print(
                "Warning: the 'themes' directory is deprecated, use 'colors.yaml' instead.\n",
                flush=True,
            )
            self.theme = base

        if theme in ("no-color", "no-lscolors"):
            self.ls_colors: dict[str, Style] | None = None
        else:
            source = ls_colors if ls_colors is not None else os.environ.get("LS_COLORS")
            self.ls_colors = parse_ls_colors(source if source else _DEFAULT_LS_COLORS)

    def style(self, elem: Elem) -> Style:
        """Return the style used for ``elem``."""
        if self.ls_colors is not None:
            indicator = elem.indicator()
            if indicator is not None:
                return self.ls_colors.get(indicator, Style())
        return self._theme_style(elem)

    def _theme_style(self, elem: Elem) -> Style:
        if self.theme is None:
            return Style()
        fg = self.theme.get(_theme_key(elem))
        bg = SUID_BACKGROUND if elem.has_suid() else None
        return Style(fg=fg, bg=bg)

    def colorize(self, text: str, elem: Elem) -> str:
        """Return ``text`` styled for ``elem``."""
        return self.style(elem).apply(text)

    def colorize_using_path(self, text: str, path: str | os.PathLike[str], elem: Elem) -> str:
        """Style ``text`` by the file name pattern of ``path``, else by ``elem``."""
        if self.ls_colors is not None and elem.kind is ElemKind.FILE and not (
            elem.exec or elem.uid
        ):
            name = Path(path).name
            matches = [
                key for key in self.ls_colors
                if key.startswith("*") and name.endswith(key[1:])
            ]
            if matches:
                return self.ls_colors[max(matches, key=len)].apply(text)
        return self.colorize(text, elem)