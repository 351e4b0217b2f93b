"""Loading and validation of the YAML configuration file."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Callable, Iterator

import yaml

COLOR_WHEN = ("always", "auto", "never")
ICON_WHEN = ("always", "auto", "never")
ICON_THEMES = ("fancy", "unicode")
DISPLAY_MODES = ("all", "almost-all", "directory-only")
LAYOUTS = ("grid", "tree", "oneline")
SIZE_MODES = ("default", "short", "bytes")
PERMISSION_MODES = ("rwx", "octal", "attributes", "disable")
SORT_COLUMNS = ("extension", "name", "time", "size", "version", "git", "none")
DIR_GROUPINGS = ("first", "last", "none")
HYPERLINK_MODES = ("always", "auto", "never")


class ConfigError(ValueError):
    """Raised when a configuration document is malformed."""


Validator = Callable[[Any, str], Any]


def _optional(check: Validator) -> Validator:
    def validate(value: Any, name: str) -> Any:
        return None if value is None else check(value, name)

    return validate


def _bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{name}: invalid type: {value!r}, expected a boolean")
    return value


def _uint(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"{name}: invalid value: {value!r}, expected a non-negative integer")
    return value


def _str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{name}: invalid type: {value!r}, expected a string")
    return value


def _str_list(value: Any, name: str) -> list[str]:
    if not isinstance(value, list):
        raise ConfigError(f"{name}: invalid type: {value!r}, expected a sequence")
    return [_str(item, name) for item in value]


def _choice(*choices: str) -> Validator:
    def validate(value: Any, name: str) -> str:
        if not isinstance(value, str) or value not in choices:
            expected = ", ".join(f"`{c}`" for c in choices)
            raise ConfigError(f"{name}: unknown variant {value!r}, expected one of {expected}")
        return value

    return validate


def _mapping(value: Any, name: str) -> dict:
    if not isinstance(value, dict):
        raise ConfigError(f"{name}: invalid type: {value!r}, expected a mapping")
    return value


def _read_section(
    data: dict, name: str, schema: dict[str, tuple[str, Validator]], strict: bool
) -> dict[str, Any]:
    """Validate the keys of ``data`` against ``schema`` (yaml key -> attribute, check)."""
    if strict:
        unknown = [key for key in data if key not in schema]
        if unknown:
            expected = ", ".join(f"`{k}`" for k in schema)
            raise ConfigError(f"unknown field `{unknown[0]}`, expected one of {expected}")
    values: dict[str, Any] = {}
    for key, (attr, check) in schema.items():
        label = f"{name}.{key}" if name else key
        values[attr] = _optional(check)(data.get(key), label)
    return values


@dataclass(frozen=True)
class ColorSection:
    """The ``color`` section."""

    when: str | None = None
    theme: str | None = None

    _SCHEMA = None


@dataclass(frozen=True)
class IconsSection:
    """The ``icons`` section."""

    when: str | None = None
    theme: str | None = None
    separator: str | None = None


@dataclass(frozen=True)
class RecursionSection:
    """The ``recursion`` section."""

    enabled: bool | None = None
    depth: int | None = None


@dataclass(frozen=True)
class SortingSection:
    """The ``sorting`` section."""

    column: str | None = None
    reverse: bool | None = None
    dir_grouping: str | None = None


@dataclass(frozen=True)
class TruncateOwnerSection:
    """The ``truncate-owner`` section."""

    after: int | None = None
    marker: str | None = None


_SECTION_SCHEMAS: dict[type, dict[str, tuple[str, Validator]]] = {
    ColorSection: {"when": ("when", _choice(*COLOR_WHEN)), "theme": ("theme", _str)},
    IconsSection: {
        "when": ("when", _choice(*ICON_WHEN)),
        "theme": ("theme", _choice(*ICON_THEMES)),
        "separator": ("separator", _str),
    },
    RecursionSection: {"enabled": ("enabled", _bool), "depth": ("depth", _uint)},
    SortingSection: {
        "column": ("column", _choice(*SORT_COLUMNS)),
        "reverse": ("reverse", _bool),
        "dir-grouping": ("dir_grouping", _choice(*DIR_GROUPINGS)),
    },
    TruncateOwnerSection: {"after": ("after", _uint), "marker": ("marker", _str)},
}


def _section(cls: type) -> Validator:
    def validate(value: Any, name: str) -> Any:
        data = _mapping(value, name)
        return cls(**_read_section(data, name, _SECTION_SCHEMAS[cls], strict=False))

    return validate


_CONFIG_SCHEMA: dict[str, tuple[str, Validator]] = {
    "classic": ("classic", _bool),
    "blocks": ("blocks", _str_list),
    "color": ("color", _section(ColorSection)),
    "date": ("date", _str),
    "dereference": ("dereference", _bool),
    "display": ("display", _choice(*DISPLAY_MODES)),
    "icons": ("icons", _section(IconsSection)),
    "ignore-globs": ("ignore_globs", _str_list),
    "indicators": ("indicators", _bool),
    "layout": ("layout", _choice(*LAYOUTS)),
    "recursion": ("recursion", _section(RecursionSection)),
    "size": ("size", _choice(*SIZE_MODES)),
    "permission": ("permission", _choice(*PERMISSION_MODES)),
    "sorting": ("sorting", _section(SortingSection)),
    "no-symlink": ("no_symlink", _bool),
    "total-size": ("total_size", _bool),
    "symlink-arrow": ("symlink_arrow", _str),
    "hyperlink": ("hyperlink", _choice(*HYPERLINK_MODES)),
    "header": ("header", _bool),
    "literal": ("literal", _bool),
    "truncate-owner": ("truncate_owner", _section(TruncateOwnerSection)),
}


def _home_dir() -> Path | None:
    try:
        return Path.home()
    except (RuntimeError, KeyError):
        return None


def expand_home(path: str | os.PathLike[str]) -> Path | None:
    """Expand a leading ``~`` component to the home directory.

    Returns the path unchanged when it does not start with ``~`` and None
    when the home directory cannot be determined.
    """
    p = Path(path)
    if not p.parts or p.parts[0] != "~":
        return p
    home = _home_dir()
    if home is None:
        return None
    rest = Path(*p.parts[1:]) if len(p.parts) > 1 else None
    if rest is None:
        return home
    if home == Path("/"):
        return rest
    return home / rest


def _platform_config_dir(home: Path | None) -> Path | None:
    if os.name == "nt":
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else None
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" if home else None
    return _xdg_config_home(home)


def _xdg_config_home(home: Path | None) -> Path | None:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)
    return home / ".config" if home else None


def config_paths() -> Iterator[Path]:
    """Yield the directories searched for the configuration, in order."""
    home = _home_dir()
    candidates = [
        home / ".config" if home else None,
        _platform_config_dir(home),
    ]
    if os.name != "nt":
        candidates.append(_xdg_config_home(home))
    return iter([c / "lsd" for c in candidates if c is not None])


@dataclass(frozen=True)
class Config:
    """Optional settings read from a configuration file."""

    classic: bool | None = None
    blocks: list[str] | None = None
    color: ColorSection | None = None
    date: str | None = None
    dereference: bool | None = None
    display: str | None = None
    icons: IconsSection | None = None
    ignore_globs: list[str] | None = None
    indicators: bool | None = None
    layout: str | None = None
    recursion: RecursionSection | None = None
    size: str | None = None
    permission: str | None = None
    sorting: SortingSection | None = None
    no_symlink: bool | None = None
    total_size: bool | None = None
    symlink_arrow: str | None = None
    hyperlink: str | None = None
    header: bool | None = None
    literal: bool | None = None
    truncate_owner: TruncateOwnerSection | None = None

    @classmethod
    def with_none(cls) -> "Config":
        """Return a config with every setting unset."""
        return cls()

    @classmethod
    def from_yaml(cls, text: str) -> "Config":
        """Parse a YAML document, raising ConfigError when it is invalid."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(str(exc)) from exc
        if data is None:
            return cls()
        data = _mapping(data, "config")
        return cls(**_read_section(data, "", _CONFIG_SCHEMA, strict=True))

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> "Config | None":
        """Read a config file; report problems on stderr and return None on failure."""
        file = Path(path)
        try:
            raw = file.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            print(f"Can not open config file {file}: {exc}.", file=sys.stderr)
            return None
        try:
            return cls.from_yaml(raw.decode("utf-8", errors="replace"))
        except ConfigError as exc:
            print(f"Configuration file {file} format error, {exc}.", file=sys.stderr)
            return None

    @classmethod
    def builtin(cls) -> "Config":
        """Return the built-in default configuration."""
        return cls.from_yaml(DEFAULT_CONFIG)

    @classmethod
    def load(cls) -> "Config":
        """Return the first readable config.yaml or config.yml, else the built-in one."""
        for directory in config_paths():
            yaml_file = directory / "config.yaml"
            yml_file = directory / "config.yml"
            if yaml_file.is_file():
                found = cls.from_file(yaml_file)
            elif yml_file.is_file():
                found = cls.from_file(yml_file)
            else:
                found = None
            if found is not None:
                return found
        return cls.builtin()


CONFIG_FIELDS = tuple(f.name for f in fields(Config))

DEFAULT_CONFIG = """---
# == Classic ==
# This is a shorthand to override some of the options to be backwards compatible
# with `ls`. It affects the "color"->"when", "sorting"->"dir-grouping", "date"
# and "icons"->"when" options.
# Possible values: false, true
classic: false

# == Blocks ==
# This specifies the columns and their order when using the long and the tree
# layout.
# Possible values: permission, user, group, context, size, date, name, inode, git
blocks:
  - permission
  - user
  - group
  - size
  - date
  - name

# == Color ==
color:
  # When to colorize the output.
  # When "classic" is set, this is set to "never".
  # Possible values: never, auto, always
  when: auto
  # How to colorize the output.
  # When "classic" is set, this is set to "no-color".
  # Possible values: default, no-color, no-lscolors, <theme-file-name>
  theme: default

# == Date ==
# This specifies the date format for the date column. The freeform format
# accepts an strftime like string.
# Possible values: date, locale, relative, +<date_format>
# date: date

# == Dereference ==
# Whether to dereference symbolic links.
# Possible values: false, true
dereference: false

# == Display ==
# What items to display. Do not specify this for the default behavior.
# Possible values: all, almost-all, directory-only
# display: all

# == Icons ==
icons:
  # When to use icons.
  # Possible values: always, auto, never
  when: auto
  # Which icon theme to use.
  # Possible values: fancy, unicode
  theme: fancy
  # The string between the icons and the name.
  separator: " "

# == Ignore Globs ==
# A list of globs to ignore when listing.
# ignore-globs:
#   - .git

# == Indicators ==
# Whether to add indicator characters to certain listed files.
indicators: false

# == Layout ==
# Possible values: grid, tree, oneline
layout: grid

# == Recursion ==
recursion:
  # Whether to enable recursion.
  enabled: false
  # How deep the recursion should go.
  # depth: 3

# == Size ==
# Possible values: default, short, bytes
size: default

# == Permission ==
# Possible value: rwx, octal, attributes, disable
# permission: rwx

# == Sorting ==
sorting:
  # Possible values: extension, name, time, size, version
  column: name
  reverse: false
  # Possible values: first, last, none
  dir-grouping: none

# == No Symlink ==
no-symlink: false

# == Total size ==
total-size: false

# == Hyperlink ==
# Possible values: always, auto, never
hyperlink: never

# == Symlink arrow ==
symlink-arrow: \u21d2

# == Literal ==
literal: false

# == Truncate owner ==
truncate-owner:
  # Number of characters to keep. By default, no truncation is done (empty value).
  after:
  # String to be appended to a name if truncated.
  marker: ""
"""