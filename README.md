# lsdview

`lsdview` holds the pieces behind a colourful, `ls`-like directory listing: the command-line
options, the YAML configuration file, colouring of listing elements, and the column layout of
rendered cells.

## Modules

- **`lsdview.cli`**: the command-line options. `build_parser()` returns an `argparse` parser and
  `parse_args(argv)` returns a `Cli` dataclass. When no path is given, `inputs` is `[Path(".")]`.
  Later sort switches (`-t`, `-S`, `-X`, `-G`, `-v`, `--sort`, `-U`) reset earlier ones, and so do
  `-a` and `-A`. `--recursive` cannot be combined with `--tree`, and `--directory-only` cannot be
  combined with `--recursive` or `--depth`. `validate_date_argument` accepts `date`, `relative`,
  `locale` or a `+format`. `validate_time_format` checks strftime-like specifiers and raises
  `TimeFormatError`, a `ValueError`, for unknown ones.
- **`lsdview.settings`**: the `Configurable` base class. A subclass names a command-line attribute
  (`cli_attr`), an environment variable (`env_var`) and a dotted path into the configuration
  (`config_attr`). `configure_from(cli, config)` takes the first of these that gives a value, in
  that order, and falls back to the class's default.
- **`lsdview.config`**: the YAML configuration (`Config`) and its sections (`ColorSection`,
  `IconsSection`, `RecursionSection`, `SortingSection`, `TruncateOwnerSection`).
  `Config.from_yaml` raises `ConfigError` for malformed documents. `Config.from_file` reports
  problems on stderr and returns `None`. `Config.builtin()` returns the built-in defaults.
  `config_paths()` yields the searched directories and `expand_home` expands a leading `~`.
- **`lsdview.color`**: colouring of listing elements. It provides `Elem` and `ElemKind`, `Style`
  (which renders ANSI escape sequences) and `Colors`. `Colors` picks a style from `LS_COLORS` when
  the element has an indicator key, and otherwise from a 256-colour theme. Set-uid files and
  directories get a red background. `parse_ls_colors` and `style_from_ls_code` read `LS_COLORS`
  values.
- **`lsdview.grid`**: `Cell` and `Grid`. `Grid.fit_into_columns(n)` renders exactly `n` columns.
  `Grid.fit_into_width(w)` uses as few lines as fit into `w` terminal columns, and returns `None` if
  none do. `get_visible_width` measures text as a terminal shows it: colour escapes are not counted,
  nor are hyperlink escapes when asked, and wide characters count as two columns.
- **`lsdview.layout`**: helpers for tree and grid output. `tree_prefixes` gives the `├──`, `└──`
  and `│` branch prefixes. `header_cells` builds centred, underlined column headers.
  `should_display_folder_path` and `display_folder_path` deal with directory headings.

## Examples

Check a custom date format:

```python
from lsdview.cli import validate_time_format, TimeFormatError

validate_time_format("%Y-%m-%d %H:%M")   # returns the format unchanged
try:
    validate_time_format("%Q")
except TimeFormatError as err:
    print(err)                           # invalid format specifier: %Q
```

Read configuration:

```python
from lsdview.config import Config

config = Config.from_yaml("classic: true")
assert config.classic is True

defaults = Config.builtin()   # the built-in default configuration
current = Config.load()       # the first config file that parses, or the built-in defaults
```

Measure text and lay it out:

```python
from lsdview.grid import Cell, Grid, get_visible_width

assert get_visible_width("日本語", False) == 6
assert get_visible_width("\x1b[38;5;184mfile\x1b[39m", False) == 4

grid = Grid(spaces=2)
for name in ["alpha", "beta", "gamma", "delta"]:
    grid.add(Cell(name))
print(grid.fit_into_columns(2), end="")
```

## Configuration file

`Config.load` searches an `lsd` directory under each of these places in turn: `~/.config`, the
platform's configuration directory, and (outside Windows) `$XDG_CONFIG_HOME`. In each directory it
reads `config.yaml`, or `config.yml` if there is no `config.yaml`. The first file that parses is
used. Unknown top-level keys are errors, and so are values of the wrong type or outside the allowed
choices. If no file is found, or none parses, the built-in defaults apply.

## What this package does not do

There is no command to run. The package parses the listing options, but it does not read file
metadata, walk directories, sort entries, draw icons or show git status. It also does not print a
listing. Those parts are left to the code that uses these building blocks.

## Requirements

Python 3.10 or later, with `pyyaml` and `wcwidth`. The tests need `pytest`.