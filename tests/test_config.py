from pathlib import Path

import pytest

from lsdview.config import (
    ColorSection,
    Config,
    ConfigError,
    IconsSection,
    RecursionSection,
    SortingSection,
    TruncateOwnerSection,
    config_paths,
    expand_home,
)


@pytest.fixture
def home(tmp_path, monkeypatch):
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USERPROFILE", str(home_dir))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    return home_dir


def test_read_default():
    c = Config.builtin()
    assert c == Config(
        classic=False,
        blocks=["permission", "user", "group", "size", "date", "name"],
        color=ColorSection(when="auto", theme="default"),
        date=None,
        dereference=False,
        display=None,
        icons=IconsSection(when="auto", theme="fancy", separator=" "),
        ignore_globs=None,
        indicators=False,
        layout="grid",
        recursion=RecursionSection(enabled=False, depth=None),
        size="default",
        permission=None,
        sorting=SortingSection(column="name", reverse=False, dir_grouping="none"),
        no_symlink=False,
        total_size=False,
        symlink_arrow="\u21d2",
        hyperlink="never",
        header=None,
        literal=False,
        truncate_owner=TruncateOwnerSection(after=None, marker=""),
    )


def test_read_config_ok():
    assert Config.from_yaml("classic: true").classic is True


def test_read_config_bad_bool():
    with pytest.raises(ConfigError):
        Config.from_yaml("classic: notbool")


def test_read_config_file_not_found():
    assert Config.from_file("not-existed") is None


def test_read_bad_display():
    with pytest.raises(ConfigError):
        Config.from_yaml("display: bad")


def test_unknown_top_level_field_rejected():
    with pytest.raises(ConfigError, match="unknown field"):
        Config.from_yaml("colour: auto")


def test_negative_depth_rejected():
    with pytest.raises(ConfigError):
        Config.from_yaml("recursion:\n  depth: -1\n")


def test_kebab_case_keys():
    c = Config.from_yaml("sorting:\n  dir-grouping: first\nignore-globs:\n  - .git\n")
    assert c.sorting == SortingSection(column=None, reverse=None, dir_grouping="first")
    assert c.ignore_globs == [".git"]


def test_empty_document_is_all_none():
    assert Config.from_yaml("") == Config.with_none()


def test_with_none_has_no_values():
    c = Config.with_none()
    assert c.classic is None and c.blocks is None and c.truncate_owner is None


def test_from_file_format_error_reports(tmp_path, capsys):
    bad = tmp_path / "config.yaml"
    bad.write_text("layout: diagonal\n", encoding="utf-8")
    assert Config.from_file(bad) is None
    assert "format error" in capsys.readouterr().err


def test_from_file_reads_values(tmp_path):
    good = tmp_path / "config.yaml"
    good.write_text("layout: tree\nheader: true\n", encoding="utf-8")
    c = Config.from_file(good)
    assert c.layout == "tree"
    assert c.header is True


def test_load_finds_user_config(home):
    directory = home / ".config" / "lsd"
    directory.mkdir(parents=True)
    (directory / "config.yml").write_text("classic: true\n", encoding="utf-8")
    assert Config.load().classic is True


def test_load_falls_back_to_builtin(home):
    assert Config.load() == Config.builtin()


def test_config_paths_first_is_home_config(home):
    paths = list(config_paths())
    assert paths[0] == home / ".config" / "lsd"
    assert all(p.name == "lsd" for p in paths)


def test_expand_home_without_tilde():
    assert expand_home("some/path") == Path("some/path")


def test_expand_home_tilde_alone(home):
    assert expand_home("~") == home


def test_expand_home_with_subpath(home):
    assert expand_home("~/.config/lsd") == home / ".config" / "lsd"


def test_expand_home_tilde_prefix_not_component(home):
    assert expand_home("~user/x") == Path("~user/x")