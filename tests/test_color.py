import pytest

from lsdview.color import (
    DEFAULT_THEME,
    Colors,
    Elem,
    ElemKind,
    Style,
    parse_ls_colors,
    style_from_ls_code,
)


def test_color_new_no_color_theme():
    assert Colors("no-color").theme is None


def test_color_new_custom_theme():
    assert Colors("custom").theme == dict(DEFAULT_THEME)


def test_color_new_bad_legacy_custom_theme(capsys):
    colors = Colors("not-existed")
    assert colors.theme == dict(DEFAULT_THEME)
    assert "deprecated" in capsys.readouterr().out


@pytest.mark.parametrize(
    "exec_, uid, expected",
    [(True, True, 40), (False, True, 184), (True, False, 40), (False, False, 184)],
)
def test_default_theme_color(exec_, uid, expected):
    colors = Colors("no-lscolors")
    assert colors.style(Elem(ElemKind.FILE, exec=exec_, uid=uid)).fg == expected


def test_suid_gets_red_background():
    colors = Colors("no-lscolors")
    assert colors.style(Elem(ElemKind.DIR, uid=True)).bg == 124
    assert colors.style(Elem(ElemKind.DIR, uid=False)).bg is None


def test_has_suid():
    assert Elem(ElemKind.FILE, uid=True).has_suid() is True
    assert Elem(ElemKind.DIR, uid=True).has_suid() is True
    assert Elem(ElemKind.SYMLINK, uid=True).has_suid() is False


@pytest.mark.parametrize(
    "elem, expected",
    [
        (Elem(ElemKind.FILE, exec=True), "ex"),
        (Elem(ElemKind.FILE), "fi"),
        (Elem(ElemKind.FILE, uid=True), None),
        (Elem(ElemKind.DIR), "di"),
        (Elem(ElemKind.DIR, uid=True), None),
        (Elem(ElemKind.SYMLINK), "ln"),
        (Elem(ElemKind.BROKEN_SYMLINK), "or"),
        (Elem(ElemKind.MISSING_SYMLINK_TARGET), "mi"),
        (Elem(ElemKind.USER), None),
    ],
)
def test_indicator(elem, expected):
    assert elem.indicator() == expected


def test_style_apply_foreground_only():
    assert Style(fg=40).apply("x") == "\x1b[38;5;40mx\x1b[39m"


def test_style_apply_plain():
    assert Style().apply("plain") == "plain"


def test_style_apply_with_attributes_resets_all():
    out = Style(fg=4, attributes=frozenset({"bold"})).apply("d")
    assert out == "\x1b[38;5;4m\x1b[1md\x1b[0m"


def test_style_apply_rgb():
    assert Style(fg=(1, 2, 3)).apply("a") == "\x1b[38;2;1;2;3ma\x1b[39m"


def test_style_from_ls_code():
    assert style_from_ls_code("01;34") == Style(fg=4, attributes=frozenset({"bold"}))
    assert style_from_ls_code("40;31;01") == Style(fg=1, bg=0, attributes=frozenset({"bold"}))
    assert style_from_ls_code("38;5;208") == Style(fg=208)
    assert style_from_ls_code("38;2;10;20;30;48;5;1") == Style(fg=(10, 20, 30), bg=1)
    assert style_from_ls_code("91") == Style(fg=9)
    assert style_from_ls_code("00") == Style()


def test_parse_ls_colors():
    styles = parse_ls_colors("di=01;34:*.rs=32:bogus")
    assert styles == {
        "di": Style(fg=4, attributes=frozenset({"bold"})),
        "*.rs": Style(fg=2),
    }


def test_lscolors_take_precedence_for_indicators():
    colors = Colors("default", ls_colors="di=35")
    assert colors.style(Elem(ElemKind.DIR)).fg == 5
    assert colors.style(Elem(ElemKind.FILE)) == Style()
    assert colors.style(Elem(ElemKind.USER)).fg == 230


def test_colorize_no_color_is_plain():
    assert Colors("no-color").colorize("name", Elem(ElemKind.FILE)) == "name"


def test_colorize_starts_with_color():
    out = Colors("no-lscolors").colorize("name", Elem(ElemKind.FILE))
    assert out.startswith("\x1b[38;5;")
    assert out.endswith("[39m")


def test_colorize_using_path_extension():
    colors = Colors("default", ls_colors="*.rs=32:fi=33")
    assert colors.colorize_using_path("main.rs", "src/main.rs", Elem(ElemKind.FILE)) == (
        "\x1b[38;5;2mmain.rs\x1b[39m"
    )
    assert colors.colorize_using_path("a.txt", "a.txt", Elem(ElemKind.FILE)) == (
        "\x1b[38;5;3ma.txt\x1b[39m"
    )