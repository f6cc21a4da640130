import pytest

from neovide.style import Color, Colors, Style, UnderlineStyle


def make_colors():
    return Colors(
        foreground=Color(0.1, 0.1, 0.1, 0.1),
        background=Color(0.2, 0.1, 0.1, 0.1),
        special=Color(0.3, 0.1, 0.1, 0.1),
    )


DEFAULT_COLORS = Colors(
    foreground=Color(0.1, 0.2, 0.1, 0.1),
    background=Color(0.2, 0.2, 0.1, 0.1),
    special=Color(0.3, 0.2, 0.1, 0.1),
)


def test_foreground():
    colors = make_colors()
    style = Style(colors)
    assert style.foreground(DEFAULT_COLORS) == Color(0.1, 0.1, 0.1, 0.1)
    style.colors.foreground = None
    assert style.foreground(DEFAULT_COLORS) == DEFAULT_COLORS.foreground


def test_foreground_reverse():
    style = Style(make_colors())
    style.reverse = True
    assert style.foreground(DEFAULT_COLORS) == Color(0.2, 0.1, 0.1, 0.1)
    style.colors.background = None
    assert style.foreground(DEFAULT_COLORS) == DEFAULT_COLORS.background


def test_background():
    style = Style(make_colors())
    assert style.background(DEFAULT_COLORS) == Color(0.2, 0.1, 0.1, 0.1)
    style.colors.background = None
    assert style.background(DEFAULT_COLORS) == DEFAULT_COLORS.background


def test_background_reverse():
    style = Style(make_colors())
    style.reverse = True
    assert style.background(DEFAULT_COLORS) == Color(0.1, 0.1, 0.1, 0.1)
    style.colors.foreground = None
    assert style.background(DEFAULT_COLORS) == DEFAULT_COLORS.foreground


def test_special():
    style = Style(make_colors())
    assert style.special(DEFAULT_COLORS) == Color(0.3, 0.1, 0.1, 0.1)
    style.colors.special = None
    assert style.special(DEFAULT_COLORS) == style.foreground(DEFAULT_COLORS)


def test_new_style_defaults():
    style = Style(Colors())
    assert (style.reverse, style.italic, style.bold, style.strikethrough) == (
        False,
        False,
        False,
        False,
    )
    assert style.blend == 0
    assert style.underline is None


def test_styles_compare_by_value():
    first = Style(make_colors(), underline=UnderlineStyle.UNDER_CURL)
    second = Style(make_colors(), underline=UnderlineStyle.UNDER_CURL)
    assert first == second
    second.bold = True
    assert first != second


def test_missing_default_colour_raises():
    style = Style(Colors())
    with pytest.raises(ValueError):
        style.foreground(Colors())