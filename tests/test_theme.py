import logging

from highlighting.theme import DEFAULT_COLORS, DEFAULT_THEME, Theme, TokenCategory


def test_every_category_has_a_style():
    for category in TokenCategory:
        assert DEFAULT_THEME.style_for(category).color.startswith("#")


def test_keyword_bold_comment_italic():
    assert DEFAULT_THEME.style_for(TokenCategory.KEYWORD).bold
    assert DEFAULT_THEME.style_for(TokenCategory.COMMENT).italic


def test_from_colors_overrides_and_falls_back(caplog):
    with caplog.at_level(logging.WARNING):
        theme = Theme.from_colors({"orange": "#AA5500", "green": "not-a-color"})
    assert theme.style_for(TokenCategory.STRING).color == "#AA5500"
    assert theme.style_for(TokenCategory.COMMENT).color == DEFAULT_COLORS["green"]
    assert "Invalid color for 'green'" in caplog.text


def test_from_colors_without_dict_uses_defaults():
    theme = Theme.from_colors(None)
    assert dict(theme.styles) == dict(DEFAULT_THEME.styles)
    assert theme.gutter == DEFAULT_THEME.gutter
