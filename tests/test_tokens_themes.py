import pytest

from finboard.exceptions import ThemeError
from finboard.themes import DEFAULT_THEME, NEUTRAL, THEMES, VIBRANT, Theme, find_theme, get_theme, theme_css
from finboard.tokens import (
    Color,
    RadiusTokens,
    ShadowCollection,
    ShadowToken,
    SpacingTokens,
    TypographyTokens,
)


def test_color_hex_and_rgba():
    c = Color(1.0, 0.0, 0.2)
    assert c.hex == "#FF0033"
    assert c.rgba() == "rgba(255,0,51,1)"
    assert c.with_alpha(0.5).rgba() == "rgba(255,0,51,0.5)"


def test_color_rejects_out_of_range_channel():
    with pytest.raises(ThemeError):
        Color(1.2, 0, 0)
    with pytest.raises(ThemeError):
        Color(0, 0, 0, -0.1)


def test_spacing_semantic_defaults_follow_scale():
    s = SpacingTokens()
    assert (s.xs, s.sm, s.md, s.lg, s.xl, s.xxl, s.xxxl) == (4, 8, 16, 24, 32, 48, 64)
    assert s.card_padding == s.md
    assert s.section_spacing == s.lg
    assert SpacingTokens(md=20).component_padding == 20


def test_negative_spacing_and_radius_rejected():
    with pytest.raises(ThemeError):
        SpacingTokens(sm=-1)
    with pytest.raises(ThemeError):
        RadiusTokens(card=-4)


def test_radius_defaults():
    r = RadiusTokens()
    assert r.button == 8
    assert r.card == 12
    assert r.input == 4
    assert r.badge == 9999
    assert r.modal == 16


def test_typography_font_lookup():
    t = TypographyTokens()
    assert t.font("headline").size == 18
    assert t.font("headline").weight == 600
    assert t.font("large_title").size == 34
    with pytest.raises(ThemeError):
        t.font("jumbo")


def test_typography_requires_positive_sizes():
    with pytest.raises(ThemeError):
        TypographyTokens(body=0)


def test_shadow_css():
    assert ShadowToken.none().css() == "none"
    assert ShadowToken.md(0.12).css() == "0px 2px 4px rgba(0,0,0,0.12)"


def test_theme_requires_token_types():
    with pytest.raises(ThemeError):
        Theme(
            name="Broken",
            is_dark=False,
            colors={"primary": "#fff"},
            spacing=SpacingTokens(),
            radius=RadiusTokens(),
            typography=TypographyTokens(),
            shadows=ShadowCollection(),
        )


def test_every_theme_token_is_concrete():
    for theme in THEMES.values():
        tokens = theme.tokens()
        assert tokens
        assert all(value is not None for value in tokens.values())


def test_neutral_has_softer_corners():
    assert NEUTRAL.radius.button == 6
    assert NEUTRAL.radius.card == 8
    assert VIBRANT.radius.card == 12


def test_find_and_get_theme():
    assert find_theme("neutral").get_or_else(None) is NEUTRAL
    assert find_theme("Sepia").is_none()
    assert get_theme("Sepia") is DEFAULT_THEME
    assert get_theme(" VIBRANT ") is VIBRANT


def test_theme_css_contains_variables():
    css = theme_css(VIBRANT)
    assert f"--fb-colors-primary: {VIBRANT.colors.primary.rgba()};" in css
    assert "--fb-radius-card: 12px;" in css
    assert ".stApp" in css
