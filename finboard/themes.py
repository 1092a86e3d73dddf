"""The closed set of themes and helpers to look them up and render them."""
import logging
from dataclasses import dataclass

from finboard.exceptions import ThemeError
from finboard.functional import Maybe, Nothing, Some
from finboard.tokens import (
    WHITE,
    Color,
    ColorTokens,
    RadiusTokens,
    ShadowCollection,
    ShadowToken,
    SpacingTokens,
    TypographyTokens,
)

logger = logging.getLogger(__name__)

_TOKEN_TYPES = {
    "colors": ColorTokens,
    "spacing": SpacingTokens,
    "radius": RadiusTokens,
    "typography": TypographyTokens,
    "shadows": ShadowCollection,
}


@dataclass(frozen=True)
class Theme:
    name: str
    is_dark: bool
    colors: ColorTokens
    spacing: SpacingTokens
    radius: RadiusTokens
    typography: TypographyTokens
    shadows: ShadowCollection

    def __post_init__(self):
        if not self.name:
            raise ThemeError("Theme name is required")
        for attr, expected in _TOKEN_TYPES.items():
            value = getattr(self, attr)
            if not isinstance(value, expected):
                raise ThemeError(
                    f"Theme {self.name!r}: {attr} must be {expected.__name__}, "
                    f"got {type(value).__name__}"
                )

    def tokens(self) -> dict:
        """All leaf tokens keyed by ``group.name``."""
        flat = {}
        for attr in _TOKEN_TYPES:
            for key, value in getattr(self, attr).as_dict().items():
                flat[f"{attr}.{key}"] = value
        return flat


VIBRANT = Theme(
    name="Vibrant",
    is_dark=False,
    colors=ColorTokens(
        primary=Color(0.0, 0.7, 0.4),
        primary_variant=Color(0.0, 0.6, 0.35),
        secondary=Color(0.2, 0.4, 0.9),
        secondary_variant=Color(0.15, 0.35, 0.8),
        background=Color(0.98, 0.99, 1.0),
        surface=WHITE,
        surface_variant=Color(0.95, 0.97, 0.99),
        on_primary=WHITE,
        on_secondary=WHITE,
        on_background=Color(0.1, 0.1, 0.1),
        on_surface=Color(0.1, 0.1, 0.1),
        success=Color(0.0, 0.75, 0.3),
        warning=Color(1.0, 0.6, 0.0),
        error=Color(0.9, 0.2, 0.2),
        info=Color(0.2, 0.6, 0.9),
        text_primary=Color(0.1, 0.1, 0.1),
        text_secondary=Color(0.4, 0.4, 0.4),
        text_tertiary=Color(0.6, 0.6, 0.6),
        border=Color(0.85, 0.85, 0.85),
        border_variant=Color(0.9, 0.9, 0.9),
    ),
    spacing=SpacingTokens(),
    radius=RadiusTokens(),
    typography=TypographyTokens(),
    shadows=ShadowCollection(
        subtle=ShadowToken.sm(0.08),
        card=ShadowToken.md(0.12),
        elevated=ShadowToken.lg(0.15),
        modal=ShadowToken.xl(0.2),
        dramatic=ShadowToken.xxl(0.25),
    ),
)

# subdued palette, slightly softer corners
NEUTRAL = Theme(
    name="Neutral",
    is_dark=False,
    colors=ColorTokens(
        primary=Color(0.3, 0.4, 0.5),
        primary_variant=Color(0.25, 0.35, 0.45),
        secondary=Color(0.5, 0.45, 0.4),
        secondary_variant=Color(0.45, 0.4, 0.35),
        background=Color(0.97, 0.97, 0.97),
        surface=Color(0.99, 0.99, 0.99),
        surface_variant=Color(0.94, 0.94, 0.94),
        on_primary=WHITE,
        on_secondary=WHITE,
        on_background=Color(0.15, 0.15, 0.15),
        on_surface=Color(0.15, 0.15, 0.15),
        success=Color(0.2, 0.6, 0.3),
        warning=Color(0.8, 0.5, 0.1),
        error=Color(0.7, 0.25, 0.25),
        info=Color(0.3, 0.5, 0.7),
        text_primary=Color(0.15, 0.15, 0.15),
        text_secondary=Color(0.45, 0.45, 0.45),
        text_tertiary=Color(0.65, 0.65, 0.65),
        border=Color(0.8, 0.8, 0.8),
        border_variant=Color(0.9, 0.9, 0.9),
    ),
    spacing=SpacingTokens(),
    radius=RadiusTokens(button=6, card=8, input=4, badge=9999, modal=12),
    typography=TypographyTokens(),
    shadows=ShadowCollection(
        subtle=ShadowToken.sm(0.06),
        card=ShadowToken.md(0.08),
        elevated=ShadowToken.lg(0.1),
        modal=ShadowToken.xl(0.12),
        dramatic=ShadowToken.xxl(0.15),
    ),
)

THEMES = {theme.name: theme for theme in (VIBRANT, NEUTRAL)}
DEFAULT_THEME = VIBRANT


def find_theme(name: str) -> Maybe[Theme]:
    wanted = (name or "").strip().lower()
    for theme_name, theme in THEMES.items():
        if theme_name.lower() == wanted:
            return Some(theme)
    return Nothing()


def get_theme(name: str) -> Theme:
    found = find_theme(name)
    if found.is_none():
        logger.warning("Unknown theme %r, falling back to %s", name, DEFAULT_THEME.name)
    return found.get_or_else(DEFAULT_THEME)


def theme_css(theme: Theme, prefix: str = "--fb") -> str:
    """Render the theme as CSS custom properties plus a few base rules."""
    lines = [":root {"]
    for key, value in theme.tokens().items():
        group, name = key.split(".")
        prop = f"{prefix}-{group}-{name.replace('_', '-')}"
        if isinstance(value, Color):
            css_value = value.rgba()
        elif isinstance(value, ShadowToken):
            css_value = value.css()
        elif group in ("spacing", "radius"):
            css_value = f"{value:g}px"
        else:
            css_value = str(value)
        lines.append(f"  {prop}: {css_value};")
    lines.append("}")

    c, t, r, s = theme.colors, theme.typography, theme.radius, theme.shadows
    lines.extend([
        ".stApp {",
        f"  background-color: {c.background.rgba()};",
        f"  color: {c.text_primary.rgba()};",
        f"  font-family: {t.primary};",
        "}",
        ".fb-card {",
        f"  background: {c.surface.rgba()};",
        f"  border: 1px solid {c.border_variant.rgba()};",
        f"  border-radius: {r.card:g}px;",
        f"  padding: {theme.spacing.card_padding:g}px;",
        f"  box-shadow: {s.card.css()};",
        f"  margin-bottom: {theme.spacing.md:g}px;",
        "}",
    ])
    return "\n".join(lines)
