"""Design tokens: the leaf values every theme is built from.

Each token set is a frozen dataclass whose fields are concrete numbers or
colors. Semantic fields (``card_padding``, ``button`` radius, ...) default to
a value from the base scale when not given explicitly.
"""
from dataclasses import dataclass, fields
from typing import Optional

from finboard.exceptions import ThemeError


def _flat(obj) -> dict:
    return {f.name: getattr(obj, f.name) for f in fields(obj)}


def _set_default(obj, name: str, value) -> None:
    if getattr(obj, name) is None:
        object.__setattr__(obj, name, value)


@dataclass(frozen=True)
class Color:
    red: float
    green: float
    blue: float
    alpha: float = 1.0

    def __post_init__(self):
        for f in fields(self):
            channel = getattr(self, f.name)
            if not 0.0 <= channel <= 1.0:
                raise ThemeError(f"Color channel {f.name}={channel} is outside [0, 1]")

    @property
    def hex(self) -> str:
        return "#{:02X}{:02X}{:02X}".format(
            *(round(c * 255) for c in (self.red, self.green, self.blue))
        )

    def rgba(self) -> str:
        r, g, b = (round(c * 255) for c in (self.red, self.green, self.blue))
        return f"rgba({r},{g},{b},{self.alpha:g})"

    def with_alpha(self, alpha: float) -> "Color":
        return Color(self.red, self.green, self.blue, alpha)


WHITE = Color(1.0, 1.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0)
CLEAR = Color(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class ColorTokens:
    primary: Color
    primary_variant: Color
    secondary: Color
    secondary_variant: Color
    background: Color
    surface: Color
    surface_variant: Color
    on_primary: Color
    on_secondary: Color
    on_background: Color
    on_surface: Color
    success: Color
    warning: Color
    error: Color
    info: Color
    text_primary: Color
    text_secondary: Color
    text_tertiary: Color
    border: Color
    border_variant: Color

    def __post_init__(self):
        for name, value in _flat(self).items():
            if not isinstance(value, Color):
                raise ThemeError(f"Color token {name} must be a Color, got {type(value).__name__}")

    def as_dict(self) -> dict:
        return _flat(self)


@dataclass(frozen=True)
class SpacingTokens:
    xs: float = 4
    sm: float = 8
    md: float = 16
    lg: float = 24
    xl: float = 32
    xxl: float = 48
    xxxl: float = 64
    component_padding: Optional[float] = None
    section_spacing: Optional[float] = None
    card_padding: Optional[float] = None
    button_padding: Optional[float] = None
    icon_spacing: Optional[float] = None

    def __post_init__(self):
        _set_default(self, "component_padding", self.md)
        _set_default(self, "section_spacing", self.lg)
        _set_default(self, "card_padding", self.md)
        _set_default(self, "button_padding", self.sm)
        _set_default(self, "icon_spacing", self.xs)
        for name, value in _flat(self).items():
            if value < 0:
                raise ThemeError(f"Spacing {name}={value} cannot be negative")

    def as_dict(self) -> dict:
        return _flat(self)


@dataclass(frozen=True)
class RadiusTokens:
    none: float = 0
    xs: float = 2
    sm: float = 4
    md: float = 8
    lg: float = 12
    xl: float = 16
    xxl: float = 24
    full: float = 9999
    button: Optional[float] = None
    card: Optional[float] = None
    input: Optional[float] = None
    badge: Optional[float] = None
    modal: Optional[float] = None

    def __post_init__(self):
        _set_default(self, "button", self.md)
        _set_default(self, "card", self.lg)
        _set_default(self, "input", self.sm)
        _set_default(self, "badge", self.full)
        _set_default(self, "modal", self.xl)
        for name, value in _flat(self).items():
            if value < 0:
                raise ThemeError(f"Radius {name}={value} cannot be negative")

    def as_dict(self) -> dict:
        return _flat(self)


@dataclass(frozen=True)
class FontSpec:
    size: float
    weight: int


# text style -> (size field, weight field)
TEXT_STYLES = {
    "caption": ("caption", "regular"),
    "footnote": ("footnote", "regular"),
    "body": ("body", "regular"),
    "callout": ("callout", "regular"),
    "subhead": ("subhead", "medium"),
    "headline": ("headline", "semibold"),
    "title3": ("title3", "semibold"),
    "title2": ("title2", "bold"),
    "title1": ("title1", "bold"),
    "large_title": ("large_title", "bold"),
}


@dataclass(frozen=True)
class TypographyTokens:
    primary: str = "-apple-system, BlinkMacSystemFont, 'Helvetica Neue', sans-serif"
    secondary: str = "'SF Mono', Menlo, monospace"
    caption: float = 10
    footnote: float = 12
    body: float = 14
    callout: float = 15
    subhead: float = 16
    headline: float = 18
    title3: float = 20
    title2: float = 22
    title1: float = 28
    large_title: float = 34
    light: int = 300
    regular: int = 400
    medium: int = 500
    semibold: int = 600
    bold: int = 700
    line_height_tight: float = 1.2
    line_height_normal: float = 1.4
    line_height_relaxed: float = 1.6
    letter_spacing_tight: float = -0.5
    letter_spacing_normal: float = 0
    letter_spacing_wide: float = 0.5

    def __post_init__(self):
        for size_name, _ in TEXT_STYLES.values():
            if getattr(self, size_name) <= 0:
                raise ThemeError(f"Font size {size_name} must be positive")

    def font(self, style: str) -> FontSpec:
        try:
            size_name, weight_name = TEXT_STYLES[style]
        except KeyError:
            raise ThemeError(f"Unknown text style: {style}") from None
        return FontSpec(size=getattr(self, size_name), weight=getattr(self, weight_name))

    def as_dict(self) -> dict:
        return _flat(self)


@dataclass(frozen=True)
class ShadowToken:
    color: Color
    radius: float
    x: float
    y: float

    @classmethod
    def none(cls) -> "ShadowToken":
        return cls(CLEAR, 0, 0, 0)

    @classmethod
    def sm(cls, opacity: float = 0.1) -> "ShadowToken":
        return cls(BLACK.with_alpha(opacity), 2, 0, 1)

    @classmethod
    def md(cls, opacity: float = 0.1) -> "ShadowToken":
        return cls(BLACK.with_alpha(opacity), 4, 0, 2)

    @classmethod
    def lg(cls, opacity: float = 0.1) -> "ShadowToken":
        return cls(BLACK.with_alpha(opacity), 8, 0, 4)

    @classmethod
    def xl(cls, opacity: float = 0.15) -> "ShadowToken":
        return cls(BLACK.with_alpha(opacity), 12, 0, 6)

    @classmethod
    def xxl(cls, opacity: float = 0.2) -> "ShadowToken":
        return cls(BLACK.with_alpha(opacity), 20, 0, 10)

    def css(self) -> str:
        if self.radius == 0 and self.color.alpha == 0:
            return "none"
        return f"{self.x:g}px {self.y:g}px {self.radius:g}px {self.color.rgba()}"


@dataclass(frozen=True)
class ShadowCollection:
    none: ShadowToken = ShadowToken.none()
    subtle: ShadowToken = ShadowToken.sm()
    card: ShadowToken = ShadowToken.md()
    elevated: ShadowToken = ShadowToken.lg()
    modal: ShadowToken = ShadowToken.xl()
    dramatic: ShadowToken = ShadowToken.xxl()

    def __post_init__(self):
        for name, value in _flat(self).items():
            if not isinstance(value, ShadowToken):
                raise ThemeError(f"Shadow {name} must be a ShadowToken")

    def as_dict(self) -> dict:
        return _flat(self)
