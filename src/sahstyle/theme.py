"""Color palettes, themes, and the theme registry.

A ``Theme`` is plain data: a name, a kind tag, a complete ``ColorPalette`` and
an ``IconSet``. The two built-ins (``light`` and ``dark``) are module-level
constants; custom themes come from the UI config file and are built through
``Theme.custom()``, which fills optional palette slots from ``primary`` or
``foreground`` and rejects palettes missing a required slot.

Usage:
    from sahstyle.theme import ColorSlot, ThemeRegistry

    registry = ThemeRegistry()
    theme = registry.get("dark")
    theme.palette[ColorSlot.SUCCESS]  # Color(r=129, g=199, b=132)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, fields
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from sahstyle.color import Color
from sahstyle.exceptions import IncompletePaletteError, ThemeError, UnknownThemeError
from sahstyle.icons import DEFAULT_ICONS, IconSet

if TYPE_CHECKING:
    from sahstyle.config import CustomThemeSchema, UiConfig

logger = logging.getLogger(__name__)


class ColorSlot(str, Enum):
    """Semantic color roles every palette must fill."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    MUTED = "muted"
    EMPHASIS = "emphasis"
    BACKGROUND = "background"
    FOREGROUND = "foreground"


class ThemeKind(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    CUSTOM = "custom"


# Slots that must be supplied; everything else can be derived from them.
REQUIRED_SLOTS: frozenset[ColorSlot] = frozenset(
    {ColorSlot.PRIMARY, ColorSlot.FOREGROUND, ColorSlot.BACKGROUND}
)

# Optional slot -> slot it is copied from when absent.
SLOT_FALLBACKS: dict[ColorSlot, ColorSlot] = {
    ColorSlot.SECONDARY: ColorSlot.PRIMARY,
    ColorSlot.SUCCESS: ColorSlot.PRIMARY,
    ColorSlot.ERROR: ColorSlot.PRIMARY,
    ColorSlot.WARNING: ColorSlot.PRIMARY,
    ColorSlot.INFO: ColorSlot.PRIMARY,
    ColorSlot.MUTED: ColorSlot.FOREGROUND,
    ColorSlot.EMPHASIS: ColorSlot.FOREGROUND,
}


def _coerce_slot(slot: ColorSlot | str) -> ColorSlot:
    return slot if isinstance(slot, ColorSlot) else ColorSlot(str(slot).lower())


def _coerce_color(value: Color | str | tuple[int, int, int]) -> Color:
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        return Color.from_hex(value)
    r, g, b = value
    return Color.from_rgb(r, g, b)


@dataclass(frozen=True)
class ColorPalette:
    """One color per ``ColorSlot``. Always complete."""

    primary: Color
    secondary: Color
    success: Color
    error: Color
    warning: Color
    info: Color
    muted: Color
    emphasis: Color
    background: Color
    foreground: Color

    def __getitem__(self, slot: ColorSlot | str) -> Color:
        color: Color = getattr(self, _coerce_slot(slot).value)
        return color

    def __iter__(self) -> Iterator[tuple[ColorSlot, Color]]:
        for f in fields(self):
            yield ColorSlot(f.name), getattr(self, f.name)

    def to_dict(self) -> dict[str, str]:
        """Slot name -> hex string, in slot order."""
        return {slot.value: color.to_hex() for slot, color in self}

    @classmethod
    def from_partial(
        cls,
        colors: Mapping[ColorSlot | str, Color | str | tuple[int, int, int]],
        *,
        theme_name: str | None = None,
    ) -> ColorPalette:
        """Build a complete palette, filling optional slots from their fallbacks.

        Args:
            colors: Slot -> color (``Color``, hex string or RGB tuple).
            theme_name: Used in error messages only.

        Raises:
            IncompletePaletteError: If a required slot is missing.
            InvalidFormatError: If a color value cannot be parsed.
            ValueError: If a key is not a slot name.
        """
        given = {_coerce_slot(slot): _coerce_color(value) for slot, value in colors.items()}

        missing = {slot.value for slot in REQUIRED_SLOTS if slot not in given}
        if missing:
            label = f"Theme '{theme_name}'" if theme_name else "Palette"
            raise IncompletePaletteError(
                f"{label} is missing required color slots: {', '.join(sorted(missing))}",
                missing=missing,
                theme_name=theme_name,
            )

        resolved = dict(given)
        for slot, source in SLOT_FALLBACKS.items():
            if slot not in resolved:
                resolved[slot] = given[source]
                logger.debug("Palette slot %s falls back to %s", slot.value, source.value)

        return cls(**{slot.value: color for slot, color in resolved.items()})


@dataclass(frozen=True)
class Theme:
    """Named palette + icon set. Built-ins are constants; custom themes are data."""

    name: str
    kind: ThemeKind
    palette: ColorPalette
    icons: IconSet = DEFAULT_ICONS

    @property
    def is_dark(self) -> bool:
        if self.kind is ThemeKind.DARK:
            return True
        if self.kind is ThemeKind.LIGHT:
            return False
        return self.palette.background.luminance() < 0.5

    @staticmethod
    def light() -> Theme:
        return LIGHT_THEME

    @staticmethod
    def dark() -> Theme:
        return DARK_THEME

    @classmethod
    def custom(
        cls,
        name: str,
        palette: ColorPalette | Mapping[ColorSlot | str, Color | str | tuple[int, int, int]],
        icons: IconSet | None = None,
    ) -> Theme:
        """Build a custom theme, completing the palette at construction.

        Raises:
            IncompletePaletteError: If a required slot is missing after fallback.
        """
        if not name or not name.strip():
            raise ThemeError("Custom theme needs a non-empty name")
        if not isinstance(palette, ColorPalette):
            palette = ColorPalette.from_partial(palette, theme_name=name)
        return cls(
            name=name.strip(),
            kind=ThemeKind.CUSTOM,
            palette=palette,
            icons=icons or DEFAULT_ICONS,
        )


# =============================================================================
# Built-in themes
# =============================================================================

LIGHT_THEME = Theme(
    name="light",
    kind=ThemeKind.LIGHT,
    palette=ColorPalette(
        primary=Color(33, 150, 243),  # blue
        secondary=Color(156, 39, 176),  # purple
        success=Color(76, 175, 80),  # green
        error=Color(244, 67, 54),  # red
        warning=Color(255, 152, 0),  # orange
        info=Color(0, 188, 212),  # cyan
        muted=Color(117, 117, 117),  # medium gray
        emphasis=Color(255, 64, 129),  # pink
        background=Color(255, 255, 255),  # white
        foreground=Color(33, 33, 33),  # dark gray
    ),
)

DARK_THEME = Theme(
    name="dark",
    kind=ThemeKind.DARK,
    palette=ColorPalette(
        primary=Color(100, 181, 246),  # light blue
        secondary=Color(206, 147, 216),  # light purple
        success=Color(129, 199, 132),  # light green
        error=Color(239, 83, 80),  # light red
        warning=Color(255, 183, 77),  # light orange
        info=Color(77, 208, 225),  # light cyan
        muted=Color(158, 158, 158),  # medium gray
        emphasis=Color(255, 112, 167),  # light pink
        background=Color(18, 18, 18),  # near black
        foreground=Color(238, 238, 238),  # light gray
    ),
)

BUILTIN_THEMES: Mapping[str, Theme] = MappingProxyType(
    {
        LIGHT_THEME.name: LIGHT_THEME,
        DARK_THEME.name: DARK_THEME,
    }
)

DEFAULT_THEME_NAME = DARK_THEME.name


# =============================================================================
# Registry
# =============================================================================


def theme_from_schema(schema: CustomThemeSchema) -> Theme:
    """Build a custom ``Theme`` from a validated config entry."""
    icons = DEFAULT_ICONS.with_overrides(schema.icons) if schema.icons else DEFAULT_ICONS
    return Theme.custom(schema.name, schema.palette, icons)


class ThemeRegistry:
    """Built-in themes plus any custom themes, looked up case-insensitively.

    Custom themes shadow built-ins of the same name.
    """

    def __init__(self, custom_themes: Iterable[Theme] = ()) -> None:
        self._custom: dict[str, Theme] = {}
        for theme in custom_themes:
            key = theme.name.casefold()
            if key in self._custom:
                logger.warning("Duplicate custom theme '%s'; keeping the later one", theme.name)
            self._custom[key] = theme

    @classmethod
    def from_config(cls, config: UiConfig | None) -> ThemeRegistry:
        """Registry with the custom themes declared in a loaded UI config.

        Raises:
            IncompletePaletteError: If a custom theme lacks a required slot.
        """
        if config is None:
            return cls()
        return cls(theme_from_schema(entry) for entry in config.custom_themes)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def find(self, name: str) -> Theme | None:
        key = name.strip().casefold()
        if key in self._custom:
            return self._custom[key]
        return BUILTIN_THEMES.get(key)

    def get(self, name: str) -> Theme:
        """Look up a theme by name.

        Raises:
            UnknownThemeError: If no built-in or custom theme has this name.
        """
        theme = self.find(name)
        if theme is None:
            raise UnknownThemeError(
                f"Unknown theme '{name}'",
                theme_name=name,
                available=self.names(),
            )
        return theme

    def names(self) -> list[str]:
        builtin = [name for name in BUILTIN_THEMES if name not in self._custom]
        return builtin + [theme.name for theme in self._custom.values()]


__all__ = [
    "BUILTIN_THEMES",
    "DARK_THEME",
    "DEFAULT_THEME_NAME",
    "LIGHT_THEME",
    "REQUIRED_SLOTS",
    "SLOT_FALLBACKS",
    "ColorPalette",
    "ColorSlot",
    "Theme",
    "ThemeKind",
    "ThemeRegistry",
    "theme_from_schema",
]
