"""Semantic styling facade.

``StyleRenderer`` turns semantic requests (``success``, ``muted``, an icon id)
into final strings for one theme and one set of resolved settings. Colors are
quantised here (``Color.to_ansi16()`` / ``to_ansi256()``) and handed to Rich
already in the target color system, so Rich emits the SGR sequence without
applying its own downgrade.

``settings.color_enabled`` is the only switch: when it is False every method
returns its input unchanged.

Usage:
    renderer = StyleRenderer(theme, settings)
    print(renderer.labelled(Icon.SUCCESS, ColorSlot.SUCCESS, "Saved"))
    print(renderer.style("note", ColorSlot.MUTED, Decoration.ITALIC))
"""

from __future__ import annotations

from enum import Flag, auto

from rich.color import Color as RichColor
from rich.color import ColorSystem
from rich.style import Style as RichStyle
from rich.theme import Theme as RichTheme

from sahstyle.capability import ColorDepth
from sahstyle.color import Color
from sahstyle.icons import Icon
from sahstyle.resolver import ResolvedSettings
from sahstyle.theme import ColorSlot, Theme


class Decoration(Flag):
    """Text attributes; any combination is valid and order does not matter."""

    NONE = 0
    BOLD = auto()
    ITALIC = auto()
    UNDERLINE = auto()
    DIM = auto()
    REVERSE = auto()
    STRIKE = auto()


_RICH_COLOR_SYSTEMS: dict[ColorDepth, ColorSystem] = {
    ColorDepth.ANSI16: ColorSystem.STANDARD,
    ColorDepth.ANSI256: ColorSystem.EIGHT_BIT,
    ColorDepth.TRUECOLOR: ColorSystem.TRUECOLOR,
}


def to_rich_color(color: Color, depth: ColorDepth) -> RichColor | None:
    """Project a color onto a Rich color of exactly the given depth."""
    if depth is ColorDepth.TRUECOLOR:
        return RichColor.from_rgb(color.r, color.g, color.b)
    if depth is ColorDepth.ANSI256:
        return RichColor.from_ansi(color.to_ansi256())
    if depth is ColorDepth.ANSI16:
        return RichColor.from_ansi(color.to_ansi16())
    return None


def _coerce_slot(slot: ColorSlot | str) -> ColorSlot:
    return slot if isinstance(slot, ColorSlot) else ColorSlot(slot.lower())


class StyleRenderer:
    """Renders semantic requests for one theme + resolved settings."""

    def __init__(self, theme: Theme, settings: ResolvedSettings) -> None:
        self._theme = theme
        self._settings = settings
        self._color_system = (
            _RICH_COLOR_SYSTEMS.get(settings.color_depth) if settings.color_enabled else None
        )
        self._colors: dict[ColorSlot, RichColor | None] = {
            slot: to_rich_color(color, settings.color_depth) for slot, color in theme.palette
        }

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def settings(self) -> ResolvedSettings:
        return self._settings

    @property
    def color_enabled(self) -> bool:
        return self._color_system is not None

    # -------------------------------------------------------------------------
    # Generic
    # -------------------------------------------------------------------------

    def rich_style(
        self,
        slot: ColorSlot | str | None = None,
        decorations: Decoration = Decoration.NONE,
        *,
        background: ColorSlot | str | None = None,
    ) -> RichStyle:
        """Rich ``Style`` for a slot at this renderer's color depth."""
        return RichStyle(
            color=self._colors[_coerce_slot(slot)] if slot is not None else None,
            bgcolor=self._colors[_coerce_slot(background)] if background is not None else None,
            bold=Decoration.BOLD in decorations or None,
            italic=Decoration.ITALIC in decorations or None,
            underline=Decoration.UNDERLINE in decorations or None,
            dim=Decoration.DIM in decorations or None,
            reverse=Decoration.REVERSE in decorations or None,
            strike=Decoration.STRIKE in decorations or None,
        )

    def style(
        self,
        text: str,
        slot: ColorSlot | str | None = None,
        decorations: Decoration = Decoration.NONE,
        *,
        background: ColorSlot | str | None = None,
    ) -> str:
        """Apply a palette slot and decorations to text."""
        if self._color_system is None:
            return text
        return self.rich_style(slot, decorations, background=background).render(
            text, color_system=self._color_system
        )

    # -------------------------------------------------------------------------
    # Semantic shortcuts
    # -------------------------------------------------------------------------

    def primary(self, text: str) -> str:
        return self.style(text, ColorSlot.PRIMARY)

    def secondary(self, text: str) -> str:
        return self.style(text, ColorSlot.SECONDARY)

    def success(self, text: str) -> str:
        return self.style(text, ColorSlot.SUCCESS)

    def error(self, text: str) -> str:
        return self.style(text, ColorSlot.ERROR)

    def warning(self, text: str) -> str:
        return self.style(text, ColorSlot.WARNING)

    def info(self, text: str) -> str:
        return self.style(text, ColorSlot.INFO)

    def muted(self, text: str) -> str:
        return self.style(text, ColorSlot.MUTED)

    def emphasis(self, text: str) -> str:
        return self.style(text, ColorSlot.EMPHASIS)

    def header(self, text: str) -> str:
        return self.style(text, ColorSlot.FOREGROUND, Decoration.BOLD)

    def link(self, text: str) -> str:
        return self.style(text, ColorSlot.PRIMARY, Decoration.UNDERLINE)

    # -------------------------------------------------------------------------
    # Icons
    # -------------------------------------------------------------------------

    def icon(self, icon_id: Icon | str) -> str:
        """Glyph or ASCII fallback, depending on ``settings.emoji_enabled``."""
        return self._theme.icons.resolve(icon_id, self._settings.emoji_enabled)

    def labelled(self, icon_id: Icon | str, slot: ColorSlot | str, text: str) -> str:
        """Icon and text in one slot color, separated by a space."""
        return self.style(f"{self.icon(icon_id)} {text}", slot)

    # -------------------------------------------------------------------------
    # Rich integration
    # -------------------------------------------------------------------------

    def rich_theme(self) -> RichTheme:
        """Rich theme exposing the semantic slots as style names.

        Markup such as ``[success]done[/]`` then renders with the same
        quantised colors as ``success("done")``.
        """
        styles: dict[str, RichStyle] = {
            slot.value: self.rich_style(slot) for slot in ColorSlot
        }
        styles["header"] = self.rich_style(ColorSlot.FOREGROUND, Decoration.BOLD)
        styles["link"] = self.rich_style(ColorSlot.PRIMARY, Decoration.UNDERLINE)
        # Level names printed by rich.logging.RichHandler
        styles["logging.level.debug"] = self.rich_style(ColorSlot.MUTED)
        styles["logging.level.info"] = self.rich_style(ColorSlot.INFO)
        styles["logging.level.warning"] = self.rich_style(ColorSlot.WARNING)
        styles["logging.level.error"] = self.rich_style(ColorSlot.ERROR, Decoration.BOLD)
        styles["logging.level.critical"] = self.rich_style(
            ColorSlot.ERROR, Decoration.BOLD | Decoration.REVERSE
        )
        return RichTheme(styles)

    def __repr__(self) -> str:
        return (
            f"StyleRenderer(theme={self._theme.name!r}, "
            f"color_depth={self._settings.color_depth.name}, "
            f"color_enabled={self.color_enabled}, emoji={self._settings.emoji_enabled})"
        )


__all__ = [
    "Decoration",
    "StyleRenderer",
    "to_rich_color",
]
