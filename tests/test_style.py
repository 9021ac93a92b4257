"""Tests for the semantic StyleRenderer."""

from __future__ import annotations

import pytest
from conftest import make_settings

from sahstyle.capability import ColorDepth
from sahstyle.color import Color
from sahstyle.icons import Icon
from sahstyle.style import Decoration, StyleRenderer, to_rich_color
from sahstyle.theme import DARK_THEME, LIGHT_THEME, ColorSlot, Theme

SEMANTIC_METHODS = [
    "primary",
    "secondary",
    "success",
    "error",
    "warning",
    "info",
    "muted",
    "emphasis",
    "header",
    "link",
]


def _renderer(
    theme: Theme = DARK_THEME, depth: ColorDepth = ColorDepth.TRUECOLOR
) -> StyleRenderer:
    return StyleRenderer(theme, make_settings(theme_name=theme.name, color_depth=depth))


class TestColorDisabled:
    """Rendering with color off returns text untouched."""

    @pytest.mark.parametrize("theme", [LIGHT_THEME, DARK_THEME])
    @pytest.mark.parametrize("method", SEMANTIC_METHODS)
    def test_semantic_methods_pass_through(self, theme: Theme, method: str) -> None:
        renderer = StyleRenderer(theme, make_settings(color_enabled=False))
        assert getattr(renderer, method)("x") == "x"

    def test_style_passes_through_with_decorations(self) -> None:
        renderer = StyleRenderer(DARK_THEME, make_settings(color_enabled=False))
        decorations = Decoration.BOLD | Decoration.UNDERLINE
        text = renderer.style("plain", "error", decorations, background="background")
        assert text == "plain"
        assert "\x1b" not in renderer.labelled(Icon.SUCCESS, ColorSlot.SUCCESS, "done")
        assert not renderer.color_enabled

    def test_enabled_without_depth_passes_through(self) -> None:
        """Test a hand-built settings object with depth NONE never emits escapes."""
        settings = make_settings(color_depth=ColorDepth.NONE, color_enabled=True)
        assert StyleRenderer(DARK_THEME, settings).success("x") == "x"


class TestColorDepths:
    """Escape sequences at each color depth."""

    def test_truecolor(self) -> None:
        assert _renderer().success("x") == "\x1b[38;2;129;199;132mx\x1b[0m"

    def test_ansi256(self) -> None:
        assert _renderer(depth=ColorDepth.ANSI256).primary("x") == "\x1b[38;5;75mx\x1b[0m"

    def test_ansi16_bright(self) -> None:
        renderer = _renderer(depth=ColorDepth.ANSI16)
        assert renderer.error("x") == "\x1b[91mx\x1b[0m"
        assert renderer.primary("x") == "\x1b[94mx\x1b[0m"

    def test_ansi16_standard(self) -> None:
        renderer = _renderer(LIGHT_THEME, ColorDepth.ANSI16)
        assert renderer.style("x", ColorSlot.FOREGROUND) == "\x1b[30mx\x1b[0m"

    def test_light_and_dark_differ(self) -> None:
        assert _renderer(LIGHT_THEME).success("x") != _renderer(DARK_THEME).success("x")

    def test_slot_by_name(self) -> None:
        renderer = _renderer()
        assert renderer.style("x", "SUCCESS") == renderer.success("x")

    def test_empty_text(self) -> None:
        assert _renderer().success("") == ""

    def test_no_slot_no_decoration(self) -> None:
        assert _renderer().style("x") == "x"

    def test_to_rich_color_none_depth(self) -> None:
        assert to_rich_color(Color(1, 2, 3), ColorDepth.NONE) is None


class TestDecorations:
    """Text attributes combined with palette colors."""

    def test_combined_decorations(self) -> None:
        decorations = Decoration.BOLD | Decoration.ITALIC | Decoration.UNDERLINE
        assert (
            _renderer().style("x", ColorSlot.EMPHASIS, decorations)
            == "\x1b[1;3;4;38;2;255;112;167mx\x1b[0m"
        )

    def test_order_does_not_matter(self) -> None:
        renderer = _renderer()
        first = renderer.style("x", ColorSlot.INFO, Decoration.DIM | Decoration.STRIKE)
        second = renderer.style("x", ColorSlot.INFO, Decoration.STRIKE | Decoration.DIM)
        assert first == second

    def test_dim_reverse_strike(self) -> None:
        decorations = Decoration.DIM | Decoration.REVERSE | Decoration.STRIKE
        assert _renderer().style("x", None, decorations) == "\x1b[2;7;9mx\x1b[0m"

    def test_header(self) -> None:
        assert _renderer(LIGHT_THEME, ColorDepth.ANSI16).header("x") == "\x1b[1;30mx\x1b[0m"

    def test_link(self) -> None:
        assert _renderer().link("x") == "\x1b[4;38;2;100;181;246mx\x1b[0m"

    def test_background(self) -> None:
        text = _renderer().style("x", ColorSlot.FOREGROUND, background=ColorSlot.BACKGROUND)
        assert text == "\x1b[38;2;238;238;238;48;2;18;18;18mx\x1b[0m"


class TestIcons:
    """Icon rendering follows the emoji setting, not the color setting."""

    @pytest.mark.parametrize("color_enabled", [True, False])
    def test_emoji_enabled(self, color_enabled: bool) -> None:
        renderer = StyleRenderer(DARK_THEME, make_settings(color_enabled=color_enabled))
        assert renderer.icon(Icon.SUCCESS) == "✓"

    def test_emoji_disabled(self) -> None:
        renderer = StyleRenderer(DARK_THEME, make_settings(emoji_enabled=False))
        assert renderer.icon("error") == "[X]"

    def test_theme_icon_overrides(self) -> None:
        icons = DARK_THEME.icons.with_overrides({"success": {"glyph": "✔"}})
        theme = Theme.custom("mine", DARK_THEME.palette, icons)
        assert StyleRenderer(theme, make_settings()).icon(Icon.SUCCESS) == "✔"

    def test_labelled(self) -> None:
        text = _renderer().labelled(Icon.SUCCESS, ColorSlot.SUCCESS, "done")
        assert text == "\x1b[38;2;129;199;132m✓ done\x1b[0m"

    def test_labelled_plain(self) -> None:
        renderer = StyleRenderer(
            DARK_THEME, make_settings(color_enabled=False, emoji_enabled=False)
        )
        assert renderer.labelled(Icon.WARNING, ColorSlot.WARNING, "careful") == "[!] careful"


class TestRichIntegration:
    """Rich theme built from the palette."""

    def test_rich_theme_styles(self) -> None:
        renderer = _renderer(depth=ColorDepth.ANSI256)
        styles = renderer.rich_theme().styles
        for slot in ColorSlot:
            assert styles[slot.value] == renderer.rich_style(slot)
        assert styles["header"].bold
        assert styles["link"].underline

    def test_rich_theme_logging_levels(self) -> None:
        renderer = _renderer(depth=ColorDepth.ANSI256)
        styles = renderer.rich_theme().styles
        assert styles["logging.level.warning"] == renderer.rich_style(ColorSlot.WARNING)
        assert styles["logging.level.info"] == renderer.rich_style(ColorSlot.INFO)
        assert styles["logging.level.error"].bold
        assert styles["logging.level.critical"].reverse

    def test_repr(self) -> None:
        text = repr(_renderer(LIGHT_THEME, ColorDepth.ANSI16))
        assert "light" in text
        assert "ANSI16" in text
