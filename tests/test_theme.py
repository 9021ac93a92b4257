"""Tests for palettes, themes and the theme registry."""

from __future__ import annotations

import logging

import pytest

from sahstyle.color import Color
from sahstyle.config import CustomThemeSchema, UiConfig
from sahstyle.exceptions import (
    IncompletePaletteError,
    InvalidFormatError,
    ThemeError,
    UnknownThemeError,
)
from sahstyle.icons import DEFAULT_ICONS, Icon
from sahstyle.theme import (
    BUILTIN_THEMES,
    DARK_THEME,
    LIGHT_THEME,
    REQUIRED_SLOTS,
    ColorPalette,
    ColorSlot,
    Theme,
    ThemeKind,
    ThemeRegistry,
    theme_from_schema,
)

MINIMAL = {"primary": "#112233", "foreground": "#eeeeee", "background": "#000000"}


class TestBuiltinThemes:
    """Tests for the built-in light and dark themes."""

    def test_constructors_return_constants(self) -> None:
        assert Theme.light() is LIGHT_THEME
        assert Theme.dark() is DARK_THEME

    def test_light_palette(self) -> None:
        palette = Theme.light().palette
        assert palette.primary == Color(33, 150, 243)
        assert palette.error == Color(244, 67, 54)
        assert palette.background == Color(255, 255, 255)
        assert palette.foreground == Color(33, 33, 33)

    def test_dark_palette(self) -> None:
        palette = Theme.dark().palette
        assert palette.primary == Color(100, 181, 246)
        assert palette.success == Color(129, 199, 132)
        assert palette.background == Color(18, 18, 18)
        assert palette.foreground == Color(238, 238, 238)

    def test_kinds(self) -> None:
        assert LIGHT_THEME.kind is ThemeKind.LIGHT
        assert DARK_THEME.kind is ThemeKind.DARK
        assert DARK_THEME.is_dark
        assert not LIGHT_THEME.is_dark

    def test_builtins_use_default_icons(self) -> None:
        assert LIGHT_THEME.icons is DEFAULT_ICONS
        assert DARK_THEME.icons is DEFAULT_ICONS

    def test_builtin_table_is_read_only(self) -> None:
        assert dict(BUILTIN_THEMES) == {"light": LIGHT_THEME, "dark": DARK_THEME}
        with pytest.raises(TypeError):
            BUILTIN_THEMES["light"] = DARK_THEME  # type: ignore[index]
        assert BUILTIN_THEMES["light"] is LIGHT_THEME

    def test_registry_unaffected_by_builtin_table_access(self) -> None:
        with pytest.raises(TypeError):
            del BUILTIN_THEMES["dark"]  # type: ignore[attr-defined]
        assert ThemeRegistry().get("dark") is DARK_THEME


class TestColorPalette:
    """Tests for ColorPalette access and partial construction."""

    def test_index_by_slot_or_name(self) -> None:
        palette = DARK_THEME.palette
        assert palette[ColorSlot.SUCCESS] == palette.success
        assert palette["SUCCESS"] == palette.success

    def test_iterates_every_slot(self) -> None:
        slots = [slot for slot, _ in DARK_THEME.palette]
        assert slots == list(ColorSlot)

    def test_to_dict(self) -> None:
        data = LIGHT_THEME.palette.to_dict()
        assert data["primary"] == "#2196f3"
        assert list(data) == [slot.value for slot in ColorSlot]

    def test_optional_slots_fall_back(self) -> None:
        """Test optional slots copy primary or foreground."""
        palette = ColorPalette.from_partial(MINIMAL)
        assert palette.secondary == palette.primary
        assert palette.error == palette.primary
        assert palette.info == palette.primary
        assert palette.muted == palette.foreground
        assert palette.emphasis == palette.foreground

    def test_given_slots_are_kept(self) -> None:
        palette = ColorPalette.from_partial({**MINIMAL, "error": "#ff0000"})
        assert palette.error == Color(255, 0, 0)
        assert palette.warning == Color(0x11, 0x22, 0x33)

    def test_accepts_colors_and_tuples(self) -> None:
        palette = ColorPalette.from_partial(
            {
                ColorSlot.PRIMARY: Color(1, 2, 3),
                "foreground": (4, 5, 6),
                "background": "000",
            }
        )
        assert palette.primary == Color(1, 2, 3)
        assert palette.foreground == Color(4, 5, 6)

    def test_missing_required_slot(self) -> None:
        colors = {k: v for k, v in MINIMAL.items() if k != "primary"}
        with pytest.raises(IncompletePaletteError) as exc_info:
            ColorPalette.from_partial(colors, theme_name="broken")
        assert exc_info.value.missing == ["primary"]
        assert exc_info.value.theme_name == "broken"
        assert "broken" in str(exc_info.value)

    def test_empty_palette_lists_all_required(self) -> None:
        with pytest.raises(IncompletePaletteError) as exc_info:
            ColorPalette.from_partial({})
        assert exc_info.value.missing == sorted(slot.value for slot in REQUIRED_SLOTS)

    def test_all_identical_colors_accepted(self) -> None:
        """Test a palette where every slot has the same color is valid."""
        palette = ColorPalette.from_partial({slot: "#808080" for slot in ColorSlot})
        assert all(color == Color(128, 128, 128) for _, color in palette)

    def test_bad_hex_value(self) -> None:
        with pytest.raises(InvalidFormatError):
            ColorPalette.from_partial({**MINIMAL, "error": "#zzz"})

    def test_unknown_slot_name(self) -> None:
        with pytest.raises(ValueError):
            ColorPalette.from_partial({**MINIMAL, "accent": "#000000"})


class TestCustomTheme:
    """Tests for Theme.custom."""

    def test_builds_from_mapping(self) -> None:
        theme = Theme.custom("ocean", MINIMAL)
        assert theme.name == "ocean"
        assert theme.kind is ThemeKind.CUSTOM
        assert theme.palette.primary == Color(0x11, 0x22, 0x33)
        assert theme.icons is DEFAULT_ICONS

    def test_missing_required_slot(self) -> None:
        with pytest.raises(IncompletePaletteError):
            Theme.custom("ocean", {"primary": "#112233"})

    def test_empty_name(self) -> None:
        with pytest.raises(ThemeError, match="non-empty name"):
            Theme.custom("  ", MINIMAL)

    def test_accepts_complete_palette(self) -> None:
        theme = Theme.custom("copy", DARK_THEME.palette)
        assert theme.palette is DARK_THEME.palette

    def test_is_dark_follows_background(self) -> None:
        assert Theme.custom("night", MINIMAL).is_dark
        assert not Theme.custom("day", {**MINIMAL, "background": "#fafafa"}).is_dark


class TestThemeFromSchema:
    """Tests for building themes from validated config entries."""

    def test_icon_overrides_applied(self) -> None:
        schema = CustomThemeSchema(
            name="solarized",
            palette=MINIMAL,
            icons={"success": {"glyph": "✔", "ascii": "[ok]"}},
        )
        theme = theme_from_schema(schema)
        assert theme.icons.resolve(Icon.SUCCESS, True) == "✔"
        assert theme.icons.resolve(Icon.SUCCESS, False) == "[ok]"
        assert theme.icons.resolve(Icon.ERROR, False) == "[X]"

    def test_no_icons_uses_defaults(self) -> None:
        theme = theme_from_schema(CustomThemeSchema(name="plain", palette=MINIMAL))
        assert theme.icons is DEFAULT_ICONS


class TestThemeRegistry:
    """Tests for ThemeRegistry lookup."""

    def test_builtins_available(self) -> None:
        registry = ThemeRegistry()
        assert registry.get("dark") is DARK_THEME
        assert registry.get("light") is LIGHT_THEME
        assert registry.names() == ["light", "dark"]

    def test_lookup_is_case_insensitive(self) -> None:
        registry = ThemeRegistry()
        assert registry.get("DARK") is DARK_THEME
        assert registry.get(" Light ") is LIGHT_THEME
        assert "LIGHT" in registry

    def test_unknown_theme(self) -> None:
        registry = ThemeRegistry()
        with pytest.raises(UnknownThemeError) as exc_info:
            registry.get("neon")
        assert exc_info.value.theme_name == "neon"
        assert exc_info.value.available == ["light", "dark"]
        assert registry.find("neon") is None
        assert "neon" not in registry
        assert 42 not in registry

    def test_custom_theme_registered(self) -> None:
        ocean = Theme.custom("Ocean", MINIMAL)
        registry = ThemeRegistry([ocean])
        assert registry.get("ocean") is ocean
        assert "Ocean" in registry.names()

    def test_custom_theme_shadows_builtin(self) -> None:
        custom_dark = Theme.custom("dark", MINIMAL)
        registry = ThemeRegistry([custom_dark])
        assert registry.get("dark") is custom_dark

    def test_duplicate_custom_theme_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        first = Theme.custom("ocean", MINIMAL)
        second = Theme.custom("OCEAN", {**MINIMAL, "primary": "#000000"})
        with caplog.at_level(logging.WARNING, logger="sahstyle.theme"):
            registry = ThemeRegistry([first, second])
        assert registry.get("ocean") is second
        assert "Duplicate custom theme" in caplog.text

    def test_from_config(self) -> None:
        config = UiConfig(custom_themes=[CustomThemeSchema(name="ocean", palette=MINIMAL)])
        registry = ThemeRegistry.from_config(config)
        assert registry.get("ocean").kind is ThemeKind.CUSTOM

    def test_from_config_none(self) -> None:
        assert ThemeRegistry.from_config(None).names() == ["light", "dark"]

    def test_from_config_incomplete_palette(self) -> None:
        config = UiConfig(
            custom_themes=[CustomThemeSchema(name="bad", palette={"primary": "#000000"})]
        )
        with pytest.raises(IncompletePaletteError):
            ThemeRegistry.from_config(config)
