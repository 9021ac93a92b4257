"""sahstyle - semantic terminal styling with theme and capability resolution."""

from sahstyle.capability import Background, ColorDepth, RenderCapability, detect
from sahstyle.color import Color
from sahstyle.config import (
    ColorOutputMode,
    UiConfig,
    UiPreferences,
    load_ui_config,
    save_ui_config,
)
from sahstyle.context import UiContext
from sahstyle.exceptions import (
    ColorError,
    ConfigParseError,
    ConfigurationError,
    IconError,
    IncompletePaletteError,
    InvalidFormatError,
    SahStyleError,
    ThemeError,
    UnknownIconError,
    UnknownThemeError,
)
from sahstyle.icons import DEFAULT_ICONS, Icon, IconGlyph, IconSet
from sahstyle.logging_setup import set_console_quiet, setup_logging
from sahstyle.resolver import ResolvedSettings, resolve
from sahstyle.style import Decoration, StyleRenderer
from sahstyle.theme import (
    DARK_THEME,
    LIGHT_THEME,
    ColorPalette,
    ColorSlot,
    Theme,
    ThemeKind,
    ThemeRegistry,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Color
    "Color",
    # Themes
    "ColorPalette",
    "ColorSlot",
    "DARK_THEME",
    "LIGHT_THEME",
    "Theme",
    "ThemeKind",
    "ThemeRegistry",
    # Icons
    "DEFAULT_ICONS",
    "Icon",
    "IconGlyph",
    "IconSet",
    # Capability
    "Background",
    "ColorDepth",
    "RenderCapability",
    "detect",
    # Preferences
    "ColorOutputMode",
    "ResolvedSettings",
    "UiConfig",
    "UiPreferences",
    "load_ui_config",
    "resolve",
    "save_ui_config",
    # Rendering
    "Decoration",
    "StyleRenderer",
    "UiContext",
    # Logging
    "set_console_quiet",
    "setup_logging",
    # Exceptions
    "SahStyleError",
    "ColorError",
    "InvalidFormatError",
    "ThemeError",
    "IncompletePaletteError",
    "UnknownThemeError",
    "IconError",
    "UnknownIconError",
    "ConfigurationError",
    "ConfigParseError",
]
