"""
sahstyle exception hierarchy.

Setup operations (parsing colors, building themes, loading config) raise these;
rendering operations never do.

Exception Hierarchy:
    SahStyleError (base)
    ├── ColorError - Color parsing/conversion failures
    │   └── InvalidFormatError - Malformed hex string or out-of-range component
    ├── ThemeError - Theme construction and lookup failures
    │   ├── IncompletePaletteError - Required palette slot missing after fallback
    │   └── UnknownThemeError - Theme name matches no built-in or custom theme
    ├── IconError - Icon lookup failures
    │   └── UnknownIconError - Identifier outside the icon enumeration
    └── ConfigurationError - Persisted preference issues
        └── ConfigParseError - Malformed ui.yaml content
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any


class SahStyleError(Exception):
    """Base exception for all sahstyle errors."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """
        Initialize sahstyle exception.

        Args:
            message: Human-readable error message
            details: Optional structured error details for logging/debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Color Errors
# =============================================================================


class ColorError(SahStyleError):
    """Color parsing or conversion error."""

    pass


class InvalidFormatError(ColorError):
    """Malformed color input (bad hex string, component outside 0-255)."""

    def __init__(
        self,
        message: str,
        *,
        value: object = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details=details)
        self.value = value


# =============================================================================
# Theme Errors
# =============================================================================


class ThemeError(SahStyleError):
    """Theme construction or lookup error."""

    def __init__(
        self,
        message: str,
        *,
        theme_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if theme_name:
            details["theme_name"] = theme_name
        super().__init__(message, details=details)
        self.theme_name = theme_name


class IncompletePaletteError(ThemeError):
    """Palette is missing required slots after fallback resolution."""

    def __init__(
        self,
        message: str,
        *,
        missing: Iterable[str] = (),
        **kwargs: Any,
    ) -> None:
        missing_list = sorted(missing)
        details = kwargs.get("details") or {}
        if missing_list:
            details["missing"] = missing_list
        kwargs["details"] = details
        super().__init__(message, **kwargs)
        self.missing = missing_list


class UnknownThemeError(ThemeError):
    """Requested theme name matches neither a built-in nor a custom theme."""

    def __init__(
        self,
        message: str,
        *,
        available: Iterable[str] = (),
        **kwargs: Any,
    ) -> None:
        available_list = list(available)
        details = kwargs.get("details") or {}
        if available_list:
            details["available"] = available_list
        kwargs["details"] = details
        super().__init__(message, **kwargs)
        self.available = available_list


# =============================================================================
# Icon Errors
# =============================================================================


class IconError(SahStyleError):
    """Icon lookup error."""

    pass


class UnknownIconError(IconError):
    """Icon identifier outside the closed enumeration."""

    def __init__(
        self,
        message: str,
        *,
        icon_id: object = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if icon_id is not None:
            details["icon_id"] = repr(icon_id)
        super().__init__(message, details=details)
        self.icon_id = icon_id


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(SahStyleError):
    """Configuration file or settings error."""

    def __init__(
        self,
        message: str,
        *,
        config_file: Path | str | None = None,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if config_file:
            details["config_file"] = str(config_file)
        if field:
            details["field"] = field
        super().__init__(message, details=details)
        self.config_file = config_file
        self.field = field


class ConfigParseError(ConfigurationError):
    """Persisted UI preferences could not be read or validated."""

    pass
