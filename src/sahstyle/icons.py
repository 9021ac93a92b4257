"""
Semantic icon set with ASCII fallbacks.

Every member of ``Icon`` maps to a Unicode glyph and a printable-ASCII
fallback. Which one is used is decided per call from the resolved
``emoji_enabled`` setting, so there is no global icon mode.

Usage:
    from sahstyle.icons import DEFAULT_ICONS, Icon

    DEFAULT_ICONS.resolve(Icon.SUCCESS, emoji_enabled=True)   # "✓"
    DEFAULT_ICONS.resolve(Icon.SUCCESS, emoji_enabled=False)  # "[OK]"

Note:
    Emoji glyphs (search, folder, rocket, ...) are double-width in most
    terminals. Use the ASCII fallback where column alignment matters.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from sahstyle.exceptions import UnknownIconError


class Icon(str, Enum):
    """Closed enumeration of semantic icon identifiers."""

    # Status
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    SKIP = "skip"

    # Flow
    ARROW = "arrow"
    BULLET = "bullet"
    ELLIPSIS = "ellipsis"

    # Marks
    CHECK = "check"
    CROSS = "cross"
    QUESTION = "question"

    # Objects
    SEARCH = "search"
    FOLDER = "folder"
    FILE = "file"
    LOCK = "lock"
    UNLOCK = "unlock"

    # Decoration
    STAR = "star"
    HEART = "heart"
    FIRE = "fire"
    LIGHTNING = "lightning"
    SPARKLES = "sparkles"
    ROCKET = "rocket"


def is_printable_ascii(text: str) -> bool:
    """True when every character is in the printable ASCII range (space to tilde)."""
    return all(0x20 <= ord(ch) <= 0x7E for ch in text)


@dataclass(frozen=True)
class IconGlyph:
    """Unicode glyph plus its ASCII stand-in."""

    glyph: str
    ascii_fallback: str

    def __post_init__(self) -> None:
        if not self.glyph:
            raise ValueError("Icon glyph must not be empty")
        if not self.ascii_fallback or not is_printable_ascii(self.ascii_fallback):
            raise ValueError(
                f"ASCII fallback must be non-empty printable ASCII, got {self.ascii_fallback!r}"
            )


def _coerce_icon(icon_id: Icon | str) -> Icon:
    if isinstance(icon_id, Icon):
        return icon_id
    if isinstance(icon_id, str):
        try:
            return Icon(icon_id.lower())
        except ValueError:
            pass
    raise UnknownIconError(f"Unknown icon: {icon_id!r}", icon_id=icon_id)


@dataclass(frozen=True)
class IconSet:
    """Complete mapping of every ``Icon`` to an ``IconGlyph``."""

    entries: Mapping[Icon, IconGlyph] = field(hash=False)

    def __post_init__(self) -> None:
        missing = [icon.value for icon in Icon if icon not in self.entries]
        if missing:
            raise UnknownIconError(
                f"Icon set has no entry for: {', '.join(missing)}",
                details={"missing": missing},
            )
        # Read-only view so a shared set cannot be mutated through a caller's dict.
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def glyph(self, icon_id: Icon | str) -> IconGlyph:
        return self.entries[_coerce_icon(icon_id)]

    def resolve(self, icon_id: Icon | str, emoji_enabled: bool) -> str:
        """Return the glyph when emoji are enabled, the ASCII fallback otherwise.

        Raises:
            UnknownIconError: If icon_id is not a member of ``Icon``.
        """
        entry = self.glyph(icon_id)
        return entry.glyph if emoji_enabled else entry.ascii_fallback

    def with_overrides(self, overrides: Mapping[Icon | str, Mapping[str, str]]) -> IconSet:
        """Return a new set with some glyphs and/or fallbacks replaced.

        Args:
            overrides: icon id -> ``{"glyph": ..., "ascii": ...}``; either key
                may be omitted to keep the current value.
        """
        entries = dict(self.entries)
        for icon_id, values in overrides.items():
            icon = _coerce_icon(icon_id)
            current = entries[icon]
            entries[icon] = IconGlyph(
                glyph=values.get("glyph", current.glyph),
                ascii_fallback=values.get("ascii", current.ascii_fallback),
            )
        return IconSet(entries)


DEFAULT_ICONS = IconSet(
    {
        # Status
        Icon.SUCCESS: IconGlyph("✓", "[OK]"),
        Icon.ERROR: IconGlyph("✗", "[X]"),
        Icon.WARNING: IconGlyph("⚠", "[!]"),
        Icon.INFO: IconGlyph("ℹ", "[i]"),
        Icon.SKIP: IconGlyph("⏭", "[-]"),
        # Flow
        Icon.ARROW: IconGlyph("→", "->"),
        Icon.BULLET: IconGlyph("•", "*"),
        Icon.ELLIPSIS: IconGlyph("…", "..."),
        # Marks
        Icon.CHECK: IconGlyph("✓", "[v]"),
        Icon.CROSS: IconGlyph("✗", "[x]"),
        Icon.QUESTION: IconGlyph("?", "[?]"),
        # Objects
        Icon.SEARCH: IconGlyph("🔍", "[S]"),
        Icon.FOLDER: IconGlyph("📁", "[D]"),
        Icon.FILE: IconGlyph("📄", "[F]"),
        Icon.LOCK: IconGlyph("🔒", "[L]"),
        Icon.UNLOCK: IconGlyph("🔓", "[U]"),
        # Decoration
        Icon.STAR: IconGlyph("⭐", "[*]"),
        Icon.HEART: IconGlyph("❤", "[<3]"),
        Icon.FIRE: IconGlyph("🔥", "[!]"),
        Icon.LIGHTNING: IconGlyph("⚡", "[!]"),
        Icon.SPARKLES: IconGlyph("✨", "[*]"),
        Icon.ROCKET: IconGlyph("🚀", "[^]"),
    }
)

__all__ = [
    "DEFAULT_ICONS",
    "Icon",
    "IconGlyph",
    "IconSet",
    "is_printable_ascii",
]
