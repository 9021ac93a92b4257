"""Terminal capability detection.

``detect()`` reads environment variables and the output stream once and
returns an immutable ``RenderCapability`` snapshot. It has no side effects:
no escape sequences are written and nothing is cached, so calling it twice in
the same environment gives the same answer.

Signals consulted:
    Color depth: NO_COLOR, FORCE_COLOR, TERM, COLORTERM, WT_SESSION
    Unicode:     LC_ALL / LC_CTYPE / LANG, TERM, stream encoding
    Background:  COLORFGBG, ITERM_PROFILE
    TTY:         stream.isatty()
"""

from __future__ import annotations

import codecs
import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import IO, Any

from sahstyle.color import Color
from sahstyle.exceptions import InvalidFormatError

logger = logging.getLogger(__name__)


class ColorDepth(IntEnum):
    """Color resolution tiers, ordered so that ``max()`` picks the richer one."""

    NONE = 0
    ANSI16 = 1
    ANSI256 = 2
    TRUECOLOR = 3


class Background(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RenderCapability:
    """Snapshot of what the attached terminal can render."""

    color_depth: ColorDepth = ColorDepth.NONE
    unicode_supported: bool = True
    is_tty: bool = False
    background: Background = Background.UNKNOWN


# FORCE_COLOR level -> minimum depth it guarantees.
_FORCE_COLOR_LEVELS: dict[str, ColorDepth] = {
    "2": ColorDepth.ANSI256,
    "3": ColorDepth.TRUECOLOR,
}

_TRUECOLOR_HINTS = frozenset({"truecolor", "24bit"})


def _is_tty(stream: IO[Any] | None) -> bool:
    if stream is None:
        return False
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError, OSError):
        # Closed or detached streams behave as "not a terminal".
        return False


def _hinted_color_depth(environ: Mapping[str, str]) -> ColorDepth:
    term = environ.get("TERM", "")
    if term == "dumb":
        return ColorDepth.NONE
    if environ.get("COLORTERM", "").lower() in _TRUECOLOR_HINTS:
        return ColorDepth.TRUECOLOR
    if environ.get("WT_SESSION"):
        return ColorDepth.TRUECOLOR
    if "256color" in term:
        return ColorDepth.ANSI256
    if term:
        return ColorDepth.ANSI16
    return ColorDepth.NONE


def detect_color_depth(environ: Mapping[str, str]) -> ColorDepth:
    """Color depth from NO_COLOR / FORCE_COLOR and terminal-type hints."""
    force = environ.get("FORCE_COLOR")
    if force is None:
        if "NO_COLOR" in environ:
            return ColorDepth.NONE
        return _hinted_color_depth(environ)

    floor = _FORCE_COLOR_LEVELS.get(force.strip(), ColorDepth.ANSI16)
    return max(_hinted_color_depth(environ), floor)


def _locale_value(environ: Mapping[str, str]) -> str | None:
    for var in ("LC_ALL", "LC_CTYPE", "LANG"):
        value = environ.get(var)
        if value:
            return value
    return None


def _is_utf_codec(name: str) -> bool:
    try:
        return codecs.lookup(name).name.startswith("utf")
    except LookupError:
        return False


def detect_unicode(environ: Mapping[str, str], stream: IO[Any] | None = None) -> bool:
    """True unless locale, TERM or the stream encoding rule Unicode out."""
    if environ.get("TERM") == "dumb":
        return False

    locale_value = _locale_value(environ)
    if locale_value is not None:
        if locale_value in ("C", "POSIX"):
            return False
        # language_TERRITORY.codeset@modifier
        codeset = locale_value.partition(".")[2].partition("@")[0]
        if codeset and not _is_utf_codec(codeset):
            return False

    encoding = getattr(stream, "encoding", None) if stream is not None else None
    if isinstance(encoding, str) and encoding and not _is_utf_codec(encoding):
        return False

    return True


def _classify(color: Color) -> Background:
    return Background.DARK if color.luminance() < 0.5 else Background.LIGHT


def detect_background(environ: Mapping[str, str]) -> Background:
    """Best-effort light/dark guess; UNKNOWN when no usable hint exists."""
    colorfgbg = environ.get("COLORFGBG")
    if colorfgbg:
        # "fg;bg" or "fg;default;bg" - background is always the last field.
        last = colorfgbg.rsplit(";", 1)[-1].strip()
        if ";" in colorfgbg and last.isdigit():
            try:
                return _classify(Color.from_ansi256(int(last)))
            except InvalidFormatError:
                logger.debug("Ignoring out-of-range COLORFGBG background: %s", colorfgbg)
        else:
            logger.debug("Ignoring malformed COLORFGBG: %s", colorfgbg)

    profile = environ.get("ITERM_PROFILE", "").lower()
    if "light" in profile:
        return Background.LIGHT
    if "dark" in profile:
        return Background.DARK

    return Background.UNKNOWN


def detect(
    environ: Mapping[str, str] | None = None,
    stream: IO[Any] | None = None,
) -> RenderCapability:
    """Detect what the terminal supports.

    Args:
        environ: Environment to read (default: ``os.environ``).
        stream: Output stream to check (default: ``sys.stdout``).

    Returns:
        Immutable capability snapshot.
    """
    env = os.environ if environ is None else environ
    out = sys.stdout if stream is None else stream

    capability = RenderCapability(
        color_depth=detect_color_depth(env),
        unicode_supported=detect_unicode(env, out),
        is_tty=_is_tty(out),
        background=detect_background(env),
    )
    logger.debug("Detected terminal capability: %s", capability)
    return capability


__all__ = [
    "Background",
    "ColorDepth",
    "RenderCapability",
    "detect",
    "detect_background",
    "detect_color_depth",
    "detect_unicode",
]
