"""RGB color model and its terminal projections.

A ``Color`` is an immutable 8-bit RGB triple. It can be projected onto the
terminal palettes capability detection may report:

    - ``to_ansi16()``: nearest entry of the xterm 16-color palette
    - ``to_ansi256()``: nearest entry of the 6x6x6 cube or the 24-step gray ramp
    - ``to_hex()``: lowercase ``#rrggbb``

Nearest means smallest Euclidean distance in RGB space.

Usage:
    from sahstyle.color import Color

    accent = Color.from_hex("#64b5f6")
    accent.to_ansi256()  # 75
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from sahstyle.exceptions import InvalidFormatError

_HEX_RE = re.compile(r"#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})")

# xterm default values for the 16 standard colors, indexed by ANSI number.
ANSI16_PALETTE: tuple[tuple[int, int, int], ...] = (
    (0, 0, 0),  # 0 black
    (205, 0, 0),  # 1 red
    (0, 205, 0),  # 2 green
    (205, 205, 0),  # 3 yellow
    (0, 0, 238),  # 4 blue
    (205, 0, 205),  # 5 magenta
    (0, 205, 205),  # 6 cyan
    (229, 229, 229),  # 7 white
    (127, 127, 127),  # 8 bright black
    (255, 0, 0),  # 9 bright red
    (0, 255, 0),  # 10 bright green
    (255, 255, 0),  # 11 bright yellow
    (92, 92, 255),  # 12 bright blue
    (255, 0, 255),  # 13 bright magenta
    (0, 255, 255),  # 14 bright cyan
    (255, 255, 255),  # 15 bright white
)

# Channel levels of the 6x6x6 cube (indices 16-231).
CUBE_LEVELS: tuple[int, ...] = (0, 95, 135, 175, 215, 255)

# Gray ramp values (indices 232-255).
GRAY_LEVELS: tuple[int, ...] = tuple(8 + 10 * i for i in range(24))


def _distance_sq(a: tuple[int, int, int], b: tuple[int, int, int]) -> int:
    return (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2


def _nearest_level(value: int) -> int:
    """Index into CUBE_LEVELS closest to value (lower index on ties)."""
    return min(range(len(CUBE_LEVELS)), key=lambda i: (abs(value - CUBE_LEVELS[i]), i))


@dataclass(frozen=True)
class Color:
    """Immutable RGB color, each component in 0-255."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
                raise InvalidFormatError(
                    f"Color component {name} must be an integer in 0-255, got {value!r}",
                    value=value,
                )

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> Color:
        return cls(r, g, b)

    @classmethod
    def from_hex(cls, text: str) -> Color:
        """Parse a 3- or 6-digit hex string, with or without a leading ``#``.

        Raises:
            InvalidFormatError: If the string is not a valid hex color.
        """
        if not isinstance(text, str):
            raise InvalidFormatError(
                f"Hex color must be a string, got {type(text).__name__}", value=text
            )
        match = _HEX_RE.fullmatch(text)
        if match is None:
            raise InvalidFormatError(f"Invalid hex color: {text!r}", value=text)
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    @classmethod
    def from_ansi256(cls, index: int) -> Color:
        """Return the RGB value xterm uses for a 256-color palette index."""
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= 255:
            raise InvalidFormatError(
                f"ANSI color index must be in 0-255, got {index!r}", value=index
            )
        if index < 16:
            return cls(*ANSI16_PALETTE[index])
        if index < 232:
            offset = index - 16
            return cls(
                CUBE_LEVELS[offset // 36],
                CUBE_LEVELS[(offset // 6) % 6],
                CUBE_LEVELS[offset % 6],
            )
        level = GRAY_LEVELS[index - 232]
        return cls(level, level, level)

    # -------------------------------------------------------------------------
    # Projections
    # -------------------------------------------------------------------------

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_ansi16(self) -> int:
        """Nearest xterm 16-color index; ties go to the lowest index."""
        rgb = self.rgb
        return min(
            range(len(ANSI16_PALETTE)),
            key=lambda i: (_distance_sq(rgb, ANSI16_PALETTE[i]), i),
        )

    def to_ansi256(self) -> int:
        """Nearest index in the 256-color cube or gray ramp.

        The gray ramp wins exact ties with the cube.
        """
        rgb = self.rgb

        ri, gi, bi = (_nearest_level(c) for c in rgb)
        cube_index = 16 + 36 * ri + 6 * gi + bi
        cube_dist = _distance_sq(rgb, (CUBE_LEVELS[ri], CUBE_LEVELS[gi], CUBE_LEVELS[bi]))

        gray_i = min(
            range(len(GRAY_LEVELS)),
            key=lambda i: (_distance_sq(rgb, (GRAY_LEVELS[i],) * 3), i),
        )
        gray_dist = _distance_sq(rgb, (GRAY_LEVELS[gray_i],) * 3)

        if gray_dist <= cube_dist:
            return 232 + gray_i
        return cube_index

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def luminance(self) -> float:
        """Rec. 709 weighted luminance of the raw channels, 0.0-1.0."""
        return (0.2126 * self.r + 0.7152 * self.g + 0.0722 * self.b) / 255

    def __str__(self) -> str:
        return self.to_hex()
