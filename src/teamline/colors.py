"""Stable color assignment for recurring identifiers."""

from __future__ import annotations

from collections.abc import Sequence

# Constants for color calculations
HEX_COLOR_SHORT_LENGTH = 3  # Length of shorthand hex colors (#RGB)
HEX_COLOR_FULL_LENGTH = 6  # Length of full hex colors (#RRGGBB)
WCAG_LUMINANCE_THRESHOLD = 0.03928  # WCAG luminance calculation threshold
WCAG_CONTRAST_MIDPOINT = 0.5  # Luminance midpoint for contrast determination

DEFAULT_PALETTE: tuple[str, ...] = (
    "#ADD8E6",
    "#90EE90",
    "#FFDAB9",
    "#B0E0E6",
    "#DDA0DD",
    "#F0E68C",
    "#87CEEB",
    "#F5DEB3",
    "#C0C0C0",
    "#FFA07A",
    "#20B2AA",
    "#E6E6FA",
    "#FFB6C1",
    "#AFEEEE",
    "#F08080",
    "#DA70D6",
    "#FFEFD5",
    "#FFE4B5",
    "#7FFFD4",
)

NEUTRAL_COLOR = "#D3D3D3"  # Header fill for days outside any term


class ColorAssigner:
    """Hand out palette colors to identifiers, remembering earlier answers.

    The first request for an identifier takes the next palette color, wrapping
    around when the palette runs out. Later requests for the same identifier
    return the same color. Create one assigner per grid build so separate
    timelines never see each other's history.
    """

    def __init__(self, palette: Sequence[str] = DEFAULT_PALETTE) -> None:
        if not palette:
            raise ValueError("palette must contain at least one color")
        self._palette = tuple(palette)
        self._assigned: dict[str, str] = {}

    @property
    def palette(self) -> tuple[str, ...]:
        return self._palette

    def color_for(self, identifier: str) -> str:
        """Return the color for ``identifier``, assigning one on first use."""
        color = self._assigned.get(identifier)
        if color is None:
            color = self._palette[len(self._assigned) % len(self._palette)]
            self._assigned[identifier] = color
        return color

    def assignments(self) -> dict[str, str]:
        """Copy of the identifier to color mapping, in assignment order."""
        return dict(self._assigned)

    def __len__(self) -> int:
        return len(self._assigned)


def contrast_text_color(bg_color: str) -> str:
    """Compute readable text color (black or white) for a background color.

    Uses WCAG relative luminance. Unparseable colors get black text.

    Args:
        bg_color: Background color (hex like '#2f75b5')

    Returns:
        '#000000' or '#ffffff'
    """
    if not bg_color.startswith("#"):
        return "#000000"

    hex_color = bg_color.lstrip("#")
    if len(hex_color) == HEX_COLOR_SHORT_LENGTH:
        hex_color = "".join(c * 2 for c in hex_color)
    elif len(hex_color) != HEX_COLOR_FULL_LENGTH:
        return "#000000"

    try:
        channels = [int(hex_color[i : i + 2], 16) / 255 for i in (0, 2, 4)]
    except ValueError:
        return "#000000"

    def linearize(c: float) -> float:
        return c / 12.92 if c <= WCAG_LUMINANCE_THRESHOLD else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (linearize(c) for c in channels)
    luminance = 0.2126 * r + 0.7152 * g + 0.0722 * b

    return "#ffffff" if luminance < WCAG_CONTRAST_MIDPOINT else "#000000"
