# Copyright (c) Syntropy Systems
"""Stable display colors for dimension values."""

from __future__ import annotations

import colorsys

# dimension -> (hue step in degrees, saturation, lightness)
_PALETTES: dict[str, tuple[int, float, float]] = {
    "a": (35, 0.50, 0.75),
    "b": (55, 0.60, 0.70),
    "c": (75, 0.65, 0.65),
}


def dimension_color(dimension: str, index: int) -> str:
    """Hex color for the value at index within its dimension.

    The hue walks around the wheel by a per-dimension step so neighbouring
    values stay distinguishable and a value keeps its color across runs.
    """
    step, saturation, lightness = _PALETTES[dimension]
    hue = (index * step) % 360
    red, green, blue = colorsys.hls_to_rgb(hue / 360, lightness, saturation)
    return f"#{round(red * 255):02x}{round(green * 255):02x}{round(blue * 255):02x}"
