"""Shading module mapping scene hits to colors.

Components:
    shader: Flat and normal-visualization shading, sky gradient for misses
"""

from .shader import SKY_BLUE, SKY_WHITE, ShadingMode, shade, sky_gradient

__all__ = [
    "ShadingMode",
    "shade",
    "sky_gradient",
    "SKY_WHITE",
    "SKY_BLUE",
]
