"""Preview module for image output.

Components:
    export: Float-to-byte conversion with a color policy, PNG writing via Pillow

Example:
    >>> from tinytrace.preview import save_png_from_array
    >>> save_png_from_array(image, "render.png", policy="clamp")
"""

from tinytrace.preview.export import (
    COLOR_POLICIES,
    ColorPolicy,
    save_png_from_array,
    to_rgb_bytes,
    write_png,
)

__all__ = [
    "ColorPolicy",
    "COLOR_POLICIES",
    "to_rgb_bytes",
    "write_png",
    "save_png_from_array",
]
