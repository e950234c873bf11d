"""Pixel shading: flat primitive colors and the sky gradient.

There is no lighting model. A hit returns its primitive's color unchanged
(or a normal visualization in NORMAL mode); a miss returns a vertical
gradient between white and light blue driven by the ray's y component:

    t = saturate(0.5 * (direction.y + 1))
    color = white * t + blue * (1 - t)
"""

from enum import IntEnum

import taichi as ti

from tinytrace.core.vector import add, saturate, scale, vec3
from tinytrace.geometry.hit import HitRecord

SKY_WHITE = (1.0, 1.0, 1.0)
SKY_BLUE = (0.4, 0.7, 1.0)


class ShadingMode(IntEnum):
    """How a hit is turned into a color.

    FLAT returns the primitive color. NORMAL maps the facing normal from
    [-1, 1] to [0, 1] per channel, useful for checking geometry.
    """

    FLAT = 0
    NORMAL = 1


@ti.func
def sky_gradient(direction: vec3) -> vec3:
    """Background color for a ray that hit nothing.

    Args:
        direction: The unit ray direction.

    Returns:
        Linear blend from blue (direction.y = -1) to white (direction.y = 1).
    """
    white = vec3(SKY_WHITE[0], SKY_WHITE[1], SKY_WHITE[2])
    blue = vec3(SKY_BLUE[0], SKY_BLUE[1], SKY_BLUE[2])
    t = saturate(0.5 * (direction.y + 1.0))
    return add(scale(white, t), scale(blue, 1.0 - t))


@ti.func
def shade(record: HitRecord, direction: vec3, mode: ti.i32) -> vec3:
    """Color for one primary ray.

    Args:
        record: Result of the scene intersection.
        direction: The unit ray direction, used on a miss.
        mode: A ShadingMode value.

    Returns:
        The RGB color. Hit colors are not clamped.
    """
    color = sky_gradient(direction)
    if record.hit == 1:
        if mode == int(ShadingMode.NORMAL):
            color = scale(add(record.normal, vec3(1.0, 1.0, 1.0)), 0.5)
        else:
            color = record.color
    return color
