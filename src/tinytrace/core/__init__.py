"""Core rendering module.

Components:
    vector: Vector algebra over taichi.math.vec3
    ray: Ray data structure and evaluation
    renderer: Render target and the per-pixel render kernel

All per-pixel operations are Taichi functions so they run inside kernels.
"""

from .ray import Ray, make_ray, ray_at
from .vector import (
    add,
    cross,
    dot,
    magnitude,
    normalize,
    reflect,
    saturate,
    scale,
    scale_by,
    sub,
    vec3,
)

# Note: renderer is NOT imported here to avoid circular imports.
# Import directly from tinytrace.core.renderer when needed.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "add",
    "sub",
    "scale",
    "scale_by",
    "dot",
    "magnitude",
    "normalize",
    "cross",
    "saturate",
    "reflect",
]
