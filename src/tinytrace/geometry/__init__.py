"""Geometry module for primitives and their intersection tests.

Components:
    hit: HitRecord shared by every test, plus normal orientation
    sphere: Sphere primitive with closest-approach intersection
    plane: Single-sided infinite plane in implicit form

All intersection routines are Taichi functions (@ti.func) and follow the
pattern:
    record = hit_shape(ray_origin, ray_direction, shape)
"""

from .hit import HitRecord, face_forward, make_miss_record
from .plane import PLANE_EPSILON, Plane, hit_plane, make_plane
from .sphere import Sphere, hit_sphere, make_sphere

__all__ = [
    "HitRecord",
    "make_miss_record",
    "face_forward",
    "Sphere",
    "hit_sphere",
    "make_sphere",
    "Plane",
    "hit_plane",
    "make_plane",
    "PLANE_EPSILON",
]
