"""Infinite plane primitive in implicit form.

A plane is the set of points p with dot(normal, p) + offset = 0, where
``normal`` is unit length and ``offset`` is the signed distance from the
origin. The plane is single sided: a ray is only accepted when its direction
has a strictly positive component along the stored normal.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
    >>> from tinytrace.geometry.plane import Plane, hit_plane
    >>> ground = Plane(normal=ti.math.vec3(0, 1, 0), offset=-0.5)
    >>> # Use hit_plane within a Taichi kernel
"""

import taichi as ti

from tinytrace.core.vector import add, dot, scale, vec3
from tinytrace.geometry.hit import HitRecord, face_forward

# Minimum dot(direction, normal) for a ray to be accepted
PLANE_EPSILON = 1e-5


@ti.dataclass
class Plane:
    """An infinite plane with a flat color.

    Attributes:
        normal: Unit normal of the plane (vec3).
        offset: Signed distance from the origin in the implicit form.
        color: The flat color of the plane (RGB, each channel in [0, 1]).
    """

    normal: vec3
    offset: ti.f32
    color: vec3


@ti.func
def hit_plane(ray_origin: vec3, ray_direction: vec3, plane: Plane) -> HitRecord:
    """Test for ray-plane intersection.

    Rays parallel to the plane, or travelling against its normal
    (dot(direction, normal) <= PLANE_EPSILON), never hit.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (unit length).
        plane: The plane to test against.

    Returns:
        A HitRecord. Because accepted rays travel along the stored normal,
        the reported normal is always -plane.normal and front_face is 0.
    """
    denom = dot(ray_direction, plane.normal)

    did_hit = 0
    hit_distance = 0.0
    hit_position = vec3(0.0, 0.0, 0.0)
    hit_normal = vec3(0.0, 0.0, 0.0)
    is_front_face = 0

    if denom > PLANE_EPSILON:
        did_hit = 1
        hit_distance = -(dot(ray_origin, plane.normal) + plane.offset) / denom
        hit_position = add(ray_origin, scale(ray_direction, hit_distance))
        hit_normal, is_front_face = face_forward(ray_direction, plane.normal)

    return HitRecord(
        hit=did_hit,
        distance=hit_distance,
        position=hit_position,
        normal=hit_normal,
        front_face=is_front_face,
        color=plane.color,
    )


@ti.func
def make_plane(normal: vec3, offset: ti.f32, color: vec3) -> Plane:
    """Create a plane from unit normal, offset and color."""
    return Plane(normal=normal, offset=offset, color=color)
