"""Sphere primitive with closest-approach ray-sphere intersection.

The intersection uses the perpendicular distance from the sphere center to
the ray line rather than solving the full quadratic:

    oc = center - origin
    d  = |direction x oc|               (direction is unit length)
    t1 = dot(direction, oc)             (closest approach along the ray)
    t2 = sqrt(radius^2 - d^2)           (half chord)
    distance = t1 - t2                  (near intersection)

The near root is reported even when it lies behind the ray origin; callers
that only want forward hits must reject ``distance < 0`` themselves (the
scene does).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
    >>> from tinytrace.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -4), radius=0.5)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti

from tinytrace.core.vector import (
    add,
    cross,
    dot,
    magnitude,
    normalize,
    scale,
    sub,
    vec3,
)
from tinytrace.geometry.hit import HitRecord, face_forward


@ti.dataclass
class Sphere:
    """A sphere defined by center point, radius and flat color.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
        color: The flat color of the sphere (RGB, each channel in [0, 1]).
    """

    center: vec3
    radius: ti.f32
    color: vec3


@ti.func
def hit_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere) -> HitRecord:
    """Test for ray-sphere intersection.

    A ray whose closest approach to the center equals the radius exactly is
    a tangent hit with distance t1.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (must be unit length).
        sphere: The sphere to test against.

    Returns:
        A HitRecord for the near intersection. The normal faces the ray;
        front_face is 1 when the ray meets the outside of the sphere.
    """
    oc = sub(sphere.center, ray_origin)
    d = magnitude(cross(ray_direction, oc))

    did_hit = 0
    hit_distance = 0.0
    hit_position = vec3(0.0, 0.0, 0.0)
    hit_normal = vec3(0.0, 0.0, 0.0)
    is_front_face = 0

    if d <= sphere.radius:
        t1 = dot(ray_direction, oc)
        t2 = ti.sqrt(sphere.radius * sphere.radius - d * d)
        did_hit = 1
        hit_distance = t1 - t2
        hit_position = add(ray_origin, scale(ray_direction, hit_distance))
        outward_normal = normalize(sub(hit_position, sphere.center))
        hit_normal, is_front_face = face_forward(ray_direction, outward_normal)

    return HitRecord(
        hit=did_hit,
        distance=hit_distance,
        position=hit_position,
        normal=hit_normal,
        front_face=is_front_face,
        color=sphere.color,
    )


@ti.func
def make_sphere(center: vec3, radius: ti.f32, color: vec3) -> Sphere:
    """Create a sphere from center, radius and color."""
    return Sphere(center=center, radius=radius, color=color)
