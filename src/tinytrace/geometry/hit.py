"""Hit record shared by all primitive intersection tests.

Every intersection test returns a HitRecord. Normals in a record always face
the incoming ray, and ``front_face`` tells whether the primitive's geometric
outward normal already did (1) or had to be flipped (0).
"""

import taichi as ti

from tinytrace.core.vector import dot, scale, vec3


@ti.dataclass
class HitRecord:
    """Record of a ray-primitive intersection.

    Attributes:
        hit: Whether the ray intersected the primitive (1 if hit, 0 if miss).
        distance: Distance along the ray to the hit position. May be negative
            when the intersection lies behind the ray origin.
            Only valid if hit == 1.
        position: The 3D point where the ray met the surface.
            Only valid if hit == 1.
        normal: Unit surface normal oriented against the ray direction.
            Only valid if hit == 1.
        front_face: 1 if the outward normal faced the ray, 0 if it was flipped.
            Only valid if hit == 1.
        color: Flat color of the hit primitive (RGB).
            Only valid if hit == 1.
    """

    hit: ti.i32
    distance: ti.f32
    position: vec3
    normal: vec3
    front_face: ti.i32
    color: vec3


@ti.func
def make_miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(
        hit=0,
        distance=0.0,
        position=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        front_face=0,
        color=vec3(0.0, 0.0, 0.0),
    )


@ti.func
def face_forward(ray_direction: vec3, outward_normal: vec3):
    """Orient a normal against the incoming ray.

    Args:
        ray_direction: Direction of the incoming ray.
        outward_normal: The primitive's geometric normal at the hit.

    Returns:
        A tuple of (normal, front_face) where normal satisfies
        dot(normal, ray_direction) <= 0 and front_face is 1 when no flip
        was needed.
    """
    normal = outward_normal
    front_face = 1
    if dot(ray_direction, outward_normal) > 0.0:
        normal = scale(outward_normal, -1.0)
        front_face = 0
    return normal, front_face
