"""Scene-level closest-hit selection over an ordered primitive table.

Primitives of every kind live in one table, tagged with a PrimitiveKind and
evaluated in registration order. Per-kind parameters share columns:

    kind     | vector column | scalar column | color
    SPHERE   | center        | radius        | color
    PLANE    | normal        | offset        | color

intersect_scene() folds over the table and keeps the hit with the smallest
non-negative distance below MAX_HIT_DISTANCE. On exact ties the primitive
registered first wins.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
    >>> from tinytrace.scene.intersection import add_plane, add_sphere, clear_scene
    >>> clear_scene()
    >>> add_sphere((0.0, 0.0, -4.0), 0.5, color=(1.0, 0.0, 0.0))
    >>> add_plane((0.0, 1.0, 0.0), -0.5, color=(0.5, 0.5, 0.5))
    >>> # Use intersect_scene within a Taichi kernel
"""

import logging
import math
from enum import IntEnum

import taichi as ti

from tinytrace.core.vector import vec3
from tinytrace.geometry.hit import HitRecord, make_miss_record
from tinytrace.geometry.plane import hit_plane, make_plane
from tinytrace.geometry.sphere import hit_sphere, make_sphere

logger = logging.getLogger(__name__)

Color = tuple[float, float, float]


class PrimitiveKind(IntEnum):
    """Tag selecting the intersection test for a table row."""

    SPHERE = 0
    PLANE = 1


# Maximum number of primitives supported in the scene
MAX_PRIMITIVES = 64

# Hits at or beyond this distance are ignored
MAX_HIT_DISTANCE = 100000.0

# Tolerance when checking that a plane normal is unit length
NORMAL_LENGTH_TOLERANCE = 1e-4

primitive_kinds = ti.field(dtype=ti.i32, shape=MAX_PRIMITIVES)
primitive_vectors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
primitive_scalars = ti.field(dtype=ti.f32, shape=MAX_PRIMITIVES)
primitive_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
num_primitives = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all primitives from the scene.

    Resets the primitive count to zero. Field data is overwritten when new
    primitives are added.
    """
    num_primitives[None] = 0


def _validate_color(color: Color) -> None:
    for i, component in enumerate(color):
        if component < 0.0 or component > 1.0:
            raise ValueError(f"Color component {i} = {component} is outside [0, 1]")


def validate_sphere(radius: float, color: Color) -> None:
    """Check sphere parameters without touching the scene table.

    Raises:
        ValueError: If the radius is not positive or a color component is
            outside [0, 1].
    """
    if not radius > 0.0:
        raise ValueError(f"Sphere radius must be positive, got {radius}")
    _validate_color(color)


def validate_plane(normal: Color, color: Color) -> None:
    """Check plane parameters without touching the scene table.

    Raises:
        ValueError: If the normal is not unit length or a color component
            is outside [0, 1].
    """
    length = math.sqrt(sum(c * c for c in normal))
    if abs(length - 1.0) > NORMAL_LENGTH_TOLERANCE:
        raise ValueError(f"Plane normal must be unit length, got length {length}")
    _validate_color(color)


def _append(kind: PrimitiveKind, vector: Color, scalar: float, color: Color) -> int:
    idx = num_primitives[None]
    if idx >= MAX_PRIMITIVES:
        raise RuntimeError(f"Maximum number of primitives ({MAX_PRIMITIVES}) exceeded")
    primitive_kinds[idx] = int(kind)
    primitive_vectors[idx] = vector
    primitive_scalars[idx] = scalar
    primitive_colors[idx] = color
    num_primitives[None] = idx + 1
    logger.debug("Added %s #%d: %s %s color=%s", kind.name, idx, vector, scalar, color)
    return idx


def add_sphere(center: Color, radius: float, color: Color) -> int:
    """Add a sphere to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere (must be positive).
        color: Flat RGB color, each component in [0, 1].

    Returns:
        The table index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of primitives is exceeded.
        ValueError: If the radius is not positive or a color component is
            outside [0, 1].
    """
    validate_sphere(radius, color)
    return _append(PrimitiveKind.SPHERE, tuple(center), float(radius), tuple(color))


def add_plane(normal: Color, offset: float, color: Color) -> int:
    """Add an infinite single-sided plane to the scene.

    The plane is dot(normal, p) + offset = 0. Only rays travelling along
    the normal can hit it.

    Args:
        normal: Unit normal of the plane.
        offset: Signed distance from the origin.
        color: Flat RGB color, each component in [0, 1].

    Returns:
        The table index of the added plane.

    Raises:
        RuntimeError: If the maximum number of primitives is exceeded.
        ValueError: If the normal is not unit length or a color component
            is outside [0, 1].
    """
    validate_plane(normal, color)
    return _append(PrimitiveKind.PLANE, tuple(normal), float(offset), tuple(color))


def get_primitive_count() -> int:
    """Get the number of primitives in the scene."""
    return int(num_primitives[None])


def get_primitive_kind(index: int) -> PrimitiveKind:
    """Get the kind of the primitive at a table index.

    Raises:
        IndexError: If no primitive is registered at that index.
    """
    if not 0 <= index < get_primitive_count():
        raise IndexError(f"No primitive at index {index}")
    return PrimitiveKind(int(primitive_kinds[index]))


@ti.func
def intersect_primitive(index: ti.i32, ray_origin: vec3, ray_direction: vec3) -> HitRecord:
    """Dispatch a ray to the intersection test of one table row.

    Args:
        index: Table index of the primitive.
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.

    Returns:
        The primitive's HitRecord, or a miss record for an unknown kind.
    """
    kind = primitive_kinds[index]
    rec = make_miss_record()
    if kind == int(PrimitiveKind.SPHERE):
        sphere = make_sphere(primitive_vectors[index], primitive_scalars[index], primitive_colors[index])
        rec = hit_sphere(ray_origin, ray_direction, sphere)
    elif kind == int(PrimitiveKind.PLANE):
        plane = make_plane(primitive_vectors[index], primitive_scalars[index], primitive_colors[index])
        rec = hit_plane(ray_origin, ray_direction, plane)
    return rec


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3) -> HitRecord:
    """Find the closest hit of a ray against every primitive in the scene.

    A primitive hit is accepted when 0 <= distance < closest, where closest
    starts at MAX_HIT_DISTANCE and shrinks with each accepted hit. Hits
    behind the ray origin are discarded, as are NaN distances.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.

    Returns:
        The HitRecord of the closest accepted hit, or a miss record.
    """
    closest = MAX_HIT_DISTANCE
    result = make_miss_record()

    for i in range(num_primitives[None]):
        rec = intersect_primitive(i, ray_origin, ray_direction)
        if rec.hit == 1 and rec.distance >= 0.0 and rec.distance < closest:
            closest = rec.distance
            result = rec

    return result
