"""Vector algebra for 3-component float vectors.

All functions are Taichi functions operating on ``taichi.math.vec3`` values.
Vectors are values inside kernels, so every operation returns a new vector
and never mutates its inputs.

Degenerate input is not guarded: ``normalize`` of a zero-length vector
divides by zero and yields IEEE inf/NaN components, which then propagate
silently through any computation that consumes them. That propagation
relies on IEEE semantics, so initialize Taichi with ``fast_math=False``;
under the default fast-math mode the compiler may assume finite values.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
    >>> from tinytrace.core.vector import cross, dot, normalize, vec3
    >>> @ti.kernel
    ... def check() -> ti.f32:
    ...     a = normalize(vec3(3.0, 0.0, 4.0))
    ...     return dot(cross(a, vec3(0.0, 1.0, 0.0)), a)
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.func
def add(a: vec3, b: vec3) -> vec3:
    """Component-wise sum a + b."""
    return vec3(a.x + b.x, a.y + b.y, a.z + b.z)


@ti.func
def sub(a: vec3, b: vec3) -> vec3:
    """Component-wise difference a - b."""
    return vec3(a.x - b.x, a.y - b.y, a.z - b.z)


@ti.func
def scale(v: vec3, s: ti.f32) -> vec3:
    """Multiply every component of v by the scalar s."""
    return vec3(v.x * s, v.y * s, v.z * s)


@ti.func
def scale_by(s: ti.f32, v: vec3) -> vec3:
    """Scalar-first form of scale(), so scale_by(s, v) == scale(v, s)."""
    return scale(v, s)


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        ax*bx + ay*by + az*bz.
    """
    return a.x * b.x + a.y * b.y + a.z * b.z


@ti.func
def magnitude(v: vec3) -> ti.f32:
    """Euclidean length of v."""
    return ti.sqrt(dot(v, v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Scale a vector to unit length.

    Multiplies by the reciprocal of the magnitude. A zero-length input
    produces inf/NaN components rather than raising. This holds only when
    Taichi runs with ``fast_math=False``.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
    """
    return scale(v, 1.0 / magnitude(v))


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the right-handed cross product a x b.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        A vector perpendicular to both a and b.
    """
    return vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


@ti.func
def saturate(x: ti.f32) -> ti.f32:
    """Clamp a scalar to the unit interval [0, 1]."""
    result = x
    if x < 0.0:
        result = 0.0
    elif x > 1.0:
        result = 1.0
    return result


@ti.func
def reflect(v: vec3, n: vec3) -> vec3:
    """Reflect a direction about a normal.

    Computes v - 2 * dot(v, n) * n. The normal should be unit length.
    Not used by the flat shading path; kept for recursive reflection.

    Args:
        v: The incoming direction.
        n: The surface normal (unit length).

    Returns:
        The reflected direction.
    """
    return sub(v, scale(n, 2.0 * dot(v, n)))
