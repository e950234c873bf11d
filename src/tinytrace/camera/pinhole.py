"""Pinhole camera mapping pixels to primary rays.

The camera looks toward +z. The image plane (near plane) is
``near_distance`` units ahead of it and centered on the camera's x and y.
For pixel (x, y) of a width x height image:

    aspect = width / height
    px = camera.x + aspect * (x / width) - (aspect - 1) * 0.5 - 0.5
    py = camera.y + y / height - 0.5
    pz = camera.z + near_distance

The ray starts at the pixel position and points away from the camera
through it. Pixel row y = 0 maps to py = camera.y - 0.5 and is the first
row of the written image. Exactly one deterministic ray is produced per pixel.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
    >>> from tinytrace.camera.pinhole import PinholeCamera, get_ray, setup_camera
    >>> setup_camera(PinholeCamera())
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(512, 384, 1024, 768)  # Ray through image center
"""

from dataclasses import dataclass

import taichi as ti

from tinytrace.core.ray import Ray, make_ray
from tinytrace.core.vector import normalize, sub, vec3


@dataclass(frozen=True)
class PinholeCamera:
    """Configuration for the pinhole camera.

    Attributes:
        position: Camera position in world space (x, y, z). Moving x or y
            translates the image plane with it.
        near_distance: Distance from the camera to the near plane along +z.
    """

    position: tuple[float, float, float] = (0.0, 0.0, -8.0)
    near_distance: float = 2.0


_camera_position = ti.Vector.field(3, dtype=ti.f32, shape=())
_near_distance = ti.field(dtype=ti.f32, shape=())


def setup_camera(camera: PinholeCamera) -> None:
    """Load camera state into Taichi fields.

    Must be called from Python before rendering.

    Args:
        camera: Camera placement.

    Raises:
        ValueError: If near_distance is not positive.
    """
    if not camera.near_distance > 0.0:
        raise ValueError(f"Near plane distance must be positive, got {camera.near_distance}")
    _camera_position[None] = camera.position
    _near_distance[None] = camera.near_distance


@ti.func
def get_pixel_position(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """World-space position of pixel (x, y) on the near plane."""
    w = ti.cast(width, ti.f32)
    h = ti.cast(height, ti.f32)
    aspect_ratio = w / h
    camera_position = _camera_position[None]
    return vec3(
        camera_position.x + aspect_ratio * (ti.cast(x, ti.f32) / w) - (aspect_ratio - 1.0) * 0.5 - 0.5,
        camera_position.y + ti.cast(y, ti.f32) / h - 0.5,
        camera_position.z + _near_distance[None],
    )


@ti.func
def get_ray(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray for pixel (x, y).

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = first row written).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray starting on the near plane with unit direction pointing away
        from the camera position.
    """
    pixel_position = get_pixel_position(x, y, width, height)
    direction = normalize(sub(pixel_position, _camera_position[None]))
    return make_ray(pixel_position, direction)


def get_camera_info() -> dict[str, object]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with the camera position and near plane distance.
    """
    p = _camera_position[None]
    return {
        "position": (float(p[0]), float(p[1]), float(p[2])),
        "near_distance": float(_near_distance[None]),
    }
