"""Camera module for primary ray generation.

Components:
    pinhole: Fixed pinhole camera with a near image plane

Ray generation takes integer pixel coordinates and image dimensions and
runs inside Taichi kernels, one ray per pixel.
"""

from .pinhole import (
    PinholeCamera,
    get_camera_info,
    get_pixel_position,
    get_ray,
    setup_camera,
)

__all__ = [
    "PinholeCamera",
    "setup_camera",
    "get_ray",
    "get_pixel_position",
    "get_camera_info",
]
