"""Immutable scene and render configuration.

Scene contents, camera placement and image size are plain frozen
dataclasses so the render pipeline can be driven with arbitrary inputs in
tests while the shipped defaults stay fixed:

    - 1024 x 768 image
    - camera at (0, 0, -8) with the near plane 2 units ahead
    - red sphere at (0, 0, -4), radius 0.5
    - gray single-sided plane dot((0, 1, 0), p) - 0.5 = 0

Example:
    >>> from tinytrace.scene.config import DEFAULT_RENDER_CONFIG, build_scene
    >>> build_scene(DEFAULT_RENDER_CONFIG.scene)
    2
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Union

from tinytrace.camera.pinhole import PinholeCamera
from tinytrace.preview.export import COLOR_POLICIES, ColorPolicy
from tinytrace.scene.intersection import (
    MAX_PRIMITIVES,
    add_plane,
    add_sphere,
    clear_scene,
    validate_plane,
    validate_sphere,
)
from tinytrace.shading.shader import ShadingMode

logger = logging.getLogger(__name__)

# Maximum supported image dimensions (the render target is preallocated to this size)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048


@dataclass(frozen=True)
class SphereInfo:
    """A sphere entry in a scene configuration.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere.
        color: Flat RGB color, each component in [0, 1].
    """

    center: tuple[float, float, float]
    radius: float
    color: tuple[float, float, float]


@dataclass(frozen=True)
class PlaneInfo:
    """A plane entry in a scene configuration.

    Attributes:
        normal: Unit normal of the plane.
        offset: Signed distance from the origin (dot(normal, p) + offset = 0).
        color: Flat RGB color, each component in [0, 1].
    """

    normal: tuple[float, float, float]
    offset: float
    color: tuple[float, float, float]


PrimitiveInfo = Union[SphereInfo, PlaneInfo]


@dataclass(frozen=True)
class SceneConfig:
    """Ordered primitives of a scene. Order decides exact-distance ties."""

    primitives: tuple[PrimitiveInfo, ...] = ()


DEFAULT_SCENE = SceneConfig(
    primitives=(
        SphereInfo(center=(0.0, 0.0, -4.0), radius=0.5, color=(1.0, 0.0, 0.0)),
        PlaneInfo(normal=(0.0, 1.0, 0.0), offset=-0.5, color=(0.5, 0.5, 0.5)),
    )
)


@dataclass(frozen=True)
class RenderConfig:
    """Everything needed to produce one image.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        camera: Pinhole camera placement.
        scene: Scene contents.
        shading: How hits are colored.
        color_policy: How out-of-range channels become bytes.
    """

    width: int = 1024
    height: int = 768
    camera: PinholeCamera = field(default_factory=PinholeCamera)
    scene: SceneConfig = DEFAULT_SCENE
    shading: ShadingMode = ShadingMode.FLAT
    color_policy: ColorPolicy = "clamp"

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        if self.width > MAX_IMAGE_WIDTH or self.height > MAX_IMAGE_HEIGHT:
            raise ValueError(
                f"Image dimensions ({self.width}x{self.height}) exceed maximum supported "
                f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
            )
        if self.color_policy not in COLOR_POLICIES:
            raise ValueError(f"Unknown color policy: {self.color_policy!r}")


DEFAULT_RENDER_CONFIG = RenderConfig()


def build_scene(config: SceneConfig) -> int:
    """Replace the scene table with the primitives of a configuration.

    Every entry is checked before the table is touched, so a configuration
    that fails validation leaves the previously loaded scene in place.
    Primitives are registered in configuration order.

    Args:
        config: The scene to load.

    Returns:
        The number of primitives registered.

    Raises:
        RuntimeError: If the configuration exceeds the primitive capacity.
        ValueError: If a primitive has invalid parameters.
        TypeError: If an entry is neither a SphereInfo nor a PlaneInfo.
    """
    if len(config.primitives) > MAX_PRIMITIVES:
        raise RuntimeError(
            f"Maximum number of primitives ({MAX_PRIMITIVES}) exceeded: {len(config.primitives)}"
        )
    for info in config.primitives:
        if isinstance(info, SphereInfo):
            validate_sphere(info.radius, info.color)
        elif isinstance(info, PlaneInfo):
            validate_plane(info.normal, info.color)
        else:
            raise TypeError(f"Unsupported primitive: {info!r}")

    clear_scene()
    for info in config.primitives:
        if isinstance(info, SphereInfo):
            add_sphere(info.center, info.radius, info.color)
        else:
            add_plane(info.normal, info.offset, info.color)
    logger.debug("Scene built with %d primitives", len(config.primitives))
    return len(config.primitives)
