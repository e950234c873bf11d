"""Scene module for primitive storage and closest-hit queries.

Components:
    intersection: Ordered primitive table in Taichi fields, closest-hit fold
    config: Frozen scene/render configuration and scene loading

Primitives are evaluated in registration order; the closest hit with a
non-negative distance below MAX_HIT_DISTANCE wins.
"""

from .config import (
    DEFAULT_RENDER_CONFIG,
    DEFAULT_SCENE,
    PlaneInfo,
    PrimitiveInfo,
    RenderConfig,
    SceneConfig,
    SphereInfo,
    build_scene,
)
from .intersection import (
    MAX_HIT_DISTANCE,
    MAX_PRIMITIVES,
    PrimitiveKind,
    add_plane,
    add_sphere,
    clear_scene,
    get_primitive_count,
    get_primitive_kind,
    intersect_primitive,
    intersect_scene,
)

__all__ = [
    # Intersection module
    "PrimitiveKind",
    "add_sphere",
    "add_plane",
    "clear_scene",
    "get_primitive_count",
    "get_primitive_kind",
    "intersect_primitive",
    "intersect_scene",
    "MAX_PRIMITIVES",
    "MAX_HIT_DISTANCE",
    # Config module
    "SphereInfo",
    "PlaneInfo",
    "PrimitiveInfo",
    "SceneConfig",
    "RenderConfig",
    "DEFAULT_SCENE",
    "DEFAULT_RENDER_CONFIG",
    "build_scene",
]
