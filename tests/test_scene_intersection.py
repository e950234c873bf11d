"""Unit tests for scene-level intersection.

Tests cover:
- Primitive table storage and clearing
- Validation of primitive parameters and capacity
- Closest-hit selection across spheres and planes
- Registration-order tie breaking
- Rejection of hits behind the origin and beyond MAX_HIT_DISTANCE
"""

import pytest
import taichi as ti


def _trace(origin, direction):
    """Intersect one ray with the current scene and return (hit, distance, color)."""
    from tinytrace.core.vector import vec3
    from tinytrace.scene.intersection import intersect_scene

    hit = ti.field(dtype=ti.i32, shape=())
    distance = ti.field(dtype=ti.f32, shape=())
    color = ti.field(dtype=ti.math.vec3, shape=())

    @ti.kernel
    def test_kernel(ox: ti.f32, oy: ti.f32, oz: ti.f32, dx: ti.f32, dy: ti.f32, dz: ti.f32):
        # Outer single-iteration loop keeps the scene fold serial
        for _ in range(1):
            rec = intersect_scene(vec3(ox, oy, oz), vec3(dx, dy, dz))
            hit[None] = rec.hit
            distance[None] = rec.distance
            color[None] = rec.color

    test_kernel(*origin, *direction)
    return hit[None], distance[None], tuple(color[None][i] for i in range(3))


class TestScenePrimitiveStorage:
    """Tests for the primitive table."""

    def test_add_sphere(self):
        from tinytrace.scene.intersection import (
            PrimitiveKind,
            add_sphere,
            get_primitive_count,
            get_primitive_kind,
        )

        assert get_primitive_count() == 0
        idx = add_sphere((0.0, 0.0, -4.0), 0.5, (1.0, 0.0, 0.0))
        assert idx == 0
        assert get_primitive_count() == 1
        assert get_primitive_kind(0) == PrimitiveKind.SPHERE

    def test_add_plane_after_sphere_keeps_order(self):
        from tinytrace.scene.intersection import (
            PrimitiveKind,
            add_plane,
            add_sphere,
            get_primitive_kind,
        )

        add_sphere((0.0, 0.0, -4.0), 0.5, (1.0, 0.0, 0.0))
        idx = add_plane((0.0, 1.0, 0.0), -0.5, (0.5, 0.5, 0.5))
        assert idx == 1
        assert get_primitive_kind(1) == PrimitiveKind.PLANE

    def test_clear_scene(self):
        from tinytrace.scene.intersection import add_sphere, clear_scene, get_primitive_count

        add_sphere((0.0, 0.0, 0.0), 1.0, (1.0, 1.0, 1.0))
        add_sphere((1.0, 0.0, 0.0), 1.0, (1.0, 1.0, 1.0))
        clear_scene()
        assert get_primitive_count() == 0

    def test_get_primitive_kind_out_of_range(self):
        from tinytrace.scene.intersection import get_primitive_kind

        with pytest.raises(IndexError):
            get_primitive_kind(0)

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_non_positive_radius_rejected(self, radius):
        from tinytrace.scene.intersection import add_sphere

        with pytest.raises(ValueError, match="radius"):
            add_sphere((0.0, 0.0, 0.0), radius, (1.0, 0.0, 0.0))

    def test_color_out_of_range_rejected(self):
        from tinytrace.scene.intersection import add_sphere

        with pytest.raises(ValueError, match="outside"):
            add_sphere((0.0, 0.0, 0.0), 1.0, (1.2, 0.0, 0.0))

    def test_non_unit_plane_normal_rejected(self):
        from tinytrace.scene.intersection import add_plane

        with pytest.raises(ValueError, match="unit length"):
            add_plane((0.0, 2.0, 0.0), 0.0, (0.5, 0.5, 0.5))

    def test_capacity_exceeded(self):
        from tinytrace.scene.intersection import MAX_PRIMITIVES, add_sphere

        for i in range(MAX_PRIMITIVES):
            add_sphere((float(i), 0.0, 0.0), 0.1, (1.0, 1.0, 1.0))
        with pytest.raises(RuntimeError, match="Maximum number of primitives"):
            add_sphere((0.0, 0.0, 0.0), 0.1, (1.0, 1.0, 1.0))


class TestSceneIntersection:
    """Tests for closest-hit selection."""

    def test_empty_scene_misses(self):
        hit, _, _ = _trace((0.0, 0.0, 0.0), (0.0, 0.0, 1.0))
        assert hit == 0

    def test_single_sphere(self):
        from tinytrace.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, -4.0), 0.5, (1.0, 0.0, 0.0))
        hit, distance, color = _trace((0.0, 0.0, -6.0), (0.0, 0.0, 1.0))

        assert hit == 1
        assert abs(distance - 1.5) < 1e-5
        assert color == pytest.approx((1.0, 0.0, 0.0))

    @pytest.mark.parametrize("near_first", [True, False])
    def test_closest_sphere_wins_regardless_of_order(self, near_first):
        from tinytrace.scene.intersection import add_sphere

        near = ((0.0, 0.0, 2.0), 0.5, (1.0, 0.0, 0.0))
        far = ((0.0, 0.0, 6.0), 0.5, (0.0, 0.0, 1.0))
        for args in (near, far) if near_first else (far, near):
            add_sphere(*args)

        hit, distance, color = _trace((0.0, 0.0, 0.0), (0.0, 0.0, 1.0))

        assert hit == 1
        assert abs(distance - 1.5) < 1e-5
        assert color == pytest.approx((1.0, 0.0, 0.0))

    def test_plane_in_front_of_sphere(self):
        from tinytrace.scene.intersection import add_plane, add_sphere

        add_sphere((0.0, 3.0, 0.0), 0.5, (1.0, 0.0, 0.0))
        add_plane((0.0, 1.0, 0.0), -1.0, (0.5, 0.5, 0.5))

        hit, distance, color = _trace((0.0, 0.0, 0.0), (0.0, 1.0, 0.0))

        assert hit == 1
        assert abs(distance - 1.0) < 1e-5
        assert color == pytest.approx((0.5, 0.5, 0.5))

    def test_exact_tie_keeps_first_registered(self):
        from tinytrace.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, 5.0), 1.0, (0.0, 1.0, 0.0))
        add_sphere((0.0, 0.0, 5.0), 1.0, (0.0, 0.0, 1.0))

        hit, _, color = _trace((0.0, 0.0, 0.0), (0.0, 0.0, 1.0))

        assert hit == 1
        assert color == pytest.approx((0.0, 1.0, 0.0))

    def test_hit_behind_origin_ignored(self):
        from tinytrace.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, -4.0), 0.5, (1.0, 0.0, 0.0))
        hit, _, _ = _trace((0.0, 0.0, 0.0), (0.0, 0.0, 1.0))
        assert hit == 0

    def test_hit_behind_origin_does_not_hide_hit_ahead(self):
        from tinytrace.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, -4.0), 0.5, (1.0, 0.0, 0.0))
        add_sphere((0.0, 0.0, 4.0), 0.5, (0.0, 1.0, 0.0))

        hit, distance, color = _trace((0.0, 0.0, 0.0), (0.0, 0.0, 1.0))

        assert hit == 1
        assert abs(distance - 3.5) < 1e-5
        assert color == pytest.approx((0.0, 1.0, 0.0))

    def test_hit_beyond_max_distance_ignored(self):
        from tinytrace.scene.intersection import add_plane

        add_plane((0.0, 1.0, 0.0), -200000.0, (0.5, 0.5, 0.5))
        hit, _, _ = _trace((0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
        assert hit == 0

    def test_single_sided_plane_ignored_from_above(self):
        from tinytrace.scene.intersection import add_plane

        add_plane((0.0, 1.0, 0.0), -0.5, (0.5, 0.5, 0.5))
        hit, _, _ = _trace((0.0, 2.0, 0.0), (0.0, -1.0, 0.0))
        assert hit == 0
