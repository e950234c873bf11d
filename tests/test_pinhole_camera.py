"""Unit tests for the pinhole camera mapping.

Tests cover:
- Camera setup and state readback
- Ray through the image center
- Corner pixel position and direction
- Unit-length directions across the raster
"""

import math

import pytest
import taichi as ti


def _get_ray(x, y, width, height):
    from tinytrace.camera.pinhole import get_ray

    origin = ti.field(dtype=ti.math.vec3, shape=())
    direction = ti.field(dtype=ti.math.vec3, shape=())

    @ti.kernel
    def test_kernel(px: ti.i32, py: ti.i32, w: ti.i32, h: ti.i32):
        ray = get_ray(px, py, w, h)
        origin[None] = ray.origin
        direction[None] = ray.direction

    test_kernel(x, y, width, height)
    return (
        tuple(origin[None][i] for i in range(3)),
        tuple(direction[None][i] for i in range(3)),
    )


def _expected_ray(x, y, width, height, camera=(0.0, 0.0, -8.0), near=2.0):
    aspect = width / height
    pixel = (
        camera[0] + aspect * (x / width) - (aspect - 1.0) * 0.5 - 0.5,
        camera[1] + y / height - 0.5,
        camera[2] + near,
    )
    offset = [p - c for p, c in zip(pixel, camera)]
    length = math.sqrt(sum(v * v for v in offset))
    return pixel, tuple(v / length for v in offset)


class TestCameraSetup:
    """Tests for camera setup."""

    def test_setup_camera_stores_state(self):
        from tinytrace.camera.pinhole import PinholeCamera, get_camera_info, setup_camera

        setup_camera(PinholeCamera(position=(1.0, 2.0, -3.0), near_distance=1.5))

        info = get_camera_info()
        assert info["position"] == pytest.approx((1.0, 2.0, -3.0))
        assert info["near_distance"] == pytest.approx(1.5)

    @pytest.mark.parametrize("near", [0.0, -2.0])
    def test_non_positive_near_distance(self, near):
        from tinytrace.camera.pinhole import PinholeCamera, setup_camera

        with pytest.raises(ValueError, match="Near plane"):
            setup_camera(PinholeCamera(near_distance=near))


class TestRayGeneration:
    """Tests for get_ray."""

    def test_center_pixel_looks_down_z(self):
        from tinytrace.camera.pinhole import PinholeCamera, setup_camera

        setup_camera(PinholeCamera())
        origin, direction = _get_ray(512, 384, 1024, 768)

        assert origin == pytest.approx((0.0, 0.0, -6.0), abs=1e-6)
        assert direction == pytest.approx((0.0, 0.0, 1.0), abs=1e-6)

    @pytest.mark.parametrize(
        "x, y",
        [(0, 0), (1023, 0), (0, 767), (1023, 767), (100, 600)],
    )
    def test_matches_mapping_formula(self, x, y):
        from tinytrace.camera.pinhole import PinholeCamera, setup_camera

        setup_camera(PinholeCamera())
        origin, direction = _get_ray(x, y, 1024, 768)
        expected_origin, expected_direction = _expected_ray(x, y, 1024, 768)

        assert origin == pytest.approx(expected_origin, abs=1e-5)
        assert direction == pytest.approx(expected_direction, abs=1e-5)
        assert abs(math.sqrt(sum(v * v for v in direction)) - 1.0) < 1e-5

    def test_top_row_points_down_y(self):
        """Row y = 0 maps to py = -0.5."""
        from tinytrace.camera.pinhole import PinholeCamera, setup_camera

        setup_camera(PinholeCamera())
        origin, direction = _get_ray(512, 0, 1024, 768)

        assert abs(origin[1] - (-0.5)) < 1e-6
        assert direction[1] < 0.0

    def test_square_image_has_no_aspect_shift(self):
        from tinytrace.camera.pinhole import PinholeCamera, setup_camera

        setup_camera(PinholeCamera())
        origin, _ = _get_ray(0, 0, 64, 64)

        assert origin == pytest.approx((-0.5, -0.5, -6.0), abs=1e-6)

    def test_custom_camera(self):
        from tinytrace.camera.pinhole import PinholeCamera, setup_camera

        camera = PinholeCamera(position=(0.0, 1.0, -10.0), near_distance=4.0)
        setup_camera(camera)
        origin, direction = _get_ray(10, 20, 64, 48)
        expected_origin, expected_direction = _expected_ray(
            10, 20, 64, 48, camera=camera.position, near=camera.near_distance
        )

        assert origin == pytest.approx(expected_origin, abs=1e-5)
        assert direction == pytest.approx(expected_direction, abs=1e-5)

    def test_off_axis_camera_translates_view(self):
        """Moving the camera in x shifts the image plane without skewing rays."""
        from tinytrace.camera.pinhole import PinholeCamera, setup_camera

        setup_camera(PinholeCamera(position=(3.0, -1.0, -8.0)))
        origin, direction = _get_ray(512, 384, 1024, 768)

        assert origin == pytest.approx((3.0, -1.0, -6.0), abs=1e-6)
        assert direction == pytest.approx((0.0, 0.0, 1.0), abs=1e-6)
