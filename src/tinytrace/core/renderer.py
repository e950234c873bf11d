"""Render target and per-pixel render kernel.

Every pixel is evaluated independently: generate the primary ray, find the
closest scene hit, shade it. No state is carried between pixels, so the
kernel's outer loop may run in parallel and re-rendering the same
configuration produces an identical buffer.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
    >>> from tinytrace.core.renderer import render_to_file
    >>> from tinytrace.scene.config import DEFAULT_RENDER_CONFIG
    >>> render_to_file(DEFAULT_RENDER_CONFIG, "render.png")
    True
"""

import logging
import time

import numpy as np
import numpy.typing as npt
import taichi as ti

from tinytrace.camera.pinhole import get_ray, setup_camera
from tinytrace.core.vector import vec3
from tinytrace.preview.export import to_rgb_bytes, write_png
from tinytrace.scene.config import MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH, RenderConfig, build_scene
from tinytrace.scene.intersection import intersect_scene
from tinytrace.shading.shader import ShadingMode, shade

logger = logging.getLogger(__name__)

# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Color buffer indexed [x, y], preallocated to max size
_color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Set the active image dimensions and clear the color buffer.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If a dimension is not positive or exceeds the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1
    clear_render_target()
    logger.debug("Render target set to %dx%d", width, height)


def clear_render_target() -> None:
    """Clear the color buffer to zero."""
    _color_buffer.fill(0.0)


def reset_render_target() -> None:
    """Clear the buffer and mark the render target as not set up."""
    clear_render_target()
    _render_target_initialized[None] = 0


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.func
def trace_pixel(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32, mode: ti.i32) -> vec3:
    """Compute the color of pixel (x, y).

    Args:
        x: Pixel column.
        y: Pixel row (0 = first row of the output image).
        width: Image width in pixels.
        height: Image height in pixels.
        mode: A ShadingMode value.

    Returns:
        The unclamped RGB color of the pixel.
    """
    ray = get_ray(x, y, width, height)
    record = intersect_scene(ray.origin, ray.direction)
    return shade(record, ray.direction, mode)


@ti.kernel
def _render_region(
    x0: ti.i32,
    y0: ti.i32,
    x1: ti.i32,
    y1: ti.i32,
    width: ti.i32,
    height: ti.i32,
    mode: ti.i32,
):
    """Render pixels x0 <= x < x1, y0 <= y < y1 into the color buffer."""
    for i, j in ti.ndrange((x0, x1), (y0, y1)):
        _color_buffer[i, j] = trace_pixel(i, j, width, height, mode)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_image(shading: ShadingMode = ShadingMode.FLAT) -> None:
    """Render every pixel of the active render target.

    The camera and scene must already be loaded.

    Args:
        shading: How hits are colored.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    _render_region(0, 0, width, height, width, height, int(shading))


def render_pixel(
    x: int,
    y: int,
    shading: ShadingMode = ShadingMode.FLAT,
) -> tuple[float, float, float]:
    """Render a single pixel and return its color.

    Used for testing and debugging individual pixels.

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = first row of the output image).
        shading: How hits are colored.

    Returns:
        Tuple of (R, G, B) float values.

    Raises:
        RuntimeError: If render target has not been set up.
        IndexError: If the pixel lies outside the render target.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    if not (0 <= x < width and 0 <= y < height):
        raise IndexError(f"Pixel ({x}, {y}) outside {width}x{height} image")
    _render_region(x, y, x + 1, y + 1, width, height, int(shading))

    color = _color_buffer[x, y]
    return (float(color[0]), float(color[1]), float(color[2]))


def get_image_numpy() -> npt.NDArray[np.float32]:
    """Get the rendered image as a NumPy array.

    Values are not clamped. Row 0 of the result is pixel row y = 0, which
    is the first (top) row of the written image.

    Returns:
        NumPy float32 array of shape (height, width, 3).

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    full_image = _color_buffer.to_numpy()

    # Extract active region and transpose from (width, height, 3) to (height, width, 3)
    image = np.transpose(full_image[:width, :height, :], (1, 0, 2))

    return np.ascontiguousarray(image, dtype=np.float32)


def render(config: RenderConfig) -> npt.NDArray[np.uint8]:
    """Render a configuration to an 8-bit RGB buffer.

    Loads the camera and scene, renders every pixel, and converts channels
    to bytes with the configured color policy.

    Args:
        config: Image size, camera, scene, shading and color policy.

    Returns:
        Array of shape (height, width, 3) with dtype uint8, row-major and
        top-to-bottom.
    """
    start_time = time.perf_counter()

    setup_camera(config.camera)
    build_scene(config.scene)
    setup_render_target(config.width, config.height)
    render_image(config.shading)
    pixels = to_rgb_bytes(get_image_numpy(), policy=config.color_policy)

    logger.info(
        "Rendered %dx%d image in %.2fs",
        config.width,
        config.height,
        time.perf_counter() - start_time,
    )
    return pixels


def render_to_file(config: RenderConfig, filepath: str) -> bool:
    """Render a configuration and write it as PNG.

    The render always completes before the write is attempted.

    Args:
        config: What to render.
        filepath: Output file path.

    Returns:
        True if the image was saved, False if the image sink failed.
    """
    pixels = render(config)
    return write_png(filepath, pixels, config.width, config.height)
