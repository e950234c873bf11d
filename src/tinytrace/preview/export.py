"""Byte conversion and PNG output for rendered images.

Float channels become bytes by scaling with 255 and truncating toward zero.
Hit colors are never clamped upstream, so the conversion takes a color
policy:

    clamp: saturate to [0, 1] first (default)
    wrap:  no clamping; the truncated integer is reduced modulo 256

NaN channels become 0 under both policies. Under ``clamp`` +inf becomes 255
and -inf becomes 0; under ``wrap`` infinities become 0.

The PNG sink takes a row-major, top-to-bottom RGB byte buffer and reports
success as a boolean.

Example:
    >>> from tinytrace.preview.export import to_rgb_bytes, write_png
    >>> pixels = to_rgb_bytes(image, policy="clamp")
    >>> ok = write_png("render.png", pixels, width=1024, height=768)
"""

from __future__ import annotations

import logging
from typing import Literal, Optional, Union

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)

# Type alias for out-of-range channel handling
ColorPolicy = Literal["clamp", "wrap"]
COLOR_POLICIES = ("clamp", "wrap")


def to_rgb_bytes(
    image: npt.NDArray[np.float32],
    policy: ColorPolicy = "clamp",
) -> npt.NDArray[np.uint8]:
    """Convert a float RGB image to 8-bit channels.

    Args:
        image: Float image array of shape (H, W, 3).
        policy: "clamp" or "wrap".

    Returns:
        Array of the same shape with dtype uint8.

    Raises:
        ValueError: If the policy is unknown.
    """
    if policy == "clamp":
        image = np.nan_to_num(image, nan=0.0, posinf=1.0, neginf=0.0)
        image = np.clip(image, 0.0, 1.0)
        return (image * 255.0).astype(np.uint8)
    if policy == "wrap":
        image = np.nan_to_num(image, nan=0.0, posinf=0.0, neginf=0.0)
        truncated = np.trunc(image * 255.0).astype(np.int64)
        return np.mod(truncated, 256).astype(np.uint8)
    raise ValueError(f"Unknown color policy: {policy!r}")


def write_png(
    filepath: str,
    pixels: Union[bytes, bytearray, npt.NDArray[np.uint8]],
    width: int,
    height: int,
    channels: int = 3,
    row_stride: Optional[int] = None,
) -> bool:
    """Write an RGB byte buffer to a PNG file.

    Args:
        filepath: Output file path (should end in .png).
        pixels: Row-major buffer, first row at the top, `channels` bytes per
            pixel in R, G, B order.
        width: Image width in pixels.
        height: Image height in pixels.
        channels: Bytes per pixel. Only 3 (RGB) is supported.
        row_stride: Bytes per row. Defaults to width * channels; larger
            values skip trailing padding bytes in each row.

    Returns:
        True if the file was written, False if saving failed.

    Raises:
        ValueError: If the buffer layout does not match the dimensions.
    """
    if channels != 3:
        raise ValueError(f"Only 3-channel RGB buffers are supported, got {channels}")
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    row_bytes = width * channels
    if row_stride is None:
        row_stride = row_bytes
    if row_stride < row_bytes:
        raise ValueError(f"Row stride {row_stride} is shorter than a row ({row_bytes} bytes)")

    if isinstance(pixels, np.ndarray):
        data = np.ascontiguousarray(pixels, dtype=np.uint8).reshape(-1)
    else:
        data = np.frombuffer(bytes(pixels), dtype=np.uint8)
    if data.size != row_stride * height:
        raise ValueError(
            f"Pixel buffer has {data.size} bytes, expected {row_stride * height} "
            f"({height} rows of {row_stride})"
        )
    rows = data.reshape(height, row_stride)[:, :row_bytes]
    image = rows.reshape(height, width, channels)

    try:
        PILImage.fromarray(np.ascontiguousarray(image)).save(filepath)
    except (OSError, ValueError) as e:
        logger.error("Cannot save to %s: %s", filepath, e)
        return False

    logger.info("Saved %dx%d image to %s", width, height, filepath)
    return True


def save_png_from_array(
    image: npt.NDArray[np.float32],
    filepath: str,
    *,
    policy: ColorPolicy = "clamp",
) -> bool:
    """Convert a float image with to_rgb_bytes() and write it as PNG.

    Args:
        image: Float image array of shape (H, W, 3), row 0 at the top.
        filepath: Output file path.
        policy: Color policy for out-of-range channels.

    Returns:
        True if the file was written.
    """
    pixels = to_rgb_bytes(image, policy=policy)
    height, width = pixels.shape[:2]
    return write_png(filepath, pixels, width, height)
