"""Minimal Taichi ray tracer.

Casts one primary ray per pixel from a pinhole camera into a small static
scene (a sphere over a ground plane), keeps the nearest hit, and shades it
with the primitive's flat color or a vertical sky gradient on a miss.

Subpackages:
    core: Vector algebra, ray structure, and the per-pixel render loop
    geometry: Hit records and analytic ray-sphere / ray-plane tests
    scene: Ordered primitive table, closest-hit selection, scene configuration
    camera: Pinhole camera raster-to-ray mapping
    shading: Flat shading and sky gradient
    preview: Byte conversion and PNG output
"""

__version__ = "0.1.0"
