"""Pytest configuration for tinytrace tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    # fast_math off keeps IEEE inf/NaN semantics for degenerate vectors
    ti.init(arch=ti.cpu, fast_math=False)
    yield


@pytest.fixture(autouse=True)
def clear_scene_data():
    """Clear the primitive table and render target around each test."""
    # Import here so fields are created after ti.init()
    from tinytrace.core.renderer import reset_render_target
    from tinytrace.scene.intersection import clear_scene

    clear_scene()
    reset_render_target()

    yield

    clear_scene()
    reset_render_target()
