"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization for the preview window tests, which must happen once
per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu)
    yield


@pytest.fixture
def world():
    """A fresh copy of the default two-sphere world."""
    from whitted.scene.world import default_world

    return default_world()
