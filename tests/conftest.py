"""Pytest configuration for vector_math tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    reset the runtime and invalidate fields created by earlier tests.
    """
    from vector_math.config import RuntimeConfig, init

    init(RuntimeConfig(arch="cpu", random_seed=42))
    yield
