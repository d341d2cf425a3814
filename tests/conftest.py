"""
Shared fixtures for the terrain generator tests.
"""

import logging

import numpy as np
import pytest

from terrain_generator.generator import TerrainGenerator


@pytest.fixture
def logger():
    """Logger handed to every generator under test."""
    return logging.getLogger("test_terrain_generator")


@pytest.fixture
def identity_table():
    """The identity permutation [0, 1, ..., 255]."""
    return np.arange(256)


@pytest.fixture
def identity_generator(logger, identity_table):
    """A 3x3 generator with a known, fixed permutation table."""
    return TerrainGenerator(config={}, logger=logger, permutation_table=identity_table)
