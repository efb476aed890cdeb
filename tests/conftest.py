"""Pytest configuration and fixtures for terrain tests."""

import numpy as np
import pytest

from tileterrain.maps import cliff_map
from tileterrain.models import CompileOptions, Offset, TerrainDefinition, TerrainMasks

PALETTE = [
    {"color": "#008000"},
    {"color": "#555555"},
    {"color": "#569656"},
]


def make_definition(cliff_text, *, ground_tile=None, cliff_tile=None,
                    water=None, water_height=None, height=None,
                    tiles=None, offset=None):
    """Build a TerrainDefinition around a cliff text map.

    Floors default to palette entry 0, cliff faces to entry 1, and every
    corner mask to zeros.
    """
    cliff = cliff_map(cliff_text)
    h, w = len(cliff), len(cliff[0])
    masks = TerrainMasks(
        cliff=cliff,
        height=np.zeros((h + 1, w + 1)) if height is None else height,
        ground_tile=np.zeros((h, w), dtype=int) if ground_tile is None else ground_tile,
        cliff_tile=np.ones((h, w), dtype=int) if cliff_tile is None else cliff_tile,
        water=np.zeros((h, w), dtype=bool) if water is None else water,
        water_height=np.zeros((h + 1, w + 1)) if water_height is None else water_height,
    )
    return TerrainDefinition(masks=masks, tiles=PALETTE if tiles is None else tiles,
                             width=w, height=h, offset=offset or Offset())


@pytest.fixture
def definition_factory():
    """Factory for small terrain definitions."""
    return make_definition


@pytest.fixture
def flat_options():
    """Options with every random pass disabled."""
    return CompileOptions(seed=0).deterministic()


@pytest.fixture
def pool_definition():
    """A single water tile sunk one level into flat ground."""
    return make_definition("""
        111
        101
        111
    """, water=[[0, 0, 0], [0, 1, 0], [0, 0, 0]])
