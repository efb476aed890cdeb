"""tileterrain package: compile tile masks into ground and water meshes.

Import constants FIRST so environment overrides and logging are set up
before the models read their defaults.
"""

from tileterrain import constants as _constants  # noqa: F401

from tileterrain.builder import TerrainBuilder, compile_terrain
from tileterrain.models import (
    CompileOptions, Level, Offset, RAMP, HOLE, TerrainDefinition,
    TerrainMasks, TerrainResult, TriangleMesh,
)
