"""TerrainBuilder: thin orchestrator that delegates to focused modules."""

import logging
import time

import numpy as np

from .cosmetics import centering_translation
from .ground import assemble_ground
from .models import CompileOptions, TerrainDefinition, TerrainResult, TriangleMesh
from .palette import Palette
from .vertices import VertexCache
from .water import assemble_water

logger = logging.getLogger(__name__)


class TerrainBuilder:
    def __init__(self, options: CompileOptions | None = None):
        """
        options: cosmetic settings; defaults come from the environment
        (see constants.py).
        """
        self.options = options or CompileOptions()

    def compile(self, definition: TerrainDefinition) -> TerrainResult:
        """Compile the masks of *definition* into ground and water meshes.

        Every call starts from a fresh vertex cache and random state, so
        nothing is shared between compilations.  Any TerrainError aborts
        the whole compilation.
        """
        t0 = time.perf_counter()
        options = self.options
        rng = np.random.RandomState(options.seed)
        cache = VertexCache()
        palette = Palette(definition.tiles,
                          definition.masks.ground_tile,
                          definition.masks.cliff_tile)

        logger.info(f"Compiling {definition.width}x{definition.height} terrain "
                    f"(seed={options.seed}, rotate={options.rotate_diagonals}, "
                    f"jitter={options.jitter})")

        ground_faces, ground_colors = assemble_ground(
            definition, cache, palette, options, rng)
        water_faces, water_colors = assemble_water(
            definition, cache, options, rng)

        shift = centering_translation(definition.offset)
        ground = TriangleMesh(cache.ground_array(), ground_faces,
                              ground_colors).translated(shift)
        water = TriangleMesh(cache.water_array(), water_faces,
                             water_colors).translated(shift)

        elapsed = time.perf_counter() - t0
        logger.info(f"Terrain compiled in {elapsed:.3f}s: "
                    f"{len(ground)} ground faces, {len(water)} water faces")
        return TerrainResult(ground=ground, water=water)


def compile_terrain(definition: TerrainDefinition,
                    options: CompileOptions | None = None) -> TerrainResult:
    """Compile *definition* with a one-off TerrainBuilder."""
    return TerrainBuilder(options).compile(definition)
