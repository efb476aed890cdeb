"""Water surface assembly.

Water corners hug the ground: where a corner's column of ground points
rises above the water line, the water point is placed on the cliff face
between the levels around it, so the surface always touches the cliff.
Open water is projected straight up from the ground.
"""

import logging
import math

import numpy as np

from .cosmetics import nudge, rotate_diagonals
from .errors import MissingGroundError
from .ground import FLOOR_WINDING
from .palette import parse_color

logger = logging.getLogger(__name__)


def hug_ground(cache, x: int, y: int, height: float, open_nudge: float = 0.0) -> np.ndarray:
    """Position of the water point at corner (x, y) for water at *height*.

    *open_nudge* is only added to open water, which has no cliff to touch.
    """
    highest = cache.highest_level(x, y)
    if highest is None:
        raise MissingGroundError(x, y)

    low_level = cache.highest_level_at_most(x, y, math.floor(height))
    if low_level is None:
        low_level = cache.lowest_level(x, y)
    low = cache.position(x, y, low_level)

    # Water is at a cliff, interpolate up its face
    if low_level != highest:
        high = cache.position(x, y, highest)
        alpha = (height - low[2]) / (high[2] - low[2])
        return low + (high - low) * alpha

    # Water is in the open, project straight up
    point = low.copy()
    point[2] = height + open_nudge
    return point


def assemble_water(definition, cache, options, rng):
    """Build the water triangles for *definition* against the ground in *cache*.

    Must run after the ground is final (jittered) so the water meets it.
    Returns ``(faces, colors)`` indexing ``cache.water_vertices``.
    """
    water_mask = definition.masks.water
    water_height = definition.masks.water_height
    color = parse_color(options.water_color)

    def place(cx, cy, h):
        open_nudge = 0.0
        if options.water_nudge:
            open_nudge = float(nudge(rng, 1, options.water_nudge_scale)[0])
        return hug_ground(cache, cx, cy, h, open_nudge=open_nudge)

    faces: list[list[int]] = []
    for y in range(definition.height - 1, -1, -1):
        for x in range(definition.width):
            if not water_mask[y][x]:
                continue
            corners = [
                cache.get_or_create_water(
                    cx, cy, float(water_height[cy][cx]) + options.water_lift, place)
                for cx, cy in ((x, y), (x + 1, y), (x, y + 1), (x + 1, y + 1))
            ]
            for tri in FLOOR_WINDING:
                faces.append([corners[i] for i in tri])

    faces_arr = np.array(faces, dtype=np.int64).reshape(-1, 3)
    if options.rotate_diagonals:
        faces_arr = rotate_diagonals(faces_arr, rng)
    colors = np.tile(np.array(color, dtype=np.float64), (len(faces_arr), 1))

    logger.info(f"Water mesh: {len(cache.water_vertices)} verts, "
                f"{len(faces_arr)} faces")
    return faces_arr, colors
