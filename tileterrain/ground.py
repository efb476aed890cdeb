"""Ground mesh assembly: floors, cliff walls and ramp connectors.

Tiles are scanned bottom row first (descending y, ascending x).  Each
tile emits its own floor plus the walls on its left and top edges; the
tiles to the right and below own the remaining edges, so no wall is
emitted twice.
"""

import logging

import numpy as np

from .cosmetics import jitter_offsets, rotate_diagonals
from .heights import cell_at, representative_level, resolve_tile
from .models import CornerHeights, Level, Ramp

logger = logging.getLogger(__name__)

# Quad corners are ordered (top-left, top-right, bottom-left, bottom-right);
# for walls (low-a, low-b, high-a, high-b).
FLOOR_WINDING = ((1, 0, 2), (1, 2, 3))

# (vertical boundary, current tile is the low side, first triangle) -> corners
# Keeps walls facing the low side whichever neighbour is taller.
WALL_WINDING = {
    (True, True, True): (1, 0, 2),
    (True, True, False): (1, 2, 3),
    (True, False, True): (2, 0, 1),
    (True, False, False): (2, 1, 3),
    (False, True, True): (2, 0, 1),
    (False, True, False): (2, 1, 3),
    (False, False, True): (1, 0, 2),
    (False, False, False): (1, 2, 3),
}

# Ramp edges as (corner a, corner b, neighbour direction)
RAMP_EDGES = (
    (0, 1, (0, -1)),
    (1, 3, (1, 0)),
    (3, 2, (0, 1)),
    (2, 0, (-1, 0)),
)


def _corner_coords(x, y):
    return ((x, y), (x + 1, y), (x, y + 1), (x + 1, y + 1))


class _GroundAssembly:
    """Collects index triangles for one ground mesh."""

    def __init__(self, definition, cache, palette):
        self.definition = definition
        self.cliff_mask = definition.masks.cliff
        self.height_mask = definition.masks.height
        self.cache = cache
        self.palette = palette

        self.faces: list[list[int]] = []
        self.colors: list[tuple[float, float, float]] = []
        # Single triangles; appended after the quad-based rotation pass
        self.connector_faces: list[list[int]] = []
        self.connector_colors: list[tuple[float, float, float]] = []
        self.wall_quads = 0

    def run(self):
        for y in range(self.definition.height - 1, -1, -1):
            for x in range(self.definition.width):
                cell = self.cliff_mask[y][x]
                if isinstance(cell, Level):
                    self._level_tile(x, y, cell.height)
                elif isinstance(cell, Ramp):
                    self._ramp_tile(x, y)

    # ── Emitters ─────────────────────────────────────────────────────

    def _undulation(self, x, y):
        hm = self.height_mask
        return (float(hm[y][x]), float(hm[y][x + 1]),
                float(hm[y + 1][x]), float(hm[y + 1][x + 1]))

    def _quad(self, corners, winding, color):
        for tri in winding:
            self.faces.append([corners[i] for i in tri])
            self.colors.append(color)

    def _floor(self, x, y, levels, undulation):
        corners = [self.cache.get_or_create(cx, cy, level, off)
                   for (cx, cy), level, off
                   in zip(_corner_coords(x, y), levels, undulation)]
        self._quad(corners, FLOOR_WINDING, self.palette.ground_color(x, y))
        return corners

    def _wall(self, x, y, vertical, level, other, undulation):
        """Unit quads between *level* and *other* on the left (vertical)
        or top edge of tile (x, y)."""
        current_is_low = level < other
        low, high = (level, other) if current_is_low else (other, level)

        tl, tr, bl, _ = undulation
        if vertical:
            (ax, ay, a_off), (bx, by, b_off) = (x, y, tl), (x, y + 1, bl)
        else:
            (ax, ay, a_off), (bx, by, b_off) = (x, y, tl), (x + 1, y, tr)

        winding = (WALL_WINDING[(vertical, current_is_low, True)],
                   WALL_WINDING[(vertical, current_is_low, False)])
        color = self.palette.cliff_color(x, y)
        get = self.cache.get_or_create

        z = low
        while z < high:
            corners = [get(ax, ay, z, a_off), get(bx, by, z, b_off),
                       get(ax, ay, z + 1, a_off), get(bx, by, z + 1, b_off)]
            self._quad(corners, winding, color)
            self.wall_quads += 1
            z += 1

    # ── Tile kinds ───────────────────────────────────────────────────

    def _level_tile(self, x, y, level):
        undulation = self._undulation(x, y)
        self._floor(x, y, (level,) * 4, undulation)

        # Left wall (the tile to the right owns its own left wall)
        if x > 0:
            other = representative_level(self.cliff_mask, x - 1, y)
            if other is not None and other != level:
                self._wall(x, y, True, level, other, undulation)

        # Top wall (the tile below owns its own top wall)
        if y > 0:
            other = representative_level(self.cliff_mask, x, y - 1)
            if other is not None and other != level:
                self._wall(x, y, False, level, other, undulation)

    def _ramp_tile(self, x, y):
        corners: CornerHeights = resolve_tile(self.cliff_mask, x, y)
        undulation = self._undulation(x, y)
        indices = self._floor(x, y, corners, undulation)
        coords = _corner_coords(x, y)
        cliff_color = self.palette.cliff_color(x, y)

        # Close the stair-step gap against flat neighbours
        for a, b, (nx, ny) in RAMP_EDGES:
            if isinstance(cell_at(self.cliff_mask, x + nx, y + ny), Ramp):
                continue
            if corners[a] == corners[b]:
                continue

            z = min(corners[a], corners[b])
            higher, lower = (a, b) if corners[a] > corners[b] else (b, a)
            lower_z = self.cache.vertices[indices[lower]][2]
            hx, hy = coords[higher]
            beneath = self.cache.get_or_create(hx, hy, z, lower_z - z)

            self.connector_faces.append([indices[a], indices[b], beneath])
            self.connector_colors.append(cliff_color)

        min_height = corners.minimum()

        # Left wall, only where the left edge slopes
        if corners.top_left != corners.bottom_left and x > 0:
            left = cell_at(self.cliff_mask, x - 1, y)
            if isinstance(left, Level) and left.height != min_height:
                self._wall(x, y, True, min_height, left.height, undulation)

        # Top wall, only where the top edge slopes
        if corners.top_left != corners.top_right and y > 0:
            above = cell_at(self.cliff_mask, x, y - 1)
            if isinstance(above, Level) and above.height != min_height:
                self._wall(x, y, False, min_height, above.height, undulation)


def assemble_ground(definition, cache, palette, options, rng):
    """Build the ground triangles for *definition* into *cache*.

    Returns ``(faces, colors)`` as ``(m, 3)`` arrays.  Diagonal rotation
    and vertex jitter are applied here when *options* enables them; the
    jitter moves the cached points in place so later water hugging sees
    the final ground.
    """
    asm = _GroundAssembly(definition, cache, palette)
    asm.run()

    faces = np.array(asm.faces, dtype=np.int64).reshape(-1, 3)
    if options.rotate_diagonals:
        faces = rotate_diagonals(faces, rng)

    connectors = np.array(asm.connector_faces, dtype=np.int64).reshape(-1, 3)
    faces = np.vstack([faces, connectors])
    colors = np.array(asm.colors + asm.connector_colors,
                      dtype=np.float64).reshape(-1, 3)

    if options.jitter and len(cache):
        cache.displace(jitter_offsets(rng, len(cache),
                                      horizontal=options.jitter_horizontal,
                                      vertical=options.jitter_vertical))

    logger.info(f"Ground mesh: {len(cache)} verts, {len(faces)} faces "
                f"({asm.wall_quads} wall quads, "
                f"{len(connectors)} ramp connectors)")
    return faces, colors
