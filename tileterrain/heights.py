"""Corner height resolution for cliff masks.

Explicit tiles are crisp steps: all four corners sit at the tile's level.
Ramp tiles have no height of their own; each corner is inferred from the
neighbouring tiles so that ramps blend smoothly between the levels they
connect, including diagonal and branching ramp runs.
"""

import logging

from .errors import IslandRampError
from .models import CliffCell, CliffMask, CornerHeights, Level, Ramp

logger = logging.getLogger(__name__)

# Diagonal unit vectors (dx, dy); y grows downwards through the mask rows.
CORNERS = {
    'TOP_LEFT': (-1, -1),
    'TOP_RIGHT': (1, -1),
    'BOTTOM_LEFT': (-1, 1),
    'BOTTOM_RIGHT': (1, 1),
}


def cell_at(cliff_mask: CliffMask, x: int, y: int) -> CliffCell | None:
    """Return the cell at (x, y), or None when it lies off the grid."""
    if y < 0 or y >= len(cliff_mask):
        return None
    row = cliff_mask[y]
    if x < 0 or x >= len(row):
        return None
    return row[x]


def _walk(cliff_mask, x, y, dx, dy):
    """Step from (x, y) through consecutive ramps to the first other cell.

    Returns that cell's level, or None if the walk leaves the grid or
    ends on a hole.
    """
    cx, cy = x + dx, y + dy
    cell = cell_at(cliff_mask, cx, cy)
    while isinstance(cell, Ramp):
        cx += dx
        cy += dy
        cell = cell_at(cliff_mask, cx, cy)
    if isinstance(cell, Level):
        return cell.height
    return None


def _average(a, b):
    if a is None or b is None:
        return None
    return (a + b) / 2


def _ramp_estimate(cliff_mask, x, y, dx, dy):
    far = _walk(cliff_mask, x, y, dx, dy)
    near = _walk(cliff_mask, x, y, -dx, -dy)

    # A symmetric run says nothing about this corner; ask the crossing
    # diagonal instead.
    if far == near and dx != 0 and dy != 0:
        adjacent = _walk(cliff_mask, x, y, -dx, dy)
        adjacent_opposite = _walk(cliff_mask, x, y, dx, -dy)
        return _average(adjacent, adjacent_opposite)

    return _average(far, near)


def resolve_corner(cliff_mask: CliffMask, x: int, y: int,
                   direction: tuple[int, int]) -> float:
    """Height of the corner of tile (x, y) lying in *direction*.

    Raises IslandRampError when a ramp corner cannot be resolved from
    any neighbour.
    """
    cell = cell_at(cliff_mask, x, y)
    if isinstance(cell, Level):
        return cell.height

    dx, dy = direction
    checks = [(dx, dy)]
    if dx != 0 and dy != 0:
        checks += [(0, dy), (dx, 0)]

    neighbours = [cell_at(cliff_mask, x + cx, y + cy) for cx, cy in checks]

    explicit = [n.height for n in neighbours if isinstance(n, Level)]
    if len(explicit) == len(checks):
        return max(explicit)

    candidates = [max(explicit)] if explicit else []
    for (cx, cy), neighbour in zip(checks, neighbours):
        if not isinstance(neighbour, Ramp):
            continue
        estimate = _ramp_estimate(cliff_mask, x, y, cx, cy)
        if estimate is not None:
            candidates.append(estimate)

    if not candidates:
        logger.debug(f"Island ramp at ({x}, {y}) towards {direction}")
        raise IslandRampError(x, y, direction)

    return max(candidates)


def resolve_tile(cliff_mask: CliffMask, x: int, y: int) -> CornerHeights:
    """Resolve all four corner heights of tile (x, y)."""
    cell = cell_at(cliff_mask, x, y)
    if isinstance(cell, Level):
        h = cell.height
        return CornerHeights(h, h, h, h)

    return CornerHeights(
        top_left=resolve_corner(cliff_mask, x, y, CORNERS['TOP_LEFT']),
        top_right=resolve_corner(cliff_mask, x, y, CORNERS['TOP_RIGHT']),
        bottom_left=resolve_corner(cliff_mask, x, y, CORNERS['BOTTOM_LEFT']),
        bottom_right=resolve_corner(cliff_mask, x, y, CORNERS['BOTTOM_RIGHT']),
    )


def representative_level(cliff_mask: CliffMask, x: int, y: int) -> float | None:
    """Height a neighbour presents to a wall: its level, or the lowest
    corner of a ramp.  None for holes and cells off the grid."""
    cell = cell_at(cliff_mask, x, y)
    if isinstance(cell, Level):
        return cell.height
    if isinstance(cell, Ramp):
        return resolve_tile(cliff_mask, x, y).minimum()
    return None
