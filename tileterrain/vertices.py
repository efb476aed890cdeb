"""Shared vertex store keyed by grid corner and height level.

Adjacent tiles that meet at a corner on the same level reuse one vertex,
so walls and floors never emit duplicates along shared edges.  Water
points live in their own list, one per corner.
"""

import logging
from typing import Callable

import numpy as np

logger = logging.getLogger(__name__)


def _is_integral(level) -> bool:
    return float(level).is_integer()


class VertexCache:
    """Corner (x, y) -> {level -> vertex index}, plus one water point per corner.

    Vertices are stored as ``[x, -y, z]`` so rows run towards -Y and
    levels point up.  Indices returned by the ``get_or_create*`` methods
    are stable for the life of the cache.
    """

    def __init__(self):
        self.vertices: list[list[float]] = []
        self.water_vertices: list[list[float]] = []
        self._columns: dict[tuple[int, int], dict[float, int]] = {}
        self._water: dict[tuple[int, int], int] = {}

    def __len__(self) -> int:
        return len(self.vertices)

    def get_or_create(self, x: int, y: int, z: float, offset: float = 0.0) -> int:
        """Index of the ground point at corner (x, y) on level *z*.

        *offset* is only applied when the point is first created.
        """
        column = self._columns.setdefault((x, y), {})
        if z in column:
            return column[z]
        idx = len(self.vertices)
        self.vertices.append([float(x), float(-y), float(z + offset)])
        column[z] = idx
        return idx

    def get_or_create_water(self, x: int, y: int, height: float,
                            place: Callable[[int, int, float], np.ndarray]) -> int:
        """Index of the water point at corner (x, y).

        ``place(x, y, height)`` computes the position the first time the
        corner is requested; later requests reuse it whatever *height* is.
        """
        key = (x, y)
        if key in self._water:
            return self._water[key]
        pos = place(x, y, height)
        idx = len(self.water_vertices)
        self.water_vertices.append([float(v) for v in pos])
        self._water[key] = idx
        return idx

    # ── Column introspection ─────────────────────────────────────────

    def levels(self, x: int, y: int) -> list[float]:
        """Sorted whole-number levels created at corner (x, y)."""
        column = self._columns.get((x, y), {})
        return sorted(z for z in column if _is_integral(z))

    def highest_level_at_most(self, x: int, y: int, value: float) -> float | None:
        below = [z for z in self.levels(x, y) if z <= value]
        return below[-1] if below else None

    def highest_level(self, x: int, y: int) -> float | None:
        levels = self.levels(x, y)
        return levels[-1] if levels else None

    def lowest_level(self, x: int, y: int) -> float | None:
        levels = self.levels(x, y)
        return levels[0] if levels else None

    def position(self, x: int, y: int, level: float) -> np.ndarray:
        return np.array(self.vertices[self._columns[(x, y)][level]], dtype=np.float64)

    # ── Bulk access ──────────────────────────────────────────────────

    def displace(self, deltas: np.ndarray) -> None:
        """Move every ground point by the matching row of *deltas*."""
        moved = self.ground_array() + deltas
        self.vertices = moved.tolist()

    def ground_array(self) -> np.ndarray:
        return np.array(self.vertices, dtype=np.float64).reshape(-1, 3)

    def water_array(self) -> np.ndarray:
        return np.array(self.water_vertices, dtype=np.float64).reshape(-1, 3)
