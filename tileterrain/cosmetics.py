"""Randomised finishing passes and placement.

None of these change the structure of a mesh: rotation picks the other
diagonal of a quad, jitter moves vertices a little so faces are not
perfectly flat, and the centering translation places the chunk.
"""

import numpy as np

from .models import Offset


def rotate_diagonals(faces, rng) -> np.ndarray:
    """Swap the shared diagonal of roughly half of the quads in *faces*.

    *faces* holds consecutive triangle pairs ``(a0, a1, a2), (a0, a2, a3)``
    covering one quad each.  A flipped pair becomes
    ``(a0, a1, a3), (a1, a2, a3)``, keeping the winding.
    """
    faces = np.array(faces, dtype=np.int64).reshape(-1, 3)
    n_pairs = len(faces) // 2
    if n_pairs == 0:
        return faces

    first = faces[0:n_pairs * 2:2]
    second = faces[1:n_pairs * 2:2]
    flip = rng.random_sample(n_pairs) < 0.5

    first[flip, 2] = second[flip, 2]
    second[flip, 0] = first[flip, 1]

    faces[0:n_pairs * 2:2] = first
    faces[1:n_pairs * 2:2] = second
    return faces


def nudge(rng, size, factor: float = 1.0) -> np.ndarray:
    """Small centred noise: the product of two centred uniforms."""
    return (rng.random_sample(size) - 0.5) * (rng.random_sample(size) - 0.5) * factor


def jitter_offsets(rng, count: int, horizontal: float = 0.75,
                   vertical: float = 0.5) -> np.ndarray:
    """Per-vertex displacement rows, larger across than up."""
    deltas = np.empty((count, 3), dtype=np.float64)
    deltas[:, 0] = nudge(rng, count, horizontal)
    deltas[:, 1] = nudge(rng, count, horizontal)
    deltas[:, 2] = nudge(rng, count, vertical)
    return deltas


def centering_translation(offset: Offset) -> np.ndarray:
    """Translation placing the chunk; rows run towards -Y, so y is added."""
    return np.array([-offset.x, offset.y, offset.z], dtype=np.float64)
