"""Data classes for terrain masks, compile options and output meshes."""

from dataclasses import dataclass, field, replace
from typing import NamedTuple, Union

import numpy as np
import trimesh

from .constants import (
    SEED, NO_COSMETICS, JITTER_HORIZONTAL, JITTER_VERTICAL,
    WATER_NUDGE, WATER_SURFACE_LIFT, WATER_COLOR,
)
from .errors import MaskShapeError


# ── Cliff cells ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Level:
    """A tile with an explicit, discrete height."""
    height: int


@dataclass(frozen=True)
class Ramp:
    """A tile whose corner heights are inferred from its neighbours."""


@dataclass(frozen=True)
class Hole:
    """A tile with no ground at all."""


RAMP = Ramp()
HOLE = Hole()

CliffCell = Union[Level, Ramp, Hole]
CliffMask = list[list[CliffCell]]


class CornerHeights(NamedTuple):
    top_left: float
    top_right: float
    bottom_left: float
    bottom_right: float

    def minimum(self) -> float:
        return min(self)


@dataclass
class Offset:
    """Centering offset in grid units (x right, y down, z up)."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


# ── Inputs ───────────────────────────────────────────────────────────────

def _grid(values, dtype, name: str) -> np.ndarray:
    try:
        arr = np.asarray(values, dtype=dtype)
    except (TypeError, ValueError) as e:
        raise MaskShapeError(f"{name} mask is not a rectangular grid: {e}") from e
    if arr.ndim != 2:
        raise MaskShapeError(f"{name} mask must be 2-D, got {arr.ndim}-D")
    return arr


@dataclass
class TerrainMasks:
    """The per-tile and per-corner grids describing one terrain chunk.

    ``cliff``, ``ground_tile``, ``cliff_tile`` and ``water`` are
    ``height x width``; ``height`` and ``water_height`` are sampled at
    corners and so are ``(height + 1) x (width + 1)``.  All are y-major.
    """
    cliff: CliffMask
    height: np.ndarray
    ground_tile: np.ndarray
    cliff_tile: np.ndarray
    water: np.ndarray
    water_height: np.ndarray

    def __post_init__(self):
        self.cliff = [list(row) for row in self.cliff]
        self.height = _grid(self.height, np.float64, "height")
        self.ground_tile = _grid(self.ground_tile, np.int64, "ground tile")
        self.cliff_tile = _grid(self.cliff_tile, np.int64, "cliff tile")
        self.water = _grid(self.water, bool, "water")
        self.water_height = _grid(self.water_height, np.float64, "water height")


@dataclass
class TerrainDefinition:
    """Everything the compiler needs for one terrain chunk."""
    masks: TerrainMasks
    tiles: list[dict]
    width: int
    height: int
    offset: Offset = field(default_factory=Offset)

    def __post_init__(self):
        w, h = self.width, self.height
        if w <= 0 or h <= 0:
            raise MaskShapeError(f"Grid size must be positive, got {w}x{h}")

        cliff = self.masks.cliff
        if len(cliff) != h or any(len(row) != w for row in cliff):
            raise MaskShapeError(f"cliff mask must be {h}x{w}")

        for name, expected in (('height', (h + 1, w + 1)),
                               ('ground_tile', (h, w)),
                               ('cliff_tile', (h, w)),
                               ('water', (h, w)),
                               ('water_height', (h + 1, w + 1))):
            actual = getattr(self.masks, name).shape
            if actual != expected:
                raise MaskShapeError(f"{name} mask must be "
                                     f"{expected[0]}x{expected[1]}, "
                                     f"got {actual[0]}x{actual[1]}")


@dataclass
class CompileOptions:
    """Knobs for the randomised cosmetic passes.

    ``seed=None`` draws fresh randomness for every compilation.
    """
    seed: int | None = SEED
    rotate_diagonals: bool = not NO_COSMETICS
    jitter: bool = not NO_COSMETICS
    water_nudge: bool = not NO_COSMETICS
    jitter_horizontal: float = JITTER_HORIZONTAL
    jitter_vertical: float = JITTER_VERTICAL
    water_nudge_scale: float = WATER_NUDGE
    water_lift: float = WATER_SURFACE_LIFT
    water_color: str = WATER_COLOR

    def deterministic(self) -> "CompileOptions":
        """Copy of these options with every random pass switched off."""
        return replace(self, rotate_diagonals=False, jitter=False,
                       water_nudge=False)


# ── Outputs ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Triangle:
    a: tuple[float, float, float]
    b: tuple[float, float, float]
    c: tuple[float, float, float]
    color: tuple[float, float, float]


@dataclass
class TriangleMesh:
    """A flat, ordered triangle list backed by numpy arrays.

    ``faces`` index into ``vertices``; ``colors`` holds one RGB row (0-1)
    per face.
    """
    vertices: np.ndarray
    faces: np.ndarray
    colors: np.ndarray

    def __post_init__(self):
        self.vertices = np.asarray(self.vertices, dtype=np.float64).reshape(-1, 3)
        self.faces = np.asarray(self.faces, dtype=np.int64).reshape(-1, 3)
        self.colors = np.asarray(self.colors, dtype=np.float64).reshape(-1, 3)

    def __len__(self) -> int:
        return len(self.faces)

    def triangles(self) -> list[Triangle]:
        tris = []
        for (i, j, k), color in zip(self.faces, self.colors):
            tris.append(Triangle(
                a=tuple(self.vertices[i].tolist()),
                b=tuple(self.vertices[j].tolist()),
                c=tuple(self.vertices[k].tolist()),
                color=tuple(color.tolist()),
            ))
        return tris

    @property
    def face_normals(self) -> np.ndarray:
        """Unit normals per face; zero rows for degenerate faces."""
        if len(self.faces) == 0:
            return np.zeros((0, 3))
        tri = self.vertices[self.faces]
        normals = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])
        lengths = np.linalg.norm(normals, axis=1)
        valid = lengths > 1e-12
        normals[valid] /= lengths[valid][:, None]
        normals[~valid] = 0.0
        return normals

    @property
    def bounds(self) -> np.ndarray | None:
        if len(self.vertices) == 0:
            return None
        return np.array([self.vertices.min(axis=0), self.vertices.max(axis=0)])

    def translated(self, vector) -> "TriangleMesh":
        return TriangleMesh(vertices=self.vertices + np.asarray(vector, dtype=np.float64),
                            faces=self.faces.copy(), colors=self.colors.copy())

    def to_trimesh(self) -> trimesh.Trimesh:
        """Hand-off mesh for rendering; vertices are kept exactly as built."""
        rgba = np.ones((len(self.colors), 4), dtype=np.float64)
        rgba[:, :3] = self.colors
        return trimesh.Trimesh(vertices=self.vertices, faces=self.faces,
                               face_colors=(rgba * 255).round().astype(np.uint8),
                               process=False)


@dataclass
class TerrainResult:
    """The two independent triangle lists produced by one compilation."""
    ground: TriangleMesh
    water: TriangleMesh

    def to_scene(self) -> trimesh.Scene:
        scene = trimesh.Scene()
        for name, mesh in (('ground', self.ground), ('water', self.water)):
            if len(mesh):
                scene.add_geometry(mesh.to_trimesh(), geom_name=name)
        return scene
