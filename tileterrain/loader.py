"""Load terrain asset definitions from JSON.

A definition looks like::

    {
        "size": {"width": 3, "height": 3},
        "offset": {"x": 1.5, "y": 1.5, "z": 0},
        "tiles": [{"color": "#008000"}, {"color": "#555555"}],
        "masks": {
            "cliff": ["001", "0r1", "001"],
            "groundTile": [[0, 0, 1], [0, 0, 1], [0, 0, 1]],
            "water": "000\\n000\\n000"
        }
    }

Masks are nested lists or text maps (a string, or a list of row
strings).  ``height``, ``water`` and ``waterHeight`` default to zeros and
``cliffTile`` defaults to the ground tile mask.
"""

import json
import logging
import math
import pathlib

import numpy as np

from .errors import DefinitionError
from .maps import cliff_map, string_map
from .models import HOLE, RAMP, Level, Offset, TerrainDefinition, TerrainMasks

logger = logging.getLogger(__name__)


def _as_text(value):
    """Return the text form of a text-map mask, or None for nested lists."""
    if isinstance(value, str):
        return value
    if isinstance(value, list) and value and all(isinstance(r, str) for r in value):
        return "\n".join(value)
    return None


def _cliff_cell(value, x, y):
    if value is None:
        return HOLE
    if isinstance(value, str) and value.lower() == "r":
        return RAMP
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if isinstance(value, float) and math.isnan(value):
            return HOLE
        if float(value).is_integer():
            return Level(int(value))
    raise DefinitionError(f"Invalid cliff value {value!r} at ({x}, {y})")


def _cliff_mask(value):
    text = _as_text(value)
    if text is not None:
        return cliff_map(text)
    try:
        return [[_cliff_cell(v, x, y) for x, v in enumerate(row)]
                for y, row in enumerate(value)]
    except TypeError as e:
        raise DefinitionError(f"cliff mask is not a grid: {e}") from e


def _numeric_mask(value):
    text = _as_text(value)
    if text is not None:
        return string_map(text)
    return value


def definition_from_dict(data: dict) -> TerrainDefinition:
    """Build a TerrainDefinition from a parsed asset definition."""
    if not isinstance(data, dict):
        raise DefinitionError("Terrain definition must be an object")
    masks = data.get("masks")
    if not isinstance(masks, dict) or "cliff" not in masks:
        raise DefinitionError("Terrain definition needs masks.cliff")
    if "groundTile" not in masks:
        raise DefinitionError("Terrain definition needs masks.groundTile")

    cliff = _cliff_mask(masks["cliff"])

    size = data.get("size") or {}
    height = int(size.get("height", len(cliff)))
    width = int(size.get("width", len(cliff[0]) if cliff else 0))

    ground_tile = _numeric_mask(masks["groundTile"])
    corner_zeros = np.zeros((height + 1, width + 1))
    tile_zeros = np.zeros((height, width), dtype=bool)

    tile_masks = TerrainMasks(
        cliff=cliff,
        height=_numeric_mask(masks.get("height", corner_zeros)),
        ground_tile=ground_tile,
        cliff_tile=_numeric_mask(masks.get("cliffTile", ground_tile)),
        water=_numeric_mask(masks.get("water", tile_zeros)),
        water_height=_numeric_mask(masks.get("waterHeight", corner_zeros)),
    )

    tiles = data.get("tiles")
    if not isinstance(tiles, list) or not tiles:
        raise DefinitionError("Terrain definition needs a non-empty tiles list")

    offset = Offset(**{k: float(v) for k, v in (data.get("offset") or {}).items()
                       if k in ("x", "y", "z")})

    return TerrainDefinition(masks=tile_masks, tiles=tiles,
                             width=width, height=height, offset=offset)


def load_definition(path) -> TerrainDefinition:
    """Read a JSON terrain definition from *path*."""
    path = pathlib.Path(path)
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise DefinitionError(f"{path.name} is not valid JSON: {e}") from e

    definition = definition_from_dict(data)
    logger.info(f"Loaded terrain definition {path.name}: "
                f"{definition.width}x{definition.height}, "
                f"{len(definition.tiles)} tiles")
    return definition
