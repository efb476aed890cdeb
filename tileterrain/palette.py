"""Tile palette lookups for floor and cliff-face colors."""

from .errors import PaletteLookupError


def _parse_hex(hex_str: str) -> tuple[float, float, float]:
    h = hex_str.strip().lstrip('#')
    if len(h) == 3:
        h = ''.join(c * 2 for c in h)
    if len(h) != 6:
        raise ValueError(f"Expected #rrggbb, got {hex_str!r}")
    r, g, b = (int(h[i:i + 2], 16) for i in (0, 2, 4))
    return r / 255.0, g / 255.0, b / 255.0


def parse_color(color) -> tuple[float, float, float]:
    """Convert ``"#rrggbb"`` (or ``#rgb``) or an RGB triple in 0-1 to floats."""
    if isinstance(color, str):
        return _parse_hex(color.upper())
    r, g, b = color
    return float(r), float(g), float(b)


class Palette:
    """Resolve per-tile colors from the ground and cliff tile masks.

    Lookups are memoised per tile, like the masks they read, and fail
    with a PaletteLookupError naming the tile and the offending index.
    """

    def __init__(self, tiles, ground_tile, cliff_tile):
        self.tiles = list(tiles)
        self.ground_tile = ground_tile
        self.cliff_tile = cliff_tile
        self._cache: dict[tuple[str, int, int], tuple[float, float, float]] = {}

    def _lookup(self, mask_name: str, mask, x: int, y: int):
        key = (mask_name, x, y)
        if key in self._cache:
            return self._cache[key]

        index = int(mask[y][x])
        if index < 0 or index >= len(self.tiles):
            raise PaletteLookupError(mask_name, x, y, index)
        entry = self.tiles[index]
        try:
            color = parse_color(entry['color'])
        except (KeyError, TypeError, ValueError) as e:
            raise PaletteLookupError(mask_name, x, y, index, detail=str(e)) from e

        self._cache[key] = color
        return color

    def ground_color(self, x: int, y: int) -> tuple[float, float, float]:
        return self._lookup('ground tile', self.ground_tile, x, y)

    def cliff_color(self, x: int, y: int) -> tuple[float, float, float]:
        return self._lookup('cliff tile', self.cliff_tile, x, y)
