"""Exceptions raised while loading masks and compiling terrain.

Every error aborts the compilation of the terrain chunk it came from;
nothing here is retried.
"""


class TerrainError(Exception):
    """Base class for all terrain compilation failures."""


class PaletteLookupError(TerrainError):
    """A tile mask references a palette entry that does not exist."""

    def __init__(self, mask: str, x: int, y: int, index, detail: str = ""):
        self.mask = mask
        self.x = x
        self.y = y
        self.index = index
        message = (f"Tile ({x}, {y}) uses undefined color {index} "
                   f"in the {mask} mask")
        if detail:
            message += f": {detail}"
        super().__init__(message)


class IslandRampError(TerrainError):
    """A ramp corner has no explicit ground reachable in any direction."""

    def __init__(self, x: int, y: int, direction: tuple[int, int]):
        self.x = x
        self.y = y
        self.direction = direction
        super().__init__(f"Ramp tile ({x}, {y}) cannot resolve its "
                         f"{direction} corner: no explicit ground reachable")


class FillResolutionError(TerrainError):
    """A '.' fill in a text map has no level to its left or above."""

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y
        super().__init__(f"Fill at ({x}, {y}) has no explicit level to the "
                         f"left or above")


class MapSyntaxError(TerrainError):
    """A text map contains a character with no meaning."""

    def __init__(self, x: int, y: int, char: str):
        self.x = x
        self.y = y
        self.char = char
        super().__init__(f"Unexpected character {char!r} at ({x}, {y})")


class MissingGroundError(TerrainError):
    """Water was requested at a corner that has no ground beneath it."""

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y
        super().__init__(f"Expected ground where there is water at "
                         f"corner ({x}, {y})")


class MaskShapeError(TerrainError, ValueError):
    """A mask does not have the dimensions the grid size requires."""


class DefinitionError(TerrainError, ValueError):
    """A terrain asset definition is malformed."""
