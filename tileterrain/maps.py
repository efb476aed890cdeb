"""Compact text-grid notation for authoring masks.

One character per tile::

    0002
    0rr2
    0..2

Digits are explicit levels, ``r``/``R`` ramps, a space is a hole and
``.`` repeats the nearest level to its left (or, failing that, the level
above). Indentation shared by every row is ignored, so maps can be written
inline in triple-quoted strings.
"""

from .errors import FillResolutionError, MapSyntaxError
from .heights import resolve_tile
from .models import HOLE, RAMP, CliffMask, Hole, Level, Ramp


def _left_trim(row: str) -> int:
    return len(row) - len(row.lstrip())


def _common_left_trim(rows: list[str]) -> int:
    widths = [_left_trim(row) for row in rows if row.strip()]
    return min(widths) if widths else 0


def _strip_blank_edges(text: str) -> list[str]:
    lines = text.split("\n")
    start, end = 0, len(lines) - 1
    while start < len(lines) and not lines[start].strip():
        start += 1
    while end > start and not lines[end].strip():
        end -= 1
    return lines[start:end + 1]


def _rows(text: str) -> list[str]:
    """Grid rows of *text*. Blank lines inside the map and trailing spaces
    are kept, since a space is a cell."""
    lines = _strip_blank_edges(text)
    indent = _common_left_trim(lines)
    return [line[indent:] for line in lines]


def _pad(grid: list[list], value) -> list[list]:
    width = max((len(row) for row in grid), default=0)
    for row in grid:
        row.extend([value] * (width - len(row)))
    return grid


def trim(text: str) -> str:
    """Remove blank lines around *text*, shared indentation and trailing spaces."""
    lines = _strip_blank_edges(text)
    indent = _common_left_trim(lines)
    return "\n".join(line.rstrip()[indent:] for line in lines)


def cliff_map(text: str) -> CliffMask:
    """Parse a cliff mask, e.g. ``"01\\nr2"`` -> ``[[0, 1], [RAMP, 2]]``.

    Short rows are padded with holes up to the widest row.
    """
    mask: CliffMask = []
    for y, row in enumerate(_rows(text)):
        cells = []
        for x, char in enumerate(row):
            if char.isdigit():
                cells.append(Level(int(char)))
            elif char in "rR":
                cells.append(RAMP)
            elif char == " ":
                cells.append(HOLE)
            elif char == ".":
                cells.append(_fill(mask, cells, x, y))
            else:
                raise MapSyntaxError(x, y, char)
        mask.append(cells)
    return _pad(mask, HOLE)


def _fill(mask, cells, x, y) -> Level:
    for cell in reversed(cells[:x]):
        if isinstance(cell, Level):
            return cell
    if y > 0 and x < len(mask[y - 1]) and isinstance(mask[y - 1][x], Level):
        return mask[y - 1][x]
    raise FillResolutionError(x, y)


def string_map(text: str, fill: int = 0) -> list[list[int]]:
    """Parse a numeric mask; spaces and short rows become *fill*."""
    grid = []
    for y, row in enumerate(_rows(text)):
        values = []
        for x, char in enumerate(row):
            if char.isdigit():
                values.append(int(char))
            elif char == " ":
                values.append(fill)
            else:
                raise MapSyntaxError(x, y, char)
        grid.append(values)
    return _pad(grid, fill)


def _cell_char(cell, x, y) -> str:
    if isinstance(cell, Ramp):
        return "r"
    if isinstance(cell, Hole):
        return " "
    if isinstance(cell, Level) and 0 <= cell.height <= 9:
        return str(cell.height)
    raise ValueError(f"Cell {cell!r} at ({x}, {y}) has no single-character form")


def render_cliff_map(cliff_mask: CliffMask) -> str:
    """Inverse of cliff_map for masks written without fills."""
    return "\n".join(
        "".join(_cell_char(cell, x, y) for x, cell in enumerate(row))
        for y, row in enumerate(cliff_mask)
    )


def _fmt(height: float) -> str:
    return f"{height:g}"


def render_corner_heights(cliff_mask: CliffMask) -> str:
    """Resolved corners of every tile, two text lines per mask row.

    Each tile prints as ``<top-left><top-right>`` over
    ``<bottom-left><bottom-right>``, tiles separated by tabs and rows by
    a blank line.  Holes print as ``..``.
    """
    blocks = []
    for y, row in enumerate(cliff_mask):
        top, bottom = [], []
        for x, cell in enumerate(row):
            if isinstance(cell, Hole):
                top.append("..")
                bottom.append("..")
                continue
            c = resolve_tile(cliff_mask, x, y)
            top.append(_fmt(c.top_left) + _fmt(c.top_right))
            bottom.append(_fmt(c.bottom_left) + _fmt(c.bottom_right))
        blocks.append("\t".join(top) + "\n" + "\t".join(bottom))
    return "\n\n".join(blocks)
