from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Set, Tuple

Category = str  # 'black', 'blue', 'green', 'orange', 'red', 'white'
Coord = Tuple[int, int]  # (x, y), y == 0 is the top row

GEM_TYPES: Tuple[Category, ...] = ('black', 'blue', 'green', 'orange', 'red', 'white')


@dataclass(frozen=True)
class Tile:
    """A single gem on the grid, identified only by its category."""
    category: Category


Grid = List[List[Tile]]  # column-major: grid[x][y]


def grid_size(grid: Sequence[Sequence[Tile]]) -> Tuple[int, int]:
    """Returns (width, height), taking the height from the first column."""
    width = len(grid)
    height = len(grid[0]) if width else 0
    return width, height


def copy_grid(grid: Sequence[Sequence[Tile]]) -> Grid:
    # Tiles are frozen, so copying the column lists is a full copy.
    return [list(column) for column in grid]


def grid_from_categories(columns: Iterable[Iterable[Category]]) -> Grid:
    return [[Tile(c) for c in column] for column in columns]


def grid_to_categories(grid: Sequence[Sequence[Tile]]) -> List[List[Category]]:
    return [[tile.category for tile in column] for column in grid]


def coords(grid: Sequence[Sequence[Tile]]) -> Iterable[Coord]:
    """Iterates over all coordinates column by column."""
    for x, column in enumerate(grid):
        for y in range(len(column)):
            yield (x, y)


def pretty(grid: Sequence[Sequence[Tile]], highlight: Optional[Set[Coord]] = None) -> str:
    """Renders the grid row by row using the first letter of each category.

    Highlighted cells are shown in upper case, the rest in lower case.
    """
    marked = highlight or set()
    height = max((len(column) for column in grid), default=0)
    lines: List[str] = []
    for y in range(height):
        row: List[str] = []
        for x, column in enumerate(grid):
            if y >= len(column):
                row.append('.')
                continue
            letter = column[y].category[:1] or '?'
            row.append(letter.upper() if (x, y) in marked else letter.lower())
        lines.append(' '.join(row))
    return '\n'.join(lines)
