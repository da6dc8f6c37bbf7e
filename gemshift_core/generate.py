from __future__ import annotations

import random
from typing import List, Optional, Sequence

from .board import GEM_TYPES, Category, Grid, Tile


def check_categories(categories: Sequence[Category]) -> List[Category]:
    """Returns the distinct categories in order, rejecting sets too small to avoid runs."""
    distinct: List[Category] = []
    for c in categories:
        if c not in distinct:
            distinct.append(c)
    if len(distinct) < 3:
        raise ValueError(f'need at least 3 distinct categories, got {len(distinct)}')
    return distinct


def generate_settled_grid(
    width: int,
    height: int,
    categories: Sequence[Category] = GEM_TYPES,
    rng: Optional[random.Random] = None,
) -> Grid:
    """Builds a width x height grid containing no run of three equal tiles.

    Cells are filled column by column, top to bottom. A category is excluded
    for a cell when the two cells above it, or the two cells to its left,
    already share that category. Since every earlier cell passed the same
    check, no run of three can exist anywhere once the grid is full.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f'grid dimensions must be positive, got {width}x{height}')
    gem_types = check_categories(categories)
    rng = rng or random.Random()

    grid: Grid = []
    for x in range(width):
        column: List[Tile] = []
        for y in range(height):
            possible = list(gem_types)
            if y >= 2 and column[y - 1] == column[y - 2]:
                possible.remove(column[y - 1].category)
            if x >= 2 and grid[x - 1][y] == grid[x - 2][y]:
                left = grid[x - 1][y].category
                if left in possible:
                    possible.remove(left)
            column.append(Tile(rng.choice(possible)))
        grid.append(column)
    return grid
