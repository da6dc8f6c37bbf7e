from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set

from .board import Category, Coord, Tile

Match = List[Coord]

MIN_RUN = 3


def _scan(cells: Iterable[Coord], grid: Sequence[Sequence[Tile]], out: List[Match]) -> None:
    """Appends every run of MIN_RUN or more equal categories along one line of cells."""
    run: Match = []
    run_category: Optional[Category] = None
    for (x, y) in cells:
        column = grid[x]
        category = column[y].category if y < len(column) else None
        if category is not None and category == run_category:
            run.append((x, y))
            continue
        if len(run) >= MIN_RUN:
            out.append(run)
        run = [(x, y)] if category is not None else []
        run_category = category
    if len(run) >= MIN_RUN:
        out.append(run)


def find_matches(grid: Sequence[Sequence[Tile]]) -> List[Match]:
    """
    Finds every maximal run of three or more equal tiles.
    Columns are scanned top to bottom first, then rows left to right. A tile at
    the junction of a vertical and a horizontal run shows up in both groups.
    """
    matches: List[Match] = []
    width = len(grid)
    if width == 0:
        return matches
    for x in range(width):
        _scan(((x, y) for y in range(len(grid[x]))), grid, matches)
    # Row count follows the tallest column so an uneven grid is still fully scanned.
    height = max(len(column) for column in grid)
    for y in range(height):
        _scan(((x, y) for x in range(width)), grid, matches)
    return matches


def matched_coords(matches: Iterable[Iterable[Coord]]) -> Set[Coord]:
    """Collapses match-groups into the set of distinct coordinates to remove."""
    return {coord for match in matches for coord in match}


def is_settled(grid: Sequence[Sequence[Tile]]) -> bool:
    return not find_matches(grid)
