from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

from .board import Category, Coord, Grid, Tile
from .matches import matched_coords

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionPhase:
    """One resolve step: the groups that matched and the tiles refilling each column."""
    matches: Tuple[Tuple[Coord, ...], ...]
    replacements: Tuple[Tuple[int, Tuple[Category, ...]], ...]  # ascending x, no empty entries

    def is_nothing_to_do(self) -> bool:
        return len(self.matches) == 0

    def replacements_for(self, x: int) -> Tuple[Category, ...]:
        for col, cats in self.replacements:
            if col == x:
                return cats
        return tuple()

    def removed_coords(self) -> List[Coord]:
        return sorted(matched_coords(self.matches))


def tally_columns(matches: Sequence[Sequence[Coord]], dedupe: bool = True) -> Dict[int, int]:
    """Counts tiles to replace per column.

    With dedupe off every appearance in every group counts, so a junction
    tile shared by a row run and a column run is counted twice.
    """
    if dedupe:
        cells = matched_coords(matches)
    else:
        cells = [coord for match in matches for coord in match]
    return dict(Counter(x for (x, _y) in cells))


def build_phase(
    matches: Sequence[Sequence[Coord]],
    width: int,
    draw: Callable[[], Category],
    dedupe: bool = True,
) -> ResolutionPhase:
    """Draws replacement categories column by column, left to right."""
    counter = tally_columns(matches, dedupe)
    replacements: List[Tuple[int, Tuple[Category, ...]]] = []
    for x in range(width):
        n = counter.get(x, 0)
        if n:
            replacements.append((x, tuple(draw() for _ in range(n))))
    return ResolutionPhase(
        matches=tuple(tuple(match) for match in matches),
        replacements=tuple(replacements),
    )


def apply_phase(grid: Grid, phase: ResolutionPhase) -> None:
    """Removes matched tiles and stacks the replacements on top of each column, in place."""
    explode = matched_coords(phase.matches)
    refill: Dict[int, Tuple[Category, ...]] = dict(phase.replacements)
    for x, column in enumerate(grid):
        survivors = [tile for y, tile in enumerate(column) if (x, y) not in explode]
        new_column = [Tile(c) for c in refill.get(x, ())] + survivors
        if len(new_column) != len(column):
            logger.warning('column %d changed length %d -> %d', x, len(column), len(new_column))
        grid[x] = new_column
