from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from .board import Grid, Tile

logger = logging.getLogger(__name__)

ROW = 'row'
COL = 'col'
AXES = (ROW, COL)


class InvalidMoveError(ValueError):
    """Raised for a move that does not address a row or column of the grid."""


@dataclass(frozen=True)
class Move:
    """A circular shift of one whole row or column.

    A positive row amount rotates the row to the right (towards larger x).
    A positive column amount rotates the column upwards (towards y == 0).
    """
    axis: str  # 'row' or 'col'
    index: int
    amount: int

    def __post_init__(self) -> None:
        if self.axis not in AXES:
            raise InvalidMoveError(f'unknown axis {self.axis!r}; expected one of {AXES}')
        for name in ('index', 'amount'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidMoveError(f'{name} must be an integer, got {value!r}')

    def inverse(self) -> 'Move':
        return Move(self.axis, self.index, -self.amount)


def normalize_amount(amount: int, size: int) -> int:
    """Maps any signed shift into [0, size)."""
    return ((amount % size) + size) % size


def rotate_right(cells: Sequence[Tile], amount: int) -> List[Tile]:
    """The last `amount` entries move to the front."""
    n = len(cells)
    amount = normalize_amount(amount, n)
    return list(cells[n - amount:]) + list(cells[:n - amount])


def rotate_left(cells: Sequence[Tile], amount: int) -> List[Tile]:
    """The first `amount` entries move to the end."""
    amount = normalize_amount(amount, len(cells))
    return list(cells[amount:]) + list(cells[:amount])


def validate_move(grid: Sequence[Sequence[Tile]], move: Move) -> None:
    width = len(grid)
    # A row must exist in every column to be rotated.
    height = min((len(column) for column in grid), default=0)
    limit = height if move.axis == ROW else width
    if not 0 <= move.index < limit:
        raise InvalidMoveError(f'{move.axis} index {move.index} out of range [0, {limit})')


def apply_move(grid: Grid, move: Move) -> None:
    """Shifts the addressed row or column of `grid` in place."""
    validate_move(grid, move)
    if move.axis == ROW:
        y = move.index
        row = rotate_right([column[y] for column in grid], move.amount)
        for x, tile in enumerate(row):
            grid[x][y] = tile
    else:
        x = move.index
        grid[x] = rotate_left(grid[x], move.amount)
    logger.debug('applied %s', move)


def apply_moves(grid: Grid, moves: Sequence[Move]) -> None:
    """Validates every move up front, then applies them in order."""
    for move in moves:
        validate_move(grid, move)
    for move in moves:
        apply_move(grid, move)
