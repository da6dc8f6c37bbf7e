"""Puzzle engine for Gemshift.

The engine owns one grid (``grid[x][y]``, column-major, ``y == 0`` on top) and
one spawn queue. Everything else talks to it through ``resolve`` and
``preview_move``; both return plain values so a renderer can animate them at
its own pace after the engine has already moved on to the new state.
"""
from __future__ import annotations

import logging
import random
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .board import GEM_TYPES, Category, Grid, Tile, copy_grid, grid_from_categories, grid_to_categories, pretty
from .generate import check_categories, generate_settled_grid
from .matches import Match, find_matches, is_settled, matched_coords
from .moves import Move, apply_move, apply_moves, validate_move
from .phase import ResolutionPhase, apply_phase, build_phase
from .spawn import SpawnQueue

logger = logging.getLogger(__name__)

DEFAULT_MAX_CASCADE = 100


class CascadeLimitError(RuntimeError):
    """Raised when a cascade keeps producing matches past the allowed number of steps."""


class PuzzleEngine:
    """Match-3 engine over a grid of rows and columns that shift with wraparound."""

    def __init__(
        self,
        width: int,
        height: int,
        *,
        categories: Sequence[Category] = GEM_TYPES,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        dedupe_junctions: bool = True,
        clear_queue_on_reset: bool = False,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f'grid dimensions must be positive, got {width}x{height}')
        self.width = width
        self.height = height
        self.categories: Tuple[Category, ...] = tuple(check_categories(categories))
        self.random = rng or random.Random(seed)
        self.dedupe_junctions = dedupe_junctions
        self.clear_queue_on_reset = clear_queue_on_reset
        self.spawn_queue = SpawnQueue(self.categories, self.random)
        self._grid: Grid = []
        self.reset()

    @classmethod
    def from_columns(cls, columns: Sequence[Sequence[Category]], **kwargs) -> 'PuzzleEngine':
        """Builds an engine and replaces its generated grid with the given columns."""
        width = len(columns)
        height = len(columns[0]) if width else 0
        engine = cls(width, height, **kwargs)
        engine.load_columns(columns)
        return engine

    # Read-only views ------------------------------------------------------
    @property
    def grid(self) -> Tuple[Tuple[Tile, ...], ...]:
        return tuple(tuple(column) for column in self._grid)

    def categories_grid(self) -> List[List[Category]]:
        return grid_to_categories(self._grid)

    def snapshot(self) -> Grid:
        """Independent copy of the grid, e.g. for an undo stack kept by the caller."""
        return copy_grid(self._grid)

    def is_settled(self) -> bool:
        return is_settled(self._grid)

    def pretty(self) -> str:
        return pretty(self._grid)

    # State changes --------------------------------------------------------
    def reset(self) -> None:
        """Deals a fresh settled grid. Queued spawns survive unless configured otherwise."""
        self._grid = generate_settled_grid(self.width, self.height, self.categories, self.random)
        if self.clear_queue_on_reset:
            self.spawn_queue.clear()
        logger.debug('new %dx%d grid', self.width, self.height)

    def load_columns(self, columns: Sequence[Sequence[Category]]) -> None:
        """Installs a hand-built grid of the engine's dimensions. It need not be settled."""
        if len(columns) != self.width:
            raise ValueError(f'expected {self.width} columns, got {len(columns)}')
        for x, column in enumerate(columns):
            if len(column) != self.height:
                raise ValueError(f'column {x} has {len(column)} tiles, expected {self.height}')
            for c in column:
                if c not in self.categories:
                    raise ValueError(f'unknown category {c!r} in column {x}')
        self._grid = grid_from_categories(columns)

    def enqueue_next(self, category: Category) -> None:
        self.spawn_queue.enqueue(category)

    def enqueue_next_many(self, categories: Iterable[Category]) -> None:
        self.spawn_queue.enqueue_many(categories)

    def resolve(self, moves: Sequence[Move] = ()) -> ResolutionPhase:
        """Applies `moves`, then explodes every match and refills the affected columns.

        The returned phase describes the matches found on the shifted grid and
        the categories dropped into each column; by the time it is returned the
        engine already holds the refilled grid. An empty `moves` just checks
        for cascades.
        """
        apply_moves(self._grid, moves)
        matches = find_matches(self._grid)
        phase = build_phase(
            matches,
            len(self._grid),
            self.spawn_queue.dequeue_or_random,
            dedupe=self.dedupe_junctions,
        )
        if not phase.is_nothing_to_do():
            apply_phase(self._grid, phase)
            logger.debug(
                'resolved %d groups (%d tiles), refilled columns %s',
                len(phase.matches),
                len(matched_coords(phase.matches)),
                [x for x, _ in phase.replacements],
            )
        return phase

    def iter_cascade(self, moves: Sequence[Move] = (), max_steps: int = DEFAULT_MAX_CASCADE) -> Iterator[ResolutionPhase]:
        """Yields each non-empty phase until the grid settles.

        Moves are checked before this returns. Every phase applied to the grid
        is yielded; once `max_steps` phases have been yielded and the grid
        still holds matches, CascadeLimitError is raised before resolving again.
        """
        for move in moves:
            validate_move(self._grid, move)
        return self._cascade(list(moves), max_steps)

    def _cascade(self, moves: List[Move], max_steps: int) -> Iterator[ResolutionPhase]:
        phase = self.resolve(moves)
        steps = 0
        while not phase.is_nothing_to_do():
            yield phase
            steps += 1
            if is_settled(self._grid):
                return
            if steps >= max_steps:
                raise CascadeLimitError(f'cascade did not settle within {max_steps} steps')
            phase = self.resolve()

    def resolve_to_settled(self, moves: Sequence[Move] = (), max_steps: int = DEFAULT_MAX_CASCADE) -> List[ResolutionPhase]:
        return list(self.iter_cascade(moves, max_steps))

    # Queries --------------------------------------------------------------
    def preview_move(self, move: Move) -> List[Match]:
        """Matches that `move` would produce, leaving the live grid untouched."""
        validate_move(self._grid, move)
        hypothetical = copy_grid(self._grid)
        apply_move(hypothetical, move)
        return find_matches(hypothetical)


def create_puzzle(width: int, height: int, **kwargs) -> PuzzleEngine:
    return PuzzleEngine(width, height, **kwargs)
