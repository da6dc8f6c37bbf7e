from __future__ import annotations

import argparse
from typing import List, Optional, Sequence

from .board import pretty
from .config import Settings, configure_logging
from .engine import PuzzleEngine
from .matches import matched_coords
from .moves import InvalidMoveError, Move, apply_move
from .phase import ResolutionPhase

_AXIS_ALIASES = {'row': 'row', 'r': 'row', 'col': 'col', 'c': 'col', 'column': 'col'}


def parse_move(text: str) -> Move:
    """Parses 'row:1:-2', 'row 1 -2' or 'c 3 1' into a Move."""
    sep = ':' if ':' in text else ' '
    parts = [t for t in text.strip().split(sep) if t != '']
    if len(parts) != 3:
        raise InvalidMoveError(f'expected "axis index amount", got {text!r}')
    axis = _AXIS_ALIASES.get(parts[0].lower())
    if axis is None:
        raise InvalidMoveError(f'unknown axis {parts[0]!r}')
    try:
        index, amount = int(parts[1]), int(parts[2])
    except ValueError:
        raise InvalidMoveError(f'index and amount must be integers: {text!r}') from None
    return Move(axis, index, amount)


def parse_moves(text: str) -> List[Move]:
    return [parse_move(chunk) for chunk in text.split(',') if chunk.strip()]


def _print_phase(step: int, phase: ResolutionPhase, engine: PuzzleEngine) -> None:
    print(f'\nPhase {step}: {len(phase.matches)} match group(s)')
    for match in phase.matches:
        print('  match', list(match))
    for x, cats in phase.replacements:
        print(f'  column {x} refilled with', list(cats))
    print(engine.pretty())


def run_turn(engine: PuzzleEngine, moves: Sequence[Move]) -> int:
    """Resolves a turn and prints every cascade phase. Returns the number of phases."""
    steps = 0
    for phase in engine.iter_cascade(moves):
        steps += 1
        _print_phase(steps, phase, engine)
    if steps == 0:
        print('No matches.')
    return steps


def main(argv: Optional[Sequence[str]] = None) -> None:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description='Gemshift match-3 engine driver')
    parser.add_argument('--width', type=int, default=settings.width, help='Number of columns')
    parser.add_argument('--height', type=int, default=settings.height, help='Number of rows')
    parser.add_argument('--seed', type=int, default=settings.seed, help='RNG seed for the grid and spawns')
    parser.add_argument('--moves', default='', help='Comma separated moves, e.g. "row:0:1,col:2:-1"')
    parser.add_argument('--preview', action='store_true', help='Only show the matches each move would make')
    parser.add_argument('--play', action='store_true', help='Play interactively')
    parser.add_argument('--dedupe', dest='dedupe', action='store_true', default=settings.dedupe_junctions,
                        help='Refill junction tiles once (default)')
    parser.add_argument('--no-dedupe', dest='dedupe', action='store_false',
                        help='Count junction tiles once per match group when refilling')
    parser.add_argument('--debug', action='store_true', default=settings.debug, help='Verbose logging')
    args = parser.parse_args(argv)

    configure_logging(args.debug)
    try:
        engine = PuzzleEngine(args.width, args.height, seed=args.seed, dedupe_junctions=args.dedupe)
        moves = parse_moves(args.moves)
    except ValueError as e:
        parser.error(str(e))
    print('Initial board:')
    print(engine.pretty())

    try:
        if args.preview:
            for move in moves:
                found = engine.preview_move(move)
                print(f'\n{move.axis} {move.index} by {move.amount}: {len(found)} match group(s)')
                print(pretty_preview(engine, move))
            return
        if moves:
            run_turn(engine, moves)
    except InvalidMoveError as e:
        parser.error(str(e))
    if not args.play:
        return

    while True:
        text = input('\nMove as "row y amount" / "col x amount" (q to quit): ').strip()
        if text.lower() in ('q', 'quit', 'exit'):
            break
        try:
            move = parse_move(text)
            run_turn(engine, [move])
        except InvalidMoveError as e:
            print(f'Illegal move: {e}')


def pretty_preview(engine: PuzzleEngine, move: Move) -> str:
    """Board after `move` with the tiles it would match in upper case."""
    hypothetical = engine.snapshot()
    apply_move(hypothetical, move)
    return pretty(hypothetical, matched_coords(engine.preview_move(move)))
