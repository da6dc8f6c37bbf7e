from __future__ import annotations

# Facade module that re-exports Gemshift core functionality.
# The Flask app and tests import from here; single-responsibility modules
# live under gemshift_core/*.

from gemshift_core.board import (  # noqa: F401
    GEM_TYPES,
    Category,
    Coord,
    Grid,
    Tile,
    copy_grid,
    coords,
    grid_from_categories,
    grid_size,
    grid_to_categories,
    pretty,
)
from gemshift_core.generate import check_categories, generate_settled_grid  # noqa: F401
from gemshift_core.matches import MIN_RUN, find_matches, is_settled, matched_coords  # noqa: F401
from gemshift_core.moves import (  # noqa: F401
    COL,
    ROW,
    InvalidMoveError,
    Move,
    apply_move,
    apply_moves,
    normalize_amount,
    rotate_left,
    rotate_right,
    validate_move,
)
from gemshift_core.phase import (  # noqa: F401
    ResolutionPhase,
    apply_phase,
    build_phase,
    tally_columns,
)
from gemshift_core.spawn import SpawnQueue  # noqa: F401
from gemshift_core.engine import (  # noqa: F401
    DEFAULT_MAX_CASCADE,
    CascadeLimitError,
    PuzzleEngine,
    create_puzzle,
)
from gemshift_core.config import Settings, configure_logging  # noqa: F401


def main() -> None:
    # CLI driver delegated to gemshift_core.cli
    from gemshift_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
