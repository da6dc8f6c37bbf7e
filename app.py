from __future__ import annotations

import logging
import os
import uuid
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    CascadeLimitError,
    InvalidMoveError,
    Move,
    PuzzleEngine,
    ResolutionPhase,
    Settings,
    configure_logging,
)
from gemshift_core.config import env_int, parse_flag

logger = logging.getLogger(__name__)

SETTINGS = Settings.from_env()
MAX_SIDE = env_int("GEMSHIFT_MAX_SIDE", 64)
MAX_GAMES = env_int("GEMSHIFT_MAX_GAMES", 256)

app = Flask(__name__)

# Live engines for this process, keyed by game id, least recently used first.
# The engine is not thread-safe; run the server single-threaded.
ENGINES: "OrderedDict[str, PuzzleEngine]" = OrderedDict()


# ---------- JSON conversion ----------

def grid_to_json(engine: PuzzleEngine) -> Dict[str, Any]:
    return {"width": engine.width, "height": engine.height, "columns": engine.categories_grid()}


def phase_to_json(phase: ResolutionPhase) -> Dict[str, Any]:
    return {
        "matches": [[[int(x), int(y)] for (x, y) in match] for match in phase.matches],
        "replacements": [[int(x), list(cats)] for (x, cats) in phase.replacements],
        "nothingToDo": phase.is_nothing_to_do(),
    }


def move_from_json(obj: Any) -> Move:
    if not isinstance(obj, dict):
        raise InvalidMoveError(f"move must be an object, got {obj!r}")
    try:
        return Move(str(obj["axis"]), obj["index"], obj["amount"])
    except KeyError as e:
        raise InvalidMoveError(f"move missing field {e.args[0]!r}") from None


def moves_from_json(items: Any) -> List[Move]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise InvalidMoveError("moves must be a list")
    return [move_from_json(it) for it in items]


def _error(message: str, status: int = 400) -> Tuple[Any, int]:
    return jsonify({"ok": False, "error": message}), status


def _lookup(body: Dict[str, Any]) -> Optional[PuzzleEngine]:
    game_id = str(body.get("gameId", ""))
    engine = ENGINES.get(game_id)
    if engine is not None:
        ENGINES.move_to_end(game_id)
    return engine


def _store(engine: PuzzleEngine) -> str:
    game_id = uuid.uuid4().hex
    ENGINES[game_id] = engine
    while len(ENGINES) > MAX_GAMES:
        dropped, _ = ENGINES.popitem(last=False)
        logger.info("evicted game %s", dropped)
    return game_id


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


# ---------- Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = _body()
    try:
        width = int(body.get("width", SETTINGS.width))
        height = int(body.get("height", SETTINGS.height))
        if width > MAX_SIDE or height > MAX_SIDE:
            raise ValueError(f"grid sides are limited to {MAX_SIDE}, got {width}x{height}")
        seed = body.get("seed", SETTINGS.seed)
        engine = PuzzleEngine(
            width,
            height,
            seed=int(seed) if seed is not None else None,
            dedupe_junctions=parse_flag(body.get("dedupeJunctions"), SETTINGS.dedupe_junctions),
        )
    except (TypeError, ValueError) as e:
        return _error(f"bad game options: {e}")
    game_id = _store(engine)
    logger.info("new game %s (%dx%d)", game_id, width, height)
    return jsonify({
        "ok": True,
        "gameId": game_id,
        "width": engine.width,
        "height": engine.height,
        "grid": grid_to_json(engine),
    })


@app.post("/api/delete")
def api_delete() -> Any:
    game_id = str(_body().get("gameId", ""))
    if ENGINES.pop(game_id, None) is None:
        return _error("unknown game", 404)
    return jsonify({"ok": True})


@app.post("/api/state")
def api_state() -> Any:
    engine = _lookup(_body())
    if engine is None:
        return _error("unknown game", 404)
    return jsonify({
        "ok": True,
        "grid": grid_to_json(engine),
        "settled": engine.is_settled(),
        "queue": engine.spawn_queue.peek(),
    })


@app.post("/api/resolve")
def api_resolve() -> Any:
    body = _body()
    engine = _lookup(body)
    if engine is None:
        return _error("unknown game", 404)
    try:
        phase = engine.resolve(moves_from_json(body.get("moves")))
    except InvalidMoveError as e:
        return _error(str(e))
    return jsonify({"ok": True, "phase": phase_to_json(phase), "grid": grid_to_json(engine)})


@app.post("/api/cascade")
def api_cascade() -> Any:
    body = _body()
    engine = _lookup(body)
    if engine is None:
        return _error("unknown game", 404)
    try:
        phases = engine.resolve_to_settled(moves_from_json(body.get("moves")))
    except InvalidMoveError as e:
        return _error(str(e))
    except CascadeLimitError as e:
        return _error(str(e), 500)
    return jsonify({
        "ok": True,
        "phases": [phase_to_json(p) for p in phases],
        "grid": grid_to_json(engine),
    })


@app.post("/api/preview")
def api_preview() -> Any:
    body = _body()
    engine = _lookup(body)
    if engine is None:
        return _error("unknown game", 404)
    try:
        matches = engine.preview_move(move_from_json(body.get("move")))
    except InvalidMoveError as e:
        return _error(str(e))
    return jsonify({"ok": True, "matches": [[[x, y] for (x, y) in m] for m in matches]})


@app.post("/api/enqueue")
def api_enqueue() -> Any:
    body = _body()
    engine = _lookup(body)
    if engine is None:
        return _error("unknown game", 404)
    cats = body.get("categories")
    if not isinstance(cats, list):
        return _error("categories must be a list")
    try:
        engine.enqueue_next_many(str(c) for c in cats)
    except ValueError as e:
        return _error(str(e))
    return jsonify({"ok": True, "queue": engine.spawn_queue.peek()})


@app.post("/api/reset")
def api_reset() -> Any:
    engine = _lookup(_body())
    if engine is None:
        return _error("unknown game", 404)
    engine.reset()
    return jsonify({"ok": True, "grid": grid_to_json(engine)})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    configure_logging(SETTINGS.debug)
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug, threaded=False)
