from __future__ import annotations

import logging
import os
import sys
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

# Ensure package imports work when executed directly from repo root or as module
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

try:
    from .game import (  # type: ignore
        Cell,
        Equation,
        HeldStick,
        MessageKind,
        MoveAction,
        Puzzle,
        PuzzleSession,
        DEFAULT_PUZZLE,
        FALLBACK_PUZZLES,
        count_lit,
        is_puzzle_text,
        generate_puzzle,
        get_hint,
    )
    from .matchstick_core.logging_config import debug_enabled, setup_logging  # type: ignore
except ImportError:
    from game import (  # type: ignore
        Cell,
        Equation,
        HeldStick,
        MessageKind,
        MoveAction,
        Puzzle,
        PuzzleSession,
        DEFAULT_PUZZLE,
        FALLBACK_PUZZLES,
        count_lit,
        is_puzzle_text,
        generate_puzzle,
        get_hint,
    )
    from matchstick_core.logging_config import debug_enabled, setup_logging  # type: ignore

logger = logging.getLogger("matchstick_core.app")

app = Flask(__name__)


# ---------- JSON <-> session ----------

def cell_to_json(c: Cell) -> Dict[str, Any]:
    return {"id": int(c.id), "kind": c.kind.value, "symbol": c.symbol, "segments": [bool(s) for s in c.segments]}


def cell_from_json(obj: Dict[str, Any]) -> Cell:
    return Cell.from_symbol(int(obj["id"]), str(obj["symbol"]), [bool(s) for s in obj["segments"]])


def session_to_json(s: PuzzleSession) -> Dict[str, Any]:
    held = s.held
    return {
        "cells": [cell_to_json(c) for c in s.equation],
        "held": {"cellId": held.cell_id, "segment": held.segment_index} if held else None,
        "won": bool(s.won),
        "generation": int(s.generation),
        "message": s.message,
        "messageKind": s.message_kind.value,
        "hint": s.hint,
        "solution": s.solution,
        "text": s.current_text(),
        "sticks": count_lit(s.equation),
    }


def session_from_json(obj: Dict[str, Any]) -> PuzzleSession:
    cells = tuple(cell_from_json(c) for c in obj["cells"])
    ids = [c.id for c in cells]
    if len(set(ids)) != len(ids):
        raise ValueError("duplicate cell ids")
    held_in = obj.get("held")
    held = None
    if held_in is not None:
        held = HeldStick(int(held_in["cellId"]), int(held_in["segment"]))
    extra: Dict[str, Any] = {}
    if obj.get("message"):
        extra["message"] = str(obj["message"])
        extra["message_kind"] = MessageKind(obj.get("messageKind", MessageKind.NEUTRAL.value))
    return PuzzleSession.restore(
        Equation(cells=cells),
        held=held,
        won=bool(obj.get("won", False)),
        generation=int(obj.get("generation", 0)),
        solution=obj.get("solution"),
        hint=obj.get("hint"),
        **extra,
    )


def _error(msg: str, status: int = 400) -> Tuple[Any, int]:
    logger.debug("rejecting request (%d): %s", status, msg)
    return jsonify({"ok": False, "error": msg}), status


def _json_body() -> Optional[Dict[str, Any]]:
    """The request's JSON object; {} for an empty or unparsable body, None for a non-object."""
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


def _session_from_body(body: Dict[str, Any]) -> PuzzleSession:
    s_in = body.get("state")
    if not isinstance(s_in, dict):
        raise ValueError("state required")
    return session_from_json(s_in)


def _state_reply(s: PuzzleSession) -> Any:
    return jsonify({"ok": True, "state": session_to_json(s), "outcome": s.outcome().value})


# ---------- API ----------

@app.get("/")
def index() -> Any:
    return jsonify({
        "ok": True,
        "name": "matchstick",
        "endpoints": ["/api/new", "/api/reset", "/api/touch", "/api/evaluate",
                      "/api/generate", "/api/hint", "/api/puzzles"],
    })


@app.get("/api/puzzles")
def api_puzzles() -> Any:
    return jsonify({
        "ok": True,
        "default": {"start": DEFAULT_PUZZLE.start, "solution": DEFAULT_PUZZLE.solution},
        "fallbacks": [{"start": p.start, "solution": p.solution} for p in FALLBACK_PUZZLES],
    })


@app.post("/api/new")
def api_new() -> Any:
    body = _json_body()
    if body is None:
        return _error("request body must be a JSON object")
    text = body.get("equation")
    if text is None:
        puzzle = DEFAULT_PUZZLE
    elif is_puzzle_text(text):
        puzzle = Puzzle(start=text, solution=body.get("solution"))
    else:
        return _error("equation may only contain digits, +, -, = and spaces, and needs an =")
    return _state_reply(PuzzleSession(puzzle))


@app.post("/api/reset")
def api_reset() -> Any:
    body = _json_body()
    if body is None:
        return _error("request body must be a JSON object")
    generation = 0
    s_in = body.get("state")
    if isinstance(s_in, dict):
        try:
            generation = int(s_in.get("generation", 0))
        except (TypeError, ValueError):
            return _error("bad state: generation must be an integer")
    s = PuzzleSession(DEFAULT_PUZZLE, generation=generation)
    s.reset()
    return _state_reply(s)


@app.post("/api/touch")
def api_touch() -> Any:
    body = _json_body()
    if body is None:
        return _error("request body must be a JSON object")
    try:
        s = _session_from_body(body)
        cell_id = int(body["cellId"])
        segment = int(body["segment"])
    except (KeyError, TypeError, ValueError) as e:
        return _error(f"bad request: {e}")
    try:
        result = s.touch(cell_id, segment)
    except ValueError as e:
        return _error(str(e))
    move = result.move
    return jsonify({
        "ok": True,
        "action": result.action.value,
        "outcome": result.outcome.value if result.outcome is not None else None,
        "move": None if move is None else {
            "from": [move.from_cell, move.from_segment],
            "to": [move.to_cell, move.to_segment],
        },
        "accepted": result.action != MoveAction.IGNORED,
        "state": session_to_json(s),
    })


@app.post("/api/evaluate")
def api_evaluate() -> Any:
    body = _json_body()
    if body is None:
        return _error("request body must be a JSON object")
    try:
        s = _session_from_body(body)
    except (KeyError, TypeError, ValueError) as e:
        return _error(f"bad state: {e}")
    return jsonify({"ok": True, "outcome": s.outcome().value, "text": s.current_text(),
                    "sticks": count_lit(s.equation)})


@app.post("/api/generate")
def api_generate() -> Any:
    body = _json_body()
    if body is None:
        return _error("request body must be a JSON object")
    seed = body.get("seed")
    if seed is not None:
        try:
            seed = int(seed)
        except (TypeError, ValueError):
            return _error("seed must be an integer")
    s_in = body.get("state")
    try:
        s = session_from_json(s_in) if isinstance(s_in, dict) else PuzzleSession(DEFAULT_PUZZLE)
    except (KeyError, TypeError, ValueError) as e:
        return _error(f"bad state: {e}")
    token = s.begin_generation()
    if token is None:
        return _error("a request is already running", 409)
    s.finish_generation(token, generate_puzzle(seed))
    return _state_reply(s)


@app.post("/api/hint")
def api_hint() -> Any:
    body = _json_body()
    if body is None:
        return _error("request body must be a JSON object")
    try:
        s = _session_from_body(body)
    except (KeyError, TypeError, ValueError) as e:
        return _error(f"bad state: {e}")
    token = s.begin_hint()
    if token is None:
        return _error("puzzle already solved", 409)
    s.finish_hint(token, get_hint(s.current_text()))
    return jsonify({"ok": True, "hint": s.hint, "generation": s.generation, "state": session_to_json(s)})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    setup_logging()
    debug = os.getenv("FLASK_DEBUG", "1" if debug_enabled() else "0").lower() in ("1", "true", "yes", "on")
    port = int(os.getenv("PORT", "5000"))
    app.run(host="0.0.0.0", port=port, debug=debug)
