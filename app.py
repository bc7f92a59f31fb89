from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request

from game import (
    Action,
    ActionLog,
    Board,
    BoardInputError,
    ColorChunk,
    find_solution,
    format_solution,
    fresh_seed,
    validate_slots,
)

app = Flask(__name__)


# ---------- JSON conversion ----------

def board_to_json(b: Board) -> Dict[str, Any]:
    return {
        "numExtra": int(b.num_extra),
        "numSlots": int(b.num_slots),
        "tubes": [list(colors) for colors in b.snapshot()],
        "seed": b.seed,
        "filename": b.filename,
        "solved": b.is_solved(),
    }


def board_from_json(obj: Dict[str, Any]) -> Board:
    """Rebuilds a board sent by a client; unit counts are re-validated."""
    rows_in = obj["tubes"]
    if not isinstance(rows_in, list) or not rows_in:
        raise ValueError("tubes must be a non-empty list")
    rows: List[List[int]] = [[int(x) for x in row] for row in rows_in]
    num_slots = len(rows[0])
    if any(len(row) != num_slots for row in rows):
        raise ValueError("all tubes must have the same number of slots")
    flat = [v for row in rows for v in row]
    num_colors = validate_slots(flat, len(rows), num_slots)
    seed = obj.get("seed")
    return Board.from_rows(
        rows,
        len(rows) - num_colors,
        seed=int(seed) if seed is not None else None,
        filename=obj.get("filename"),
    )


def log_to_json(log: ActionLog) -> List[List[int]]:
    return [[a.i_src, a.i_dst, a.chunk.color, a.chunk.count] for a in log]


def log_from_json(items: Optional[List[Any]], num_tubes: int) -> ActionLog:
    log = ActionLog()
    for item in items or []:
        i_src, i_dst, color, count = (int(x) for x in item)
        if not (0 <= i_src < num_tubes and 0 <= i_dst < num_tubes):
            raise ValueError(f"log entry out of range: {item}")
        log.push(Action(i_src, i_dst, ColorChunk(color, count)))
    return log


def _state_json(board: Board, log: ActionLog) -> Dict[str, Any]:
    return {"ok": True, "board": board_to_json(board), "log": log_to_json(log), "moves": log.moves()}


def _bad_request(message: str) -> Any:
    return jsonify({"ok": False, "error": message}), 400


def _json_body() -> Optional[Dict[str, Any]]:
    """The request body as a JSON object, or None for anything else."""
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


def _revert_fits(board: Board, log: ActionLog) -> bool:
    """Client-supplied logs are untrusted: the newest chunk must sit on top of its destination."""
    actions = list(log)
    if not actions:
        return True
    last = actions[-1]
    top = board.tubes[last.i_dst].top_chunk()
    return (
        last.chunk.count > 0
        and top.color == last.chunk.color
        and top.count >= last.chunk.count
        and board.tubes[last.i_src].free_slots() >= last.chunk.count
    )


# ---------- Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = _json_body()
    if body is None:
        return _bad_request("body must be a JSON object")
    try:
        colors = int(body.get("colors", 5))
        extra = int(body.get("extra", 2))
        slots = int(body.get("slots", 4))
        seed_in = body.get("seed")
        seed = int(seed_in) if seed_in is not None else fresh_seed()
        if not 0 <= seed <= 0xFFFFFFFF:
            raise ValueError(f"invalid seed: {seed}")
        board = Board.generate(colors, extra, slots, seed)
    except (TypeError, ValueError) as e:
        return _bad_request(f"bad parameters: {e}")
    return jsonify(_state_json(board, ActionLog()))


@app.post("/api/pour")
def api_pour() -> Any:
    body = _json_body()
    if body is None:
        return _bad_request("body must be a JSON object")
    try:
        board = board_from_json(body["board"])
        log = log_from_json(body.get("log"), board.num_tubes)
        src = int(body["src"]) - 1
        dst = int(body["dst"]) - 1
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad state: {e}")
    if not board.pour(src, dst, log):
        out = _state_json(board, log)
        out.update({"ok": False, "error": "Illegal pour"})
        return jsonify(out), 400
    return jsonify(_state_json(board, log))


@app.post("/api/revert")
def api_revert() -> Any:
    body = _json_body()
    if body is None:
        return _bad_request("body must be a JSON object")
    try:
        board = board_from_json(body["board"])
        log = log_from_json(body.get("log"), board.num_tubes)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad state: {e}")
    if not _revert_fits(board, log):
        return _bad_request("Log does not match board")
    if not board.revert_one(log):
        return _bad_request("Nothing to revert")
    return jsonify(_state_json(board, log))


@app.post("/api/solve")
def api_solve() -> Any:
    body = _json_body()
    if body is None:
        return _bad_request("body must be a JSON object")
    try:
        board = board_from_json(body["board"])
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad state: {e}")
    log = find_solution(board)
    if log is None:
        return jsonify({"ok": True, "found": False, "board": board_to_json(board)})
    board.revert_all(log.duplicate())
    return jsonify({
        "ok": True,
        "found": True,
        "board": board_to_json(board),
        "moves": log.moves(),
        "report": format_solution(board, log),
    })


@app.post("/api/validate")
def api_validate() -> Any:
    body = _json_body()
    if body is None:
        return _bad_request("body must be a JSON object")
    try:
        board = board_from_json(body)
    except BoardInputError as e:
        return _bad_request(str(e))
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad state: {e}")
    return jsonify({"ok": True, "numColors": board.num_colors, "numExtra": board.num_extra})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
