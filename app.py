from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request

from game import (
    Board,
    Color,
    EndReason,
    GameConfig,
    GameSession,
    GenerationError,
    InvalidCoordinate,
    ScannedTile,
    Shape,
    Snapshot,
    TapResult,
    TickResult,
    configure_logging,
    env_flag,
)

logger = logging.getLogger(__name__)

CONFIG = GameConfig.from_env()

app = Flask(__name__)


class BadPayload(ValueError):
    pass


# ---------- JSON codec ----------

def board_to_json(b: Board) -> Dict[str, Any]:
    return {
        "rows": int(b.rows),
        "cols": int(b.cols),
        "grid": [[cell.value if cell is not None else None for cell in row] for row in b.cells],
    }


def board_from_json(obj: Dict[str, Any]) -> Board:
    rows = int(obj["rows"])
    cols = int(obj["cols"])
    grid = obj["grid"]
    if len(grid) != rows or any(len(row) != cols for row in grid):
        raise ValueError(f"grid does not match {cols}x{rows}")
    cells = [[Color(str(v)) if v is not None else None for v in row] for row in grid]
    return Board(rows=rows, cols=cols, cells=cells)


def tile_to_json(t: ScannedTile) -> Dict[str, Any]:
    return {"x": t.x, "y": t.y, "color": t.color.value}


def _reason(r: Optional[EndReason]) -> Optional[str]:
    return r.value if r is not None else None


def session_to_json(s: GameSession) -> Dict[str, Any]:
    return {
        "board": board_to_json(s.board) if s.board is not None else None,
        "mode": s.mode.value,
        "shape": s.shape.value if s.shape is not None else None,
        "score": int(s.score),
        "timeLeft": int(s.time_left),
        "timerStarted": bool(s.timer_started),
        "ended": s.ended,
        "endReason": _reason(s.end_reason),
    }


def json_to_session(obj: Dict[str, Any], config: Optional[GameConfig] = None) -> GameSession:
    if not isinstance(obj, dict) or not isinstance(obj.get("board"), dict):
        raise BadPayload("session with board required")
    board = board_from_json(obj["board"])
    shape = Shape.parse(obj["shape"]) if obj.get("shape") is not None else None
    if shape is not None and (board.rows, board.cols) != (shape.rows, shape.cols):
        raise BadPayload(f"{board.cols}x{board.rows} board does not match shape {shape.value}")
    reason = obj.get("endReason")
    return GameSession.from_board(
        board,
        mode=obj.get("mode"),
        shape=shape,
        score=int(obj.get("score", 0)),
        time_left=int(obj["timeLeft"]) if obj.get("timeLeft") is not None else None,
        timer_started=bool(obj.get("timerStarted", False)),
        end_reason=EndReason(reason) if reason else None,
        ended=bool(obj.get("ended", False)),
        config=config or CONFIG,
    )


def snapshot_to_json(snap: Snapshot) -> Dict[str, Any]:
    return {
        "board": board_to_json(snap.board) if snap.board is not None else None,
        "score": snap.score,
        "timeLeft": snap.time_left,
        "ended": snap.ended,
        "endReason": _reason(snap.end_reason),
        "mode": snap.mode.value,
        "shape": snap.shape.value if snap.shape is not None else None,
        "phase": snap.phase.value,
        "timerStarted": snap.timer_started,
        "remaining": snap.remaining,
    }


def tap_result_to_json(r: TapResult) -> Dict[str, Any]:
    return {
        "outcome": r.outcome.value,
        "removedCount": r.removed_count,
        "removed": [tile_to_json(t) for t in r.removed],
        "scoreAfter": r.score_after,
        "remainingTiles": r.remaining_tiles,
        "timeLeft": r.time_left,
        "penalty": r.penalty,
        "ended": r.ended,
        "endReason": _reason(r.end_reason),
    }


def tick_result_to_json(r: TickResult) -> Dict[str, Any]:
    return {
        "timeLeftAfter": r.time_left_after,
        "ended": r.ended,
        "endReason": _reason(r.end_reason),
        "ticked": r.ticked,
    }


# ---------- request helpers ----------

def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


def _session_from(body: Dict[str, Any]) -> GameSession:
    try:
        return json_to_session(body.get("session"))  # type: ignore[arg-type]
    except BadPayload:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise BadPayload(f"bad session: {e}") from e


def _coords_from(body: Dict[str, Any]) -> List[int]:
    try:
        return [int(body["x"]), int(body["y"])]
    except (KeyError, TypeError, ValueError) as e:
        raise BadPayload(f"x and y required: {e}") from e


@app.errorhandler(BadPayload)
def _bad_payload(e: BadPayload) -> Any:
    return jsonify({"ok": False, "error": str(e)}), 400


@app.errorhandler(InvalidCoordinate)
def _invalid_coordinate(e: InvalidCoordinate) -> Any:
    return jsonify({"ok": False, "error": str(e)}), 400


@app.errorhandler(GenerationError)
def _generation_failed(e: GenerationError) -> Any:
    logger.error("board generation failed: %s", e)
    return jsonify({"ok": False, "error": str(e)}), 500


# ---------- Game API ----------

@app.get("/api/health")
def api_health() -> Any:
    return jsonify({"ok": True})


@app.post("/api/new")
def api_new() -> Any:
    body = _body()
    seed = body.get("seed", None)
    session = GameSession(config=CONFIG)
    try:
        snap = session.reset(
            mode=body.get("mode") or None,
            shape=body.get("shape") or None,
            seed=int(seed) if seed is not None else None,
        )
    except (TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad request: {e}"}), 400
    return jsonify({"ok": True, "session": session_to_json(session), "snapshot": snapshot_to_json(snap)})


@app.post("/api/tap")
def api_tap() -> Any:
    body = _body()
    session = _session_from(body)
    x, y = _coords_from(body)
    result = session.tap(x, y)
    return jsonify({"ok": True, "result": tap_result_to_json(result), "session": session_to_json(session)})


@app.post("/api/tick")
def api_tick() -> Any:
    session = _session_from(_body())
    result = session.tick()
    return jsonify({"ok": True, "result": tick_result_to_json(result), "session": session_to_json(session)})


@app.post("/api/snapshot")
def api_snapshot() -> Any:
    session = _session_from(_body())
    return jsonify({"ok": True, "snapshot": snapshot_to_json(session.get_snapshot())})


@app.post("/api/preview")
def api_preview() -> Any:
    body = _body()
    session = _session_from(body)
    x, y = _coords_from(body)
    return jsonify({"ok": True, "tiles": [tile_to_json(t) for t in session.preview(x, y)]})


@app.post("/api/hint")
def api_hint() -> Any:
    session = _session_from(_body())
    cell = session.hint()
    return jsonify({"ok": True, "cell": [cell[0], cell[1]] if cell is not None else None})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    configure_logging()
    debug = env_flag("FLASK_DEBUG", os.getenv("DEBUG", "0"))
    port = int(os.getenv("PORT", "5000"))
    app.run(host="0.0.0.0", port=port, debug=debug)
