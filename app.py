from __future__ import annotations

import os
import threading
import time
import uuid
from typing import Any, Dict, List, Optional, Tuple

import requests
from flask import Flask, jsonify, request

from paperbark_core.board import Square
from paperbark_core.game import CheckRegionError, Game
from paperbark_core.puzzle import PuzzleData, PuzzleFormatError
from paperbark_core.region import Region
from paperbark_core.session import PlaySession, status_message

app = Flask(__name__)

# Sessions live in memory only. One lock serializes every access so a Game
# is never mutated by two requests at once.
_SESSIONS: Dict[str, PlaySession] = {}
_LAST_SEEN: Dict[str, float] = {}
_LOCK = threading.Lock()


def session_ttl() -> float:
    """Seconds an idle session is kept before it is swept."""
    try:
        return float(os.getenv("PAPERBARK_SESSION_TTL", "3600"))
    except ValueError:
        return 3600.0


def cleanup_stale_sessions(max_age_seconds: Optional[float] = None) -> List[str]:
    """Drops sessions idle for longer than ``max_age_seconds``. Caller must hold _LOCK."""
    max_age = session_ttl() if max_age_seconds is None else max_age_seconds
    now = time.time()
    stale = [sid for sid, seen in _LAST_SEEN.items() if now - seen > max_age]
    for sid in stale:
        _SESSIONS.pop(sid, None)
        _LAST_SEEN.pop(sid, None)
    return stale


def _error(error: str, status: int, **extra: Any) -> Tuple[Any, int]:
    body: Dict[str, Any] = {"ok": False, "error": error}
    body.update(extra)
    return jsonify(body), status


def _json_body() -> Optional[Dict[str, Any]]:
    """The request's JSON object; {} when absent, None when it is not an object."""
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


def _square_from_json(obj: Any) -> Square:
    x, y = obj
    return Square(int(x), int(y))


def _region_from_json(body: Dict[str, Any]) -> Region:
    squares = body.get("squares")
    if not isinstance(squares, list):
        raise ValueError("squares must be a list of [x, y] pairs")
    return Region(_square_from_json(s) for s in squares)


def _squares_to_json(region: Region) -> List[List[int]]:
    return [[s.x, s.y] for s in region.sorted_squares()]


def session_to_json(session_id: str, session: PlaySession) -> Dict[str, Any]:
    game = session.game
    board = game.board
    return {
        "id": session_id,
        "board": {"width": board.width, "height": board.height, "rows": board.rows()},
        "minLength": game.ruleset.min_length,
        "maxLength": game.ruleset.max_length,
        "regions": [
            {"squares": _squares_to_json(region), "label": label, "word": region.word(board)}
            for region, label in game.regions()
        ],
        "complete": game.is_complete(),
    }


def _lookup(session_id: str) -> Optional[PlaySession]:
    cleanup_stale_sessions()
    session = _SESSIONS.get(session_id)
    if session is not None:
        _LAST_SEEN[session_id] = time.time()
    return session


def _load_puzzle(body: Dict[str, Any]) -> PuzzleData:
    if "game" in body:
        return PuzzleData.from_objects(body.get("dictionary"), body["game"])
    if "puzzleId" in body:
        return PuzzleData.from_web(int(body["puzzleId"]))
    return PuzzleData.from_web_today()


@app.post("/api/new")
def api_new() -> Any:
    body = _json_body()
    if body is None:
        return _error("body must be a JSON object", 400)
    try:
        data = _load_puzzle(body)
        game: Game[str] = Game(data.board(), data.ruleset())
    except requests.RequestException as e:
        return _error(f"could not fetch puzzle: {e}", 502)
    except (PuzzleFormatError, ValueError, TypeError) as e:
        return _error(f"bad puzzle: {e}", 400)
    session_id = uuid.uuid4().hex
    session = PlaySession(game)
    with _LOCK:
        cleanup_stale_sessions()
        _SESSIONS[session_id] = session
        _LAST_SEEN[session_id] = time.time()
        return jsonify({"ok": True, "state": session_to_json(session_id, session)})


@app.get("/api/session/<session_id>")
def api_state(session_id: str) -> Any:
    with _LOCK:
        session = _lookup(session_id)
        if session is None:
            return _error("unknown session", 404)
        return jsonify({"ok": True, "state": session_to_json(session_id, session)})


@app.post("/api/session/<session_id>/check")
def api_check(session_id: str) -> Any:
    body = _json_body()
    if body is None:
        return _error("body must be a JSON object", 400)
    try:
        region = _region_from_json(body)
    except (TypeError, ValueError) as e:
        return _error(f"bad region: {e}", 400)
    with _LOCK:
        session = _lookup(session_id)
        if session is None:
            return _error("unknown session", 404)
        game = session.game
        result = game.check_region(region)
        word = region.word(game.board) if region.is_in_bounds(game.board) else None
        if isinstance(result, CheckRegionError):
            return jsonify({
                "ok": False,
                "error": result.value,
                "message": status_message(result, word or ""),
                "word": word,
            })
        return jsonify({"ok": True, "error": None, "word": word})


@app.post("/api/session/<session_id>/commit")
def api_commit(session_id: str) -> Any:
    body = _json_body()
    if body is None:
        return _error("body must be a JSON object", 400)
    try:
        region = _region_from_json(body)
    except (TypeError, ValueError) as e:
        return _error(f"bad region: {e}", 400)
    with _LOCK:
        session = _lookup(session_id)
        if session is None:
            return _error("unknown session", 404)
        result = session.game.check_region(region)
        if isinstance(result, CheckRegionError):
            word = region.word(session.game.board) if region.is_in_bounds(session.game.board) else ""
            return _error(result.value, 409, message=status_message(result, word))
        label = body.get("label")
        if not isinstance(label, str):
            label = session.next_color()
        session.game.add_region(result, label)
        return jsonify({"ok": True, "state": session_to_json(session_id, session)})


@app.post("/api/session/<session_id>/remove")
def api_remove(session_id: str) -> Any:
    body = _json_body()
    if body is None:
        return _error("body must be a JSON object", 400)
    try:
        square = _square_from_json(body.get("square"))
    except (TypeError, ValueError) as e:
        return _error(f"bad square: {e}", 400)
    with _LOCK:
        session = _lookup(session_id)
        if session is None:
            return _error("unknown session", 404)
        removed = session.game.remove_region(square)
        return jsonify({
            "ok": True,
            "removed": (
                {"squares": _squares_to_json(removed[0]), "label": removed[1]}
                if removed is not None else None
            ),
            "state": session_to_json(session_id, session),
        })


@app.delete("/api/session/<session_id>")
def api_delete(session_id: str) -> Any:
    with _LOCK:
        _LAST_SEEN.pop(session_id, None)
        if _SESSIONS.pop(session_id, None) is None:
            return _error("unknown session", 404)
    return jsonify({"ok": True})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
