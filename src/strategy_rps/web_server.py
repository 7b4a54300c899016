import threading
import uuid
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request, Response
from loguru import logger
from pydantic import BaseModel

from strategy_rps.ai_policy import STRATEGY_TYPES
from strategy_rps.config import configure_logging, load_config
from strategy_rps.game_logic import MOVES, RoundOutcome, parse_move
from strategy_rps.main import make_session
from strategy_rps.session import GameSession


# ---------------- Session storage ----------------
_sessions: Dict[str, GameSession] = {}
_sessions_lock = threading.Lock()


def _get_or_create_session(req: Request, resp: Response) -> GameSession:
    cookie = cfg["web"]["cookie"]
    sid = req.cookies.get(cookie)
    with _sessions_lock:
        if not sid or sid not in _sessions:
            sid = uuid.uuid4().hex
            _sessions[sid] = make_session(cfg)
            resp.set_cookie(cookie, sid, httponly=False, samesite="lax")
        return _sessions[sid]


# ---------------- Request/Response models ----------------
class RoundRequest(BaseModel):
    move: str


class TallyModel(BaseModel):
    player_wins: int
    computer_wins: int
    ties: int
    rounds: int


class RoundModel(BaseModel):
    player: str
    ai: str
    result: str
    strategy: str
    message: str


class RoundResponse(RoundModel):
    tally: TallyModel


def _round_payload(outcome: RoundOutcome) -> dict:
    return {
        "player": outcome.player_move.value,
        "ai": outcome.computer_move.value,
        "result": outcome.result.value,
        "strategy": outcome.strategy_name,
        "message": outcome.describe(),
    }


# ---------------- App init ----------------
cfg = load_config()
configure_logging(cfg["logging"]["level"])
app = FastAPI(title="Strategy RPS Web")


@app.get("/api/config")
def api_config():
    return {
        "moves": [m.value for m in MOVES],
        "strategies": [cls.name for cls in STRATEGY_TYPES],
    }


@app.post("/api/round", response_model=RoundResponse)
def api_round(req: Request, resp: Response, rr: RoundRequest):
    try:
        move = parse_move(rr.move)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    sess = _get_or_create_session(req, resp)
    outcome = sess.play_turn(move)
    payload = _round_payload(outcome)
    payload["tally"] = sess.current_tally().as_dict()
    return payload


@app.get("/api/tally", response_model=TallyModel)
def api_tally(req: Request, resp: Response):
    return _get_or_create_session(req, resp).current_tally().as_dict()


@app.get("/api/log", response_model=List[RoundModel])
def api_log(req: Request, resp: Response):
    return [_round_payload(o) for o in _get_or_create_session(req, resp).log()]


@app.post("/api/quit")
def api_quit(req: Request, resp: Response):
    cookie = cfg["web"]["cookie"]
    sid: Optional[str] = req.cookies.get(cookie)
    with _sessions_lock:
        sess = _sessions.pop(sid, None) if sid else None
    if sess is None:
        return {"ok": False}
    sess.quit()
    resp.delete_cookie(cookie)
    logger.info(f"Session {sid} closed")
    return {"ok": True}


# Simple health check
@app.get("/health")
def health():
    return {"ok": True}
