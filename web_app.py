from fastapi import FastAPI, Request, Form
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware
from collections import OrderedDict
from typing import Optional
import logging
import math
import threading
import uuid

from itinerary_agent import PlannerSession, build_structured_output
from itinerary_agent.planner import MISSING_FIELDS_MESSAGE
from itinerary_agent.settings import cfg_get


logging.basicConfig(
    level=str(cfg_get("LOG_LEVEL", "INFO")).upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="AI Travel Planner")

# 会话中间件：浏览器会话 -> 内存中的 PlannerSession（不持久化）
app.add_middleware(SessionMiddleware, secret_key=cfg_get("SESSION_SECRET", "change-me-please"))

# 内存中最多保留的会话数，超出后淘汰最久未访问的会话
DEFAULT_MAX_SESSIONS = 500

_sessions: "OrderedDict[str, PlannerSession]" = OrderedDict()
_sessions_lock = threading.Lock()


def _max_sessions() -> int:
    try:
        return max(int(cfg_get("MAX_SESSIONS", DEFAULT_MAX_SESSIONS)), 1)
    except (TypeError, ValueError):
        return DEFAULT_MAX_SESSIONS


def _get_session(request: Request) -> PlannerSession:
    sid = request.session.get("sid")
    with _sessions_lock:
        session = _sessions.get(sid) if sid else None
        if session is not None:
            _sessions.move_to_end(sid)
            return session

        sid = uuid.uuid4().hex
        request.session["sid"] = sid
        session = PlannerSession()
        # 页面加载时检查凭证
        session.check_credentials()
        _sessions[sid] = session
        while len(_sessions) > _max_sessions():
            evicted, _ = _sessions.popitem(last=False)
            logger.info("evicted planner session %s", evicted[:8])
        logger.info("new planner session credential_selected=%s", session.credential_selected)
    return session


def _optional_float(raw: Optional[str]) -> Optional[float]:
    # 空字符串、无法解析或非有限数值（nan / inf）都表示清除
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


@app.get("/api/session")
def get_session(request: Request):
    return build_structured_output(_get_session(request))


@app.post("/api/credentials")
def select_credentials(request: Request, api_key: str = Form("")):
    session = _get_session(request)
    session.select_credentials(api_key.strip() or None)
    return build_structured_output(session)


@app.post("/api/plan")
def plan(
    request: Request,
    destination: str = Form(""),
    duration: int = Form(0),
    interests: str = Form(""),
    total_budget: str = Form(""),
):
    session = _get_session(request)
    ok = session.submit(
        destination=destination.strip(),
        duration=duration,
        interests=interests.strip(),
        total_budget=_optional_float(total_budget),
    )
    data = build_structured_output(session)
    if ok:
        return data
    if session.refused_busy:
        return JSONResponse(data, status_code=409)
    if session.error == MISSING_FIELDS_MESSAGE:
        return JSONResponse(data, status_code=400)
    return JSONResponse(data, status_code=502)


@app.post("/api/actual-cost")
def actual_cost(
    request: Request,
    day: int = Form(...),
    activity_index: int = Form(...),
    cost: str = Form(""),
):
    session = _get_session(request)
    session.set_actual_cost(day, activity_index, _optional_float(cost))
    return build_structured_output(session)


@app.post("/api/budget")
def total_budget(request: Request, total_budget: str = Form("")):
    session = _get_session(request)
    session.set_total_budget(_optional_float(total_budget))
    return build_structured_output(session)
