"""
LangLink — FastAPI backend for quiz progress, levels and streaks
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from . import ledger
from .config import load_settings
from .content import get_questions, languages_with_questions
from .db import Store
from .engine.languages import content_gaps
from .errors import LangLinkError, StoreFailure
from .models import (
    Dashboard, LeaderboardEntry, LessonCompletion, LessonResult, ProgressView,
    QuizResult, QuizSubmission, Registered, StreakPing, StreakResult, UserRegister,
)

settings = load_settings()

logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = Store.from_settings(settings)
    app.state.store = store
    for gap in content_gaps(languages_with_questions()):
        logger.warning("Content gap: %s is missing %s", gap.language, ", ".join(gap.missing))
    try:
        yield
    finally:
        store.close()


limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limits_enabled)
app = FastAPI(title="LangLink API", lifespan=lifespan)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["Authorization", "Content-Type"],
)


@app.exception_handler(LangLinkError)
async def langlink_error_handler(request: Request, exc: LangLinkError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "error": exc.kind})


def get_store(request: Request) -> Store:
    return request.app.state.store


@app.get("/health")
def health(store: Store = Depends(get_store)):
    try:
        store.ping()
        return {"status": "ok", "db": "ok"}
    except StoreFailure as e:
        logger.error("Health check DB failure: %s", e)
        raise HTTPException(status_code=503, detail="DB unavailable")


# ── Users ─────────────────────────────────────────────────────────────────────

@app.post("/api/users", status_code=201, response_model=Registered)
@limiter.limit("10/minute")
def register_user(request: Request, body: UserRegister, store: Store = Depends(get_store)):
    return ledger.register_user(store, body.name, body.email, body.learning_language)


@app.get("/api/dashboard/{user_id}", response_model=Dashboard)
def get_dashboard(user_id: str, store: Store = Depends(get_store)):
    return ledger.get_dashboard(store, user_id)


# ── Progress ──────────────────────────────────────────────────────────────────

@app.post("/api/submit", response_model=QuizResult)
@limiter.limit("60/minute")
def submit_quiz(request: Request, body: QuizSubmission, store: Store = Depends(get_store)):
    return ledger.submit_quiz_result(store, body.user_id, body.language, body.score)


@app.post("/api/complete-lesson", response_model=LessonResult)
@limiter.limit("60/minute")
def complete_lesson(request: Request, body: LessonCompletion, store: Store = Depends(get_store)):
    return ledger.complete_lesson(store, body.user_id, body.gained_xp, body.language)


@app.post("/api/update-streak", response_model=StreakResult)
@limiter.limit("30/minute")
def update_streak(request: Request, body: StreakPing, store: Store = Depends(get_store)):
    return ledger.advance_streak(store, body.user_id)


@app.get("/api/progress/{user_id}/{language}", response_model=ProgressView)
def get_progress(user_id: str, language: str, store: Store = Depends(get_store)):
    return ledger.get_progress(store, user_id, language)


@app.get("/api/leaderboard", response_model=list[LeaderboardEntry])
def get_leaderboard(store: Store = Depends(get_store)):
    """Top 10 users by experience."""
    return ledger.get_leaderboard(store)


# ── Quiz content ──────────────────────────────────────────────────────────────

@app.get("/api/questions/{language}")
def get_language_questions(language: str):
    questions = get_questions(language)
    if not questions:
        raise HTTPException(status_code=404, detail="Questions not found for this language")
    return questions


@app.get("/api/content-gaps")
def get_content_gaps():
    """Supported languages missing quiz content or a dashboard column."""
    return {
        "gaps": [
            {"language": gap.language, "missing": gap.missing}
            for gap in content_gaps(languages_with_questions())
        ]
    }
