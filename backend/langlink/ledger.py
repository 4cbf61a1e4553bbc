"""
Progress ledger and streak operations against a Store.

Every read-modify-write runs under the store's per-record lock. complete_lesson
writes in two steps: experience/level/streak first, then the optional
per-language counter, each with its own lock and its own failure reporting.
"""
import logging
import uuid
from datetime import date, datetime, timezone

from .db import Store
from .engine.languages import (
    DASHBOARD_LANGUAGES, DEFAULT_LEARNING_LANGUAGE, LANGUAGES, progress_column,
)
from .engine.levels import (
    DEFAULT_LESSON_XP, Level, compute_level, quiz_xp, xp_to_next_level,
)
from .engine.streak import (
    advance_by_calendar_date, advance_by_day_difference, calendar_day,
    parse_activity_date,
)
from .errors import AlreadyExists, InvalidInput, NotFound, StoreFailure, UnsupportedLanguage
from .models import (
    Dashboard, LeaderboardEntry, LessonResult, ProgressView, QuizResult,
    Registered, StreakResult,
)

logger = logging.getLogger(__name__)

LEADERBOARD_SIZE = 10
LEADERBOARD_COLUMNS = "name, learning_language, score, experience, level"


def utc_today() -> date:
    """The single clock for "today" in every streak path."""
    return datetime.now(timezone.utc).date()


def _last_active(user: dict):
    try:
        return parse_activity_date(user.get("last_active_date"))
    except ValueError as e:
        raise StoreFailure(f"Stored last_active_date is malformed: {user.get('last_active_date')!r}") from e


def _require_user(store: Store, user_id: str, columns: str = "*") -> dict:
    if not user_id:
        raise InvalidInput("user_id is required")
    user = store.fetch_user(user_id, columns)
    if not user:
        raise NotFound("User not found")
    return user


def _require_column(language: str | None) -> str:
    column = progress_column(language)
    if column is None:
        raise UnsupportedLanguage(language)
    return column


def _require_non_negative(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidInput(f"{name} must be a non-negative integer")


# ── Registration ──────────────────────────────────────────────────────────────

def register_user(
    store: Store,
    name: str,
    email: str,
    learning_language: str = DEFAULT_LEARNING_LANGUAGE,
) -> Registered:
    _require_column(learning_language)
    if store.find_user_by_email(email):
        raise AlreadyExists("User already exists")

    user_id = str(uuid.uuid4())
    row = {
        "user_id": user_id,
        "name": name,
        "email": email,
        "learning_language": learning_language,
        "score": 0,
        "experience": 0,
        "level": Level.BEGINNER.value,
        "streak": 0,
        "last_active_date": None,
    }
    row.update({lang.progress_column: 0 for lang in LANGUAGES})
    store.insert_user(row)
    logger.info("User registered: %s... (%s)", user_id[:8], learning_language)
    return Registered(user_id=user_id)


# ── Progress ledger ───────────────────────────────────────────────────────────

def submit_quiz_result(store: Store, user_id: str, language: str, score: int) -> QuizResult:
    """Award score × 10 XP, bump the language counter, re-derive the level.

    Experience, level and the counter are written in one update. Not idempotent.
    """
    column = _require_column(language)
    _require_non_negative("score", score)

    with store.record_lock(user_id):
        user = _require_user(store, user_id, f"user_id, experience, {column}")
        experience = (user.get("experience") or 0) + quiz_xp(score)
        lessons_completed = (user.get(column) or 0) + 1
        level = compute_level(experience)
        store.update_user(user_id, {
            "experience": experience,
            "level": level.value,
            column: lessons_completed,
        })

    logger.info("Quiz %s for %s...: +%d XP -> %d (%s)",
                language, user_id[:8], quiz_xp(score), experience, level.value)
    return QuizResult(experience=experience, level=level, lessons_completed=lessons_completed)


def complete_lesson(
    store: Store,
    user_id: str,
    gained_xp: int = DEFAULT_LESSON_XP,
    language: str | None = None,
    today: date | None = None,
) -> LessonResult:
    _require_non_negative("gained_xp", gained_xp)
    today = today or utc_today()

    # Step 1: experience, level and streak
    with store.record_lock(user_id):
        user = _require_user(store, user_id, "user_id, experience, streak, last_active_date")
        experience = (user.get("experience") or 0) + gained_xp
        level = compute_level(experience)
        streak = advance_by_day_difference(
            _last_active(user),
            user.get("streak") or 0,
            today,
        )
        store.update_user(user_id, {
            "experience": experience,
            "level": level.value,
            "streak": streak,
            "last_active_date": today.isoformat(),
        })

    result = LessonResult(experience=experience, level=level, streak=streak)
    logger.info("Lesson for %s...: +%d XP -> %d (%s), streak %d",
                user_id[:8], gained_xp, experience, level.value, streak)

    # Step 2: optional per-language counter, not atomic with step 1
    if language is None:
        return result
    column = progress_column(language)
    if column is None:
        logger.info("Lesson for %s...: unsupported language %r, counter not updated",
                    user_id[:8], language)
        return result
    try:
        result.lessons_completed = _increment_lesson_progress(store, user_id, column)
    except StoreFailure as e:
        logger.warning("Lesson counter %s for %s... not updated: %s", column, user_id[:8], e)
        result.progress_error = e.message
    return result


def _increment_lesson_progress(store: Store, user_id: str, column: str) -> int:
    with store.record_lock(user_id):
        user = store.fetch_user(user_id, f"user_id, {column}")
        if not user:
            raise StoreFailure("User record disappeared before the lesson counter update")
        value = (user.get(column) or 0) + 1
        store.update_user(user_id, {column: value})
    return value


def get_progress(store: Store, user_id: str, language: str) -> ProgressView:
    column = _require_column(language)
    user = _require_user(store, user_id, f"experience, level, {column}")
    experience = user.get("experience") or 0
    return ProgressView(
        experience=experience,
        level=compute_level(experience),
        lessons_completed=user.get(column) or 0,
    )


def get_dashboard(store: Store, user_id: str) -> Dashboard:
    user = _require_user(store, user_id)
    experience = user.get("experience") or 0
    last_active = _last_active(user)
    return Dashboard(
        user_id=user_id,
        name=user.get("name") or "",
        email=user.get("email") or "",
        learning_language=user.get("learning_language") or DEFAULT_LEARNING_LANGUAGE,
        experience=experience,
        level=compute_level(experience),
        xp_to_next_level=xp_to_next_level(experience),
        streak=user.get("streak") or 0,
        last_active_date=calendar_day(last_active) if last_active else None,
        progress={lang.name: user.get(lang.progress_column) or 0 for lang in DASHBOARD_LANGUAGES},
    )


def get_leaderboard(store: Store) -> list[LeaderboardEntry]:
    rows = store.top_by_experience(LEADERBOARD_COLUMNS, LEADERBOARD_SIZE)
    return [
        LeaderboardEntry(
            name=row.get("name") or "",
            learning_language=row.get("learning_language"),
            score=row.get("score") or 0,
            experience=row.get("experience") or 0,
            level=row.get("level") or compute_level(row.get("experience") or 0),
        )
        for row in rows[:LEADERBOARD_SIZE]
    ]


# ── Streak tracker ────────────────────────────────────────────────────────────

def advance_streak(store: Store, user_id: str, reference_date: date | None = None) -> StreakResult:
    """Explicit streak ping, using calendar-date comparison."""
    reference_date = reference_date or utc_today()

    with store.record_lock(user_id):
        user = _require_user(store, user_id, "user_id, streak, last_active_date")
        streak = advance_by_calendar_date(
            _last_active(user),
            user.get("streak") or 0,
            reference_date,
        )
        store.update_user(user_id, {
            "streak": streak,
            "last_active_date": calendar_day(reference_date).isoformat(),
        })

    logger.info("Streak ping for %s...: %d", user_id[:8], streak)
    return StreakResult(streak=streak, last_active_date=calendar_day(reference_date))
