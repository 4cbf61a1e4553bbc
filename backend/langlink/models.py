import re
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .engine.languages import DEFAULT_LEARNING_LANGUAGE
from .engine.levels import DEFAULT_LESSON_XP, TOTAL_LESSONS, Level

UUID4_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
)
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _validate_uuid4(v: str) -> str:
    if not UUID4_RE.match(v.lower()):
        raise ValueError("must be a valid UUID v4")
    return v.lower()


class _UserRef(BaseModel):
    user_id: str
    model_config = {"extra": "ignore"}

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v):
        return _validate_uuid4(v)


# ── Requests ──────────────────────────────────────────────────────────────────

class UserRegister(BaseModel):
    name: str = Field(min_length=1, max_length=60)
    email: str = Field(max_length=254)
    learning_language: str = DEFAULT_LEARNING_LANGUAGE

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        if not EMAIL_RE.match(v):
            raise ValueError("must be a valid email address")
        return v.lower()


class QuizSubmission(_UserRef):
    language: str
    score: int = Field(ge=0)


class LessonCompletion(_UserRef):
    gained_xp: int = Field(default=DEFAULT_LESSON_XP, ge=0)
    language: Optional[str] = None


class StreakPing(_UserRef):
    pass


# ── Responses ─────────────────────────────────────────────────────────────────

class Registered(BaseModel):
    user_id: str
    level: Level = Level.BEGINNER


class QuizResult(BaseModel):
    experience: int
    level: Level
    lessons_completed: int


class LessonResult(BaseModel):
    experience: int
    level: Level
    streak: int
    # Set only when the per-language increment ran and succeeded
    lessons_completed: Optional[int] = None
    progress_error: Optional[str] = None


class StreakResult(BaseModel):
    streak: int
    last_active_date: date


class ProgressView(BaseModel):
    experience: int
    level: Level
    lessons_completed: int
    total_lessons: int = TOTAL_LESSONS


class Dashboard(BaseModel):
    user_id: str
    name: str
    email: str
    learning_language: str
    experience: int
    level: Level
    xp_to_next_level: Optional[int]
    streak: int
    last_active_date: Optional[date]
    progress: dict[str, int]


class LeaderboardEntry(BaseModel):
    name: str
    learning_language: Optional[str]
    score: int
    experience: int
    level: Level
