"""
XP and level rules — pure functions, no DB access.
"""
from enum import Enum

QUIZ_XP_PER_ANSWER = 10
DEFAULT_LESSON_XP = 20
TOTAL_LESSONS = 10  # display ceiling per language, not enforced


class Level(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


# (inclusive lower bound, level), highest first
LEVEL_THRESHOLDS: list[tuple[int, Level]] = [
    (600, Level.EXPERT),
    (300, Level.ADVANCED),
    (100, Level.INTERMEDIATE),
    (0,   Level.BEGINNER),
]


def quiz_xp(score: int) -> int:
    """XP for a quiz submission: 10 per correctly-answered item."""
    return score * QUIZ_XP_PER_ANSWER


def compute_level(experience: int) -> Level:
    for threshold, level in LEVEL_THRESHOLDS:
        if experience >= threshold:
            return level
    return Level.BEGINNER


def xp_to_next_level(experience: int) -> int | None:
    """Points still needed for the next level, or None once Expert."""
    next_threshold = None
    for threshold, _ in LEVEL_THRESHOLDS:
        if experience < threshold:
            next_threshold = threshold
    if next_threshold is None:
        return None
    return next_threshold - max(experience, 0)
