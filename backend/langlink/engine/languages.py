"""
Supported languages, their progress columns and the content-completeness check.
"""
from dataclasses import dataclass, field
from typing import Iterable


@dataclass(frozen=True)
class Language:
    name: str
    progress_column: str     # which users column counts completed lessons
    on_dashboard: bool = True


LANGUAGES: list[Language] = [
    Language("Spanish",    "progress_spanish"),
    Language("French",     "progress_french"),
    Language("Hindi",      "progress_hindi"),
    Language("Kannada",    "progress_kannada"),
    Language("Tamil",      "progress_tamil"),
    Language("Telugu",     "progress_telugu"),
    Language("Marathi",    "progress_marathi"),
    Language("Malayalam",  "progress_malayalam"),
    Language("Bhojpuri",   "progress_bhojpuri"),
    Language("Rajasthani", "progress_rajasthani"),
    Language("Punjabi",    "progress_punjabi"),
    Language("Kashmiri",   "progress_kashmiri"),
    Language("Urdu",       "progress_urdu"),
    # Accepted for progress tracking but has no quiz content and is not
    # projected on the dashboard. Reported by content_gaps().
    Language("Korean",     "progress_korean", on_dashboard=False),
]

LANGUAGE_BY_NAME: dict[str, Language] = {lang.name: lang for lang in LANGUAGES}
SUPPORTED_LANGUAGES: frozenset[str] = frozenset(LANGUAGE_BY_NAME)
DASHBOARD_LANGUAGES: list[Language] = [lang for lang in LANGUAGES if lang.on_dashboard]
DEFAULT_LEARNING_LANGUAGE = "Spanish"


def progress_column(language: str | None) -> str | None:
    """Return the progress column for a language, or None if unsupported."""
    lang = LANGUAGE_BY_NAME.get(language or "")
    return lang.progress_column if lang else None


def is_supported(language: str | None) -> bool:
    return progress_column(language) is not None


@dataclass
class ContentGap:
    language: str
    missing: list[str] = field(default_factory=list)


def content_gaps(languages_with_questions: Iterable[str]) -> list[ContentGap]:
    """
    List supported languages that lack quiz content or a dashboard column,
    plus languages that have quiz content but are not supported at all.
    """
    with_questions = set(languages_with_questions)
    gaps: list[ContentGap] = []
    for lang in LANGUAGES:
        missing = []
        if lang.name not in with_questions:
            missing.append("quiz_content")
        if not lang.on_dashboard:
            missing.append("dashboard_column")
        if missing:
            gaps.append(ContentGap(lang.name, missing))
    for name in sorted(with_questions - SUPPORTED_LANGUAGES):
        gaps.append(ContentGap(name, ["progress_column"]))
    return gaps
