"""
Static quiz content, served as-is per language.
"""
import json
from functools import lru_cache
from pathlib import Path

QUESTIONS_PATH = Path(__file__).parent / "data" / "questions.json"


@lru_cache(maxsize=1)
def load_question_bank(path: Path = QUESTIONS_PATH) -> dict[str, list[dict]]:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def get_questions(language: str) -> list[dict] | None:
    return load_question_bank().get(language)


def languages_with_questions() -> list[str]:
    return [lang for lang, questions in load_question_bank().items() if questions]
