from langlink.content import QUESTIONS_PATH, get_questions, languages_with_questions
from langlink.engine.languages import (
    LANGUAGES, SUPPORTED_LANGUAGES, DASHBOARD_LANGUAGES,
    content_gaps, is_supported, progress_column,
)
from scripts.check_content import main as check_content


class TestLanguageTable:
    def test_fourteen_supported_languages(self):
        assert len(LANGUAGES) == 14
        assert SUPPORTED_LANGUAGES == {
            "Spanish", "French", "Hindi", "Kannada", "Tamil", "Telugu", "Marathi",
            "Malayalam", "Bhojpuri", "Rajasthani", "Punjabi", "Kashmiri", "Urdu", "Korean",
        }

    def test_progress_columns(self):
        assert progress_column("Spanish") == "progress_spanish"
        assert progress_column("Korean") == "progress_korean"

    def test_unsupported_has_no_column(self):
        assert progress_column("Klingon") is None
        assert progress_column("spanish") is None
        assert progress_column(None) is None
        assert not is_supported("German")

    def test_korean_not_on_dashboard(self):
        names = [lang.name for lang in DASHBOARD_LANGUAGES]
        assert "Korean" not in names
        assert len(names) == 13


class TestContentGaps:
    def test_korean_reported_with_shipped_content(self):
        gaps = content_gaps(languages_with_questions())
        assert [(g.language, g.missing) for g in gaps] == [
            ("Korean", ["quiz_content", "dashboard_column"]),
        ]

    def test_missing_content_and_unknown_language(self):
        gaps = {g.language: g.missing for g in content_gaps(["Spanish", "German"])}
        assert gaps["French"] == ["quiz_content"]
        assert gaps["German"] == ["progress_column"]
        assert "Spanish" not in gaps


class TestQuestions:
    def test_question_bank_ships_as_package_data(self):
        assert QUESTIONS_PATH.parent.name == "data"
        assert QUESTIONS_PATH.is_file()

    def test_spanish_questions(self):
        questions = get_questions("Spanish")
        assert len(questions) == 4
        assert questions[0]["answer"] == "Manzana"
        assert {"question", "options", "answer", "hint"} <= set(questions[0])

    def test_korean_has_no_questions(self):
        assert get_questions("Korean") is None


class TestCheckContentScript:
    def test_reports_korean(self, capsys):
        assert check_content([]) == 0
        out = capsys.readouterr().out
        assert "Korean" in out
        assert "quiz_content" in out

    def test_strict_fails_on_gap(self):
        assert check_content(["--strict"]) == 1
