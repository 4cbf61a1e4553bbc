"""
Failures surfaced to callers. Each carries the HTTP status the API maps it to.
"""


class LangLinkError(Exception):
    status_code = 500
    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(LangLinkError):
    status_code = 404
    kind = "not_found"


class UnsupportedLanguage(LangLinkError):
    status_code = 400
    kind = "unsupported_language"

    def __init__(self, language: str | None):
        super().__init__(f"Unsupported language: {language!r}")
        self.language = language


class InvalidInput(LangLinkError):
    status_code = 422
    kind = "invalid_input"


class AlreadyExists(LangLinkError):
    status_code = 409
    kind = "already_exists"


class StoreFailure(LangLinkError):
    status_code = 503
    kind = "store_failure"
