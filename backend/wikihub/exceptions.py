# backend/wikihub/exceptions.py
"""Error taxonomy for project operations.

Every error carries a numeric ``code`` that clients map to messages, so the
values must stay stable across releases.
"""

# Validation codes
PROJECT_NAME_LENGTH = 40201
PROJECT_DESCRIPTION_LENGTH = 40202
PROJECT_PASSWORD_LENGTH = 40203
PROJECT_OPEN_STATE = 40204

# Lookup codes
PROJECT_NOT_FOUND = 40206

# Server side
PERSISTENCE_FAILED = 500


class WikiError(Exception):
    """Base class for errors raised by wikihub services"""

    code: int = PERSISTENCE_FAILED
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: int | None = None):
        self.message = message or self.message
        self.code = code if code is not None else self.code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class ValidationError(WikiError):
    """Caller supplied data violates a field constraint"""

    code = PROJECT_NAME_LENGTH
    message = "Invalid project data"


class NotFoundError(WikiError):
    """Referenced project does not exist"""

    code = PROJECT_NOT_FOUND
    message = "Project not found"


class PersistenceError(WikiError):
    """A transactional write failed and was rolled back"""

    code = PERSISTENCE_FAILED
    message = "Failed to persist changes"


__all__ = [
    "WikiError",
    "ValidationError",
    "NotFoundError",
    "PersistenceError",
    "PROJECT_NAME_LENGTH",
    "PROJECT_DESCRIPTION_LENGTH",
    "PROJECT_PASSWORD_LENGTH",
    "PROJECT_OPEN_STATE",
    "PROJECT_NOT_FOUND",
    "PERSISTENCE_FAILED",
]
