"""
HealthRisk Submission Models
Records, results and error codes for idempotent submissions.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


# ============================================
# ERROR CODES
# ============================================

class SubmissionErrorCode(Enum):
    VALIDATION = "VALIDATION"
    CONFLICT = "CONFLICT"
    SERVER_ERROR = "SERVER_ERROR"
    NOT_FOUND = "NOT_FOUND"


DEFAULT_HTTP_CODES = {
    SubmissionErrorCode.VALIDATION: 400,
    SubmissionErrorCode.CONFLICT: 409,
    SubmissionErrorCode.SERVER_ERROR: 500,
    SubmissionErrorCode.NOT_FOUND: 404,
}


class SubmissionError(Exception):
    """Exception for submission failures. Rendered as {ok: false, code, message}."""

    def __init__(self, error_code: SubmissionErrorCode, message: str, http_code: int = None):
        self.error_code = error_code
        self.message = message
        self.http_code = http_code or DEFAULT_HTTP_CODES[error_code]
        super().__init__(f"{error_code.value}: {message}")

    @property
    def retryable(self) -> bool:
        return self.error_code in (SubmissionErrorCode.CONFLICT, SubmissionErrorCode.SERVER_ERROR)

    def to_dict(self):
        return {"ok": False, "code": self.error_code.value, "message": self.message}


# ============================================
# RECORDS
# ============================================

def new_session_id() -> str:
    return f"sess_{uuid.uuid4().hex}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SubmissionRecord:
    """One accepted submission. At most one per (user_key, content_hash)."""
    user_key: str
    content_hash: str
    session_id: str = field(default_factory=new_session_id)
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class SubmitResult:
    session_id: str
    cached: bool

    def to_dict(self):
        return {"ok": True, "session_id": self.session_id, "cached": self.cached}
