"""HealthRisk Submission Layer - idempotent submit + report storage."""

from .models import (
    SubmissionError,
    SubmissionErrorCode,
    SubmissionRecord,
    SubmitResult,
)
from .store import (
    RecordStore,
    InMemoryRecordStore,
    PostgresRecordStore,
    get_record_store,
    close_record_store,
)
from .guard import IdempotencyGuard, get_guard, validate_answers, validate_idempotency_key

__all__ = [
    "SubmissionError",
    "SubmissionErrorCode",
    "SubmissionRecord",
    "SubmitResult",
    "RecordStore",
    "InMemoryRecordStore",
    "PostgresRecordStore",
    "get_record_store",
    "close_record_store",
    "IdempotencyGuard",
    "get_guard",
    "validate_answers",
    "validate_idempotency_key",
]
