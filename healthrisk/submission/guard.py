"""
HealthRisk Idempotency Guard
============================
The only component that touches the record store.

submit(user_key, content_hash, answers) -> SubmitResult

FLOW:
1. Validate answers (VALIDATION, nothing scored)
2. Dedup identity = explicit idempotency key, else canonical content hash
3. Lookup (user_key, identity); hit -> original session id, cached=True
4. Miss -> run the assessment, then atomically insert record + report
5. Insert lost to a concurrent duplicate -> CONFLICT

FAIL CLOSED: store timeouts and failures, and scoring exceptions, are
SERVER_ERROR. A store timeout is never read as "no duplicate exists".
"""

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional

from ..config import STORE_TIMEOUT_SECONDS
from ..shared.hashing import canonicalize_and_hash
from ..assessment.narrative import get_narrative_service
from ..assessment.pipeline import run_assessment
from .models import SubmissionError, SubmissionErrorCode, SubmissionRecord, SubmitResult
from .store import RecordStore, get_record_store

logger = logging.getLogger(__name__)

SCALAR_TYPES = (str, int, float, bool, type(None))
MAX_IDEMPOTENCY_KEY_LENGTH = 256


# ============================================
# VALIDATION
# ============================================

def validate_answers(answers: Any) -> Mapping[str, Any]:
    if answers is None:
        raise SubmissionError(SubmissionErrorCode.VALIDATION, "answers is required")
    if not isinstance(answers, Mapping):
        raise SubmissionError(SubmissionErrorCode.VALIDATION, "answers must be an object")

    for key, value in answers.items():
        if not isinstance(key, str):
            raise SubmissionError(SubmissionErrorCode.VALIDATION, f"answer key {key!r} is not a string")
        if not isinstance(value, SCALAR_TYPES):
            raise SubmissionError(
                SubmissionErrorCode.VALIDATION,
                f"answer '{key}' must be a string, number, boolean or null",
            )
    return answers


def validate_idempotency_key(key: Any) -> Optional[str]:
    if key is None:
        return None
    if not isinstance(key, str) or not key.strip():
        raise SubmissionError(SubmissionErrorCode.VALIDATION, "idempotencyKey must be a non-empty string")
    key = key.strip()
    if len(key) > MAX_IDEMPOTENCY_KEY_LENGTH:
        raise SubmissionError(
            SubmissionErrorCode.VALIDATION,
            f"idempotencyKey exceeds {MAX_IDEMPOTENCY_KEY_LENGTH} characters",
        )
    return key


# ============================================
# GUARD
# ============================================

class IdempotencyGuard:
    """Deduplicates submissions per (user_key, content_hash)."""

    def __init__(
        self,
        store: RecordStore,
        narrative_service=None,
        store_timeout: float = STORE_TIMEOUT_SECONDS,
    ):
        self.store = store
        self.narrative_service = narrative_service
        self.store_timeout = store_timeout

    async def _store_call(self, operation: str, awaitable):
        try:
            return await asyncio.wait_for(awaitable, timeout=self.store_timeout)
        except asyncio.TimeoutError:
            logger.error(f"[STORE] {operation} timed out after {self.store_timeout}s")
            raise SubmissionError(
                SubmissionErrorCode.SERVER_ERROR,
                f"Record store {operation} timed out, please retry",
            )
        except SubmissionError:
            raise
        except Exception as e:
            logger.error(f"[STORE] {operation} failed: {e}")
            raise SubmissionError(
                SubmissionErrorCode.SERVER_ERROR,
                f"Record store unavailable during {operation}, please retry",
            )

    async def submit(
        self,
        user_key: str,
        content_hash: Optional[str],
        answers: Any,
    ) -> SubmitResult:
        answers = validate_answers(answers)
        user_key = user_key or "anonymous"
        if content_hash is None:
            content_hash = canonicalize_and_hash(answers)

        existing = await self._store_call(
            "lookup", self.store.find_by_key_and_hash(user_key, content_hash)
        )
        if existing is not None:
            logger.info(f"[CACHED] user={user_key} hash={content_hash[:12]} session={existing.session_id}")
            return SubmitResult(session_id=existing.session_id, cached=True)

        try:
            report = await run_assessment(answers, self.narrative_service)
        except Exception as e:
            logger.exception(f"[SCORING] Assessment failed for user={user_key}: {e}")
            raise SubmissionError(SubmissionErrorCode.SERVER_ERROR, "Assessment could not be computed")

        record = SubmissionRecord(user_key=user_key, content_hash=content_hash)
        inserted = await self._store_call("insert", self.store.insert_if_absent(record, report))
        if not inserted:
            logger.warning(f"[CONFLICT] Concurrent duplicate for user={user_key} hash={content_hash[:12]}")
            raise SubmissionError(
                SubmissionErrorCode.CONFLICT,
                "An identical submission was stored concurrently; fetch it by key instead of resubmitting",
            )

        logger.info(f"[SUBMITTED] user={user_key} hash={content_hash[:12]} session={record.session_id}")
        return SubmitResult(session_id=record.session_id, cached=False)

    async def get_report(self, session_id: str) -> Dict[str, Any]:
        report = await self._store_call("report fetch", self.store.get_report(session_id))
        if report is None:
            raise SubmissionError(SubmissionErrorCode.NOT_FOUND, f"No report for session {session_id}")
        return report


_guard: Optional[IdempotencyGuard] = None


def get_guard() -> IdempotencyGuard:
    """Process-wide guard bound to the configured record store."""
    global _guard
    if _guard is None:
        _guard = IdempotencyGuard(
            store=get_record_store(),
            narrative_service=get_narrative_service(),
        )
    return _guard
