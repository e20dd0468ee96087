"""
HealthRisk Record Store
=======================
Persistence for SubmissionRecords and their reports.

CONTRACT:
- find_by_key_and_hash(user_key, content_hash) -> SubmissionRecord | None
- insert_if_absent(record, report) -> bool
    Atomically stores record + report. False when a record with the same
    (user_key, content_hash) already exists; nothing is written in that case.
- get_report(session_id) -> report dict | None

Uniqueness is enforced by the backend (UNIQUE constraint / dict key under a
lock), never by callers.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

import asyncpg
from asyncpg import Pool

from ..config import DATABASE_URL, DB_POOL_MAX_SIZE, DB_POOL_MIN_SIZE
from .models import SubmissionRecord

logger = logging.getLogger(__name__)


class RecordStore(ABC):
    backend: str = "abstract"

    @abstractmethod
    async def find_by_key_and_hash(self, user_key: str, content_hash: str) -> Optional[SubmissionRecord]:
        ...

    @abstractmethod
    async def insert_if_absent(self, record: SubmissionRecord, report: Dict[str, Any]) -> bool:
        ...

    @abstractmethod
    async def get_report(self, session_id: str) -> Optional[Dict[str, Any]]:
        ...

    async def close(self) -> None:
        return None


# =============================================================================
# IN-MEMORY (development / tests)
# =============================================================================

class InMemoryRecordStore(RecordStore):
    """Single-process store. Not shared across workers."""

    backend = "memory"

    def __init__(self):
        self._records: Dict[Tuple[str, str], SubmissionRecord] = {}
        self._reports: Dict[str, Dict[str, Any]] = {}
        self._lock = asyncio.Lock()

    async def find_by_key_and_hash(self, user_key: str, content_hash: str) -> Optional[SubmissionRecord]:
        return self._records.get((user_key, content_hash))

    async def insert_if_absent(self, record: SubmissionRecord, report: Dict[str, Any]) -> bool:
        key = (record.user_key, record.content_hash)
        async with self._lock:
            if key in self._records:
                return False
            self._records[key] = record
            # Stored as JSON text so callers cannot mutate the persisted copy
            self._reports[record.session_id] = json.dumps(report)
        return True

    async def get_report(self, session_id: str) -> Optional[Dict[str, Any]]:
        raw = self._reports.get(session_id)
        return json.loads(raw) if raw is not None else None

    def __len__(self) -> int:
        return len(self._records)


# =============================================================================
# POSTGRES
# =============================================================================

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS assessment_submissions (
    session_id    TEXT PRIMARY KEY,
    user_key      TEXT NOT NULL,
    content_hash  TEXT NOT NULL,
    created_at    TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    CONSTRAINT uq_assessment_user_content UNIQUE (user_key, content_hash)
);

CREATE TABLE IF NOT EXISTS assessment_reports (
    session_id    TEXT PRIMARY KEY REFERENCES assessment_submissions(session_id),
    report_json   JSONB NOT NULL,
    created_at    TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
"""


class PostgresRecordStore(RecordStore):
    """asyncpg-backed store relying on UNIQUE (user_key, content_hash)."""

    backend = "postgres"

    def __init__(self, dsn: str = None):
        self.dsn = dsn or DATABASE_URL
        self.pool: Optional[Pool] = None

    async def initialize(self):
        """Create the pool and ensure tables exist."""
        if self.pool is None:
            self.pool = await asyncpg.create_pool(self.dsn, min_size=DB_POOL_MIN_SIZE, max_size=DB_POOL_MAX_SIZE)
            await self.ensure_schema()

    async def ensure_schema(self):
        async with self.pool.acquire() as conn:
            await conn.execute(SCHEMA_SQL)

    async def find_by_key_and_hash(self, user_key: str, content_hash: str) -> Optional[SubmissionRecord]:
        await self.initialize()
        query = """
        SELECT session_id, user_key, content_hash, created_at
        FROM assessment_submissions
        WHERE user_key = $1 AND content_hash = $2
        """
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, user_key, content_hash)

        if not row:
            return None

        return SubmissionRecord(
            user_key=row["user_key"],
            content_hash=row["content_hash"],
            session_id=row["session_id"],
            created_at=row["created_at"],
        )

    async def insert_if_absent(self, record: SubmissionRecord, report: Dict[str, Any]) -> bool:
        await self.initialize()
        insert_record = """
        INSERT INTO assessment_submissions (session_id, user_key, content_hash, created_at)
        VALUES ($1, $2, $3, $4)
        ON CONFLICT (user_key, content_hash) DO NOTHING
        RETURNING session_id
        """
        insert_report = """
        INSERT INTO assessment_reports (session_id, report_json)
        VALUES ($1, $2::jsonb)
        """
        async with self.pool.acquire() as conn:
            async with conn.transaction():
                inserted = await conn.fetchval(
                    insert_record,
                    record.session_id,
                    record.user_key,
                    record.content_hash,
                    record.created_at,
                )
                if inserted is None:
                    return False
                await conn.execute(insert_report, record.session_id, json.dumps(report))
        return True

    async def get_report(self, session_id: str) -> Optional[Dict[str, Any]]:
        await self.initialize()
        async with self.pool.acquire() as conn:
            raw = await conn.fetchval(
                "SELECT report_json FROM assessment_reports WHERE session_id = $1",
                session_id,
            )
        if raw is None:
            return None
        return json.loads(raw) if isinstance(raw, str) else raw

    async def close(self):
        if self.pool:
            await self.pool.close()
            self.pool = None


# =============================================================================
# SINGLETON
# =============================================================================

_store: Optional[RecordStore] = None


def get_record_store() -> RecordStore:
    """Postgres when DATABASE_URL is set, in-memory otherwise."""
    global _store
    if _store is None:
        if DATABASE_URL:
            _store = PostgresRecordStore(DATABASE_URL)
        else:
            logger.warning("[STORE] DATABASE_URL not set, using in-memory record store")
            _store = InMemoryRecordStore()
    return _store


async def close_record_store():
    global _store
    if _store is not None:
        await _store.close()
        _store = None
