"""
HealthRisk Canonical Hashing Layer
Single source of truth for submission content hashes.

Serialization: sorted keys, no whitespace, UTF-8, non-ASCII left unescaped.
Unanswered fields (None or blank strings) are dropped first, the same way
normalization treats them, so they never change a submission's identity.
"""

import hashlib
import json
from typing import Any, Dict, Mapping

# Fields excluded from hashing (derived by the engine or volatile per request)
VOLATILE_FIELDS = frozenset([
    "bmi",
    "obesity",
    "submitted_at",
    "timestamp",
    "created_at",
    "session_id",
    "_metadata",
])


def _is_unanswered(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def canonicalize(answers: Mapping[str, Any], exclude_volatile: bool = True) -> str:
    """
    Convert an answer mapping to its canonical JSON string.
    Deterministic: field order never changes the output.
    """
    cleaned: Dict[str, Any] = {
        k: v
        for k, v in sorted(answers.items())
        if not (exclude_volatile and k in VOLATILE_FIELDS) and not _is_unanswered(v)
    }
    return json.dumps(cleaned, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def canonicalize_and_hash(answers: Mapping[str, Any], exclude_volatile: bool = True) -> str:
    """
    THE content hash for submissions.
    Returns: 64-char lowercase SHA-256 hex digest.
    """
    canonical = canonicalize(answers, exclude_volatile)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def verify_hash(answers: Mapping[str, Any], expected_hash: str) -> bool:
    """Verify answers match an expected content hash."""
    return canonicalize_and_hash(answers) == expected_hash


def fingerprint(*parts: str) -> str:
    """
    Stable short key from request context parts (session id, client address,
    user agent). Used for anonymous callers without an explicit user id.
    """
    joined = "|".join(p for p in parts if p)
    return "fp_" + hashlib.sha256(joined.encode("utf-8")).hexdigest()[:32]
