"""HealthRisk Shared Utilities"""

from .hashing import (
    canonicalize,
    canonicalize_and_hash,
    verify_hash,
    fingerprint,
    VOLATILE_FIELDS,
)
from .disclaimer import build_disclaimer, DISCLAIMER_VERSION

__all__ = [
    "canonicalize",
    "canonicalize_and_hash",
    "verify_hash",
    "fingerprint",
    "VOLATILE_FIELDS",
    "build_disclaimer",
    "DISCLAIMER_VERSION",
]
