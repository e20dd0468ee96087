"""
HealthRisk Runtime Configuration
All settings are read once from the environment at import time.
"""

import os


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _split_csv(raw: str):
    return [item.strip() for item in (raw or "").split(",") if item.strip()]


# ============================================
# VERSIONS
# ============================================

API_VERSION = "1.2.0"
RULESET_VERSION = "ruleset_v1.0"

# ============================================
# RECORD STORE
# ============================================

# Unset = in-memory store (single process, development only)
DATABASE_URL = os.getenv("DATABASE_URL")
DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", "1"))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", "5"))
STORE_TIMEOUT_SECONDS = _float_env("STORE_TIMEOUT_SECONDS", 5.0)

# ============================================
# OPTIONAL NARRATIVE SERVICE
# ============================================

# Unset = template narrative only
NARRATIVE_SERVICE_URL = os.getenv("NARRATIVE_SERVICE_URL", "").strip()
NARRATIVE_SERVICE_TOKEN = os.getenv("NARRATIVE_SERVICE_TOKEN", "").strip()
NARRATIVE_TIMEOUT_SECONDS = _float_env("NARRATIVE_TIMEOUT_SECONDS", 8.0)

# ============================================
# HTTP / LOGGING
# ============================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ALLOW_ORIGINS = _split_csv(os.getenv("CORS_ALLOW_ORIGINS", "*"))
