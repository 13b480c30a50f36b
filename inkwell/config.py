# inkwell/config.py

"""
Runtime configuration for the Inkwell backend.

Rules:
- Values come from the environment (.env is loaded by api/main.py)
- No secrets hardcoded
- No I/O here
"""

import os


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ============================================================
# TTL CONFIG (SECONDS)
# ============================================================

SESSION_TTL = 60 * 60 * 24   # 24 hours
PREDICTION_TTL = 60 * 5      # 5 minutes

# ============================================================
# TEXT WINDOW
# ============================================================

MAX_PRECEDING_TEXT = 500

# Placeholder until the model exposes a real score
SUGGESTION_CONFIDENCE = 0.85

# ============================================================
# LLM PROVIDER
# ============================================================

LLM_PROVIDER_ENV = "INKWELL_LLM_PROVIDER"
LLM_MODEL_ENV = "INKWELL_LLM_MODEL"

LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "15"))

# ============================================================
# CACHE BACKEND
# ============================================================

CACHE_BACKEND = os.getenv("CACHE_BACKEND", "memory").strip().lower()
CACHE_MAX_ENTRIES = _int_env("CACHE_MAX_ENTRIES", 10000)

REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = _int_env("REDIS_PORT", 6379)
REDIS_DB = _int_env("REDIS_DB", 0)

# ============================================================
# POST STORE
# ============================================================

POSTS_DB_URL = os.getenv(
    "POSTS_DB_URL",
    "postgresql://postgres:1@localhost:5432/inkwell",
)

# ============================================================
# HTTP
# ============================================================

CORS_ORIGINS = [
    o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
]

HOST = os.getenv("HOST", "0.0.0.0")
PORT = _int_env("PORT", 3000)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
