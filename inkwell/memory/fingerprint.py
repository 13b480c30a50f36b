# inkwell/memory/fingerprint.py

import hashlib

FINGERPRINT_LENGTH = 16


def fingerprint(*parts: str) -> str:
    """
    Short, order-sensitive digest of request-identifying strings.
    Advisory cache keys only; 16 hex chars is plenty.
    """
    joined = "|".join(parts)
    return hashlib.sha256(joined.encode("utf-8")).hexdigest()[:FINGERPRINT_LENGTH]


# ------------------------------------------------------------
# KEY HELPERS
# ------------------------------------------------------------

def session_key(session_id: str) -> str:
    return f"session:{session_id}"


def predict_key(mode: str, session_id: str, text: str) -> str:
    return f"predict:{mode}:{fingerprint(session_id, text)}"


def next_key(session_id: str, paragraph: str, section: str) -> str:
    return f"next:{fingerprint(session_id, paragraph + section)}"
