# inkwell/memory/session_store.py

"""
Writing-session context, kept in the shared cache.

GUARANTEES:
- Sessions are immutable once created
- Expiry is passive (detected on the next lookup)
- thesis is always a string ("" when unavailable)
"""

import uuid
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from inkwell import config
from inkwell.memory.fingerprint import session_key


@dataclass(frozen=True)
class SessionContext:
    outline: str
    style: str = ""
    tone: str = ""
    thesis: str = ""

    @classmethod
    def empty(cls) -> "SessionContext":
        return cls(outline="")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionContext":
        return cls(
            outline=str(data.get("outline") or ""),
            style=str(data.get("style") or ""),
            tone=str(data.get("tone") or ""),
            thesis=str(data.get("thesis") or ""),
        )

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def new_session_id() -> str:
    return str(uuid.uuid4())


def save_session(cache, session_id: str, context: SessionContext) -> bool:
    """
    False when the store did not take the write (e.g. Redis down).
    """
    return cache.set(session_key(session_id), context.to_dict(), config.SESSION_TTL)


def load_session(cache, session_id: str) -> Optional[SessionContext]:
    if not session_id:
        return None

    data = cache.get(session_key(session_id))
    if not isinstance(data, dict):
        return None

    return SessionContext.from_dict(data)
