# inkwell/api/session.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from inkwell.api.deps import get_cache, get_llm
from inkwell.llm.generate import derive_thesis
from inkwell.memory.session_store import SessionContext, new_session_id, save_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Session"])


class SessionRequest(BaseModel):
    outline: Optional[str] = None
    style: Optional[str] = None
    tone: Optional[str] = None


@router.post("/session", status_code=201)
def create_session(
    req: Optional[SessionRequest] = None,
    cache=Depends(get_cache),
    llm=Depends(get_llm),
):
    """
    Start a writing session.
    The thesis is derived here, once; a failed derivation leaves it empty.
    """
    req = req or SessionRequest()

    outline = (req.outline or "").strip()
    if not outline:
        raise HTTPException(400, "missing required field: outline")

    style = req.style or ""
    tone = req.tone or ""

    thesis = derive_thesis(llm, outline, style, tone)
    if not thesis.ok:
        logger.warning("[SESSION] thesis unavailable: %s", thesis.failure)

    session_id = new_session_id()
    saved = save_session(
        cache,
        session_id,
        SessionContext(outline=outline, style=style, tone=tone, thesis=thesis.text),
    )
    # an unsaved id would 404 on every later request
    if not saved:
        logger.error("[SESSION] could not store session %s", session_id)
        raise HTTPException(503, "session store unavailable")

    return {"sessionId": session_id}
