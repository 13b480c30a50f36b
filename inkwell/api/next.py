# inkwell/api/next.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from inkwell import config
from inkwell.api.deps import get_cache, get_llm
from inkwell.llm.generate import get_next_suggestion
from inkwell.llm.text_utils import truncate_to_tail
from inkwell.memory.fingerprint import next_key
from inkwell.memory.session_store import SessionContext, load_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Next"])


class NextRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[str] = Field(default=None, alias="sessionId")
    last_paragraph: Optional[str] = Field(default=None, alias="lastParagraph")
    current_section: Optional[str] = Field(default=None, alias="currentSection")


@router.post("/next")
def next_section(
    req: Optional[NextRequest] = None,
    cache=Depends(get_cache),
    llm=Depends(get_llm),
):
    """
    Suggest an opening phrase and an angle for the next section.
    An expired session is NOT an error here: the prompt runs without context.
    """
    req = req or NextRequest()

    if not req.session_id:
        raise HTTPException(400, "missing required field: sessionId")
    if req.last_paragraph is None:
        raise HTTPException(400, "missing required field: lastParagraph")

    context = load_session(cache, req.session_id)
    if context is None:
        logger.info("[NEXT] session %s missing, using empty context", req.session_id)
        context = SessionContext.empty()

    paragraph = truncate_to_tail(req.last_paragraph)
    section = req.current_section or ""

    cache_key = next_key(req.session_id, paragraph, section)
    cached = cache.get(cache_key)
    if isinstance(cached, dict):
        return {
            "phrase": cached.get("phrase", ""),
            "angle": cached.get("angle", ""),
            "cached": True,
        }

    result = get_next_suggestion(llm, paragraph, context, section or None)
    payload = result.to_payload()
    cache.set(cache_key, payload, config.PREDICTION_TTL)

    return {**payload, "cached": False}
