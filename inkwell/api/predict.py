# inkwell/api/predict.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from inkwell import config
from inkwell.api.deps import get_cache, get_llm
from inkwell.llm.generate import get_bridge_suggestion, get_word_suggestion
from inkwell.llm.text_utils import truncate_to_tail
from inkwell.llm.writing_stage import (
    MODES,
    POSITIONS,
    STAGES,
    classify_position,
    classify_stage,
)
from inkwell.memory.fingerprint import predict_key
from inkwell.memory.session_store import load_session

router = APIRouter(tags=["Predict"])


# ================================
# REQUEST MODEL
# ================================

class PredictRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[str] = Field(default=None, alias="sessionId")
    mode: Optional[str] = None
    preceding_text: Optional[str] = Field(default=None, alias="precedingText")
    position: Optional[str] = None
    stage: Optional[str] = None


REQUIRED_FIELDS = (
    ("session_id", "sessionId"),
    ("mode", "mode"),
    ("preceding_text", "precedingText"),
)


def _response(mode: str, suggestion: str, cached: bool) -> dict:
    return {
        "mode": mode,
        "suggestion": suggestion,
        "confidence": config.SUGGESTION_CONFIDENCE,
        "cached": cached,
    }


def _validate(req: PredictRequest) -> None:
    for attr, name in REQUIRED_FIELDS:
        if getattr(req, attr) is None:
            raise HTTPException(400, f"missing required field: {name}")

    if req.mode not in MODES:
        raise HTTPException(400, "mode must be word or bridge")

    if req.position is not None and req.position not in POSITIONS:
        raise HTTPException(400, "position must be opening, middle or closing")

    if req.stage is not None and req.stage not in STAGES:
        raise HTTPException(400, "stage must be start, establish or continue")


# ================================
# PREDICT ENDPOINT
# ================================

@router.post("/predict")
def predict(
    req: Optional[PredictRequest] = None,
    cache=Depends(get_cache),
    llm=Depends(get_llm),
):
    req = req or PredictRequest()
    _validate(req)

    mode = req.mode
    if not req.preceding_text:
        return _response(mode, "", cached=False)

    # Bridge mode needs the session; word mode never does
    context = None
    if mode == "bridge":
        context = load_session(cache, req.session_id)
        if context is None:
            raise HTTPException(404, "Session not found or expired")

    text = truncate_to_tail(req.preceding_text)
    cache_key = predict_key(mode, req.session_id, text)

    hit = cache.get(cache_key)
    if hit is not None:
        return _response(mode, hit, cached=True)

    if mode == "word":
        result = get_word_suggestion(llm, text)
    else:
        stage = req.stage or classify_stage(req.preceding_text)
        position = req.position or classify_position(req.preceding_text)
        result = get_bridge_suggestion(llm, text, context, stage=stage, position=position)

    # Failures are cached too: an empty suggestion replays until the TTL
    cache.set(cache_key, result.text, config.PREDICTION_TTL)

    return _response(mode, result.text, cached=False)
