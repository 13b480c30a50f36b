# inkwell/llm/net_models.py

"""
Registry for the external generative backends.

Rules:
- No API calls here
- No secrets hardcoded (keys come from the environment)
"""

import os
from typing import Dict, Literal, Optional

from inkwell.config import LLM_MODEL_ENV, LLM_PROVIDER_ENV

# ============================================================
# TYPES
# ============================================================

NetProvider = Literal["anthropic", "groq"]

# ============================================================
# MODEL REGISTRY
# ============================================================

NET_MODELS: Dict[str, str] = {
    "anthropic": "claude-haiku-4-5-20251001",
    "groq": "llama-3.1-8b-instant",
}

NET_ENDPOINTS: Dict[str, str] = {
    "anthropic": "https://api.anthropic.com/v1/messages",
    "groq": "https://api.groq.com/openai/v1/chat/completions",
}

NET_KEY_ENV: Dict[str, str] = {
    "anthropic": "ANTHROPIC_API_KEY",
    "groq": "GROQ_API_KEY",
}

DEFAULT_PROVIDER = "anthropic"
ANTHROPIC_VERSION = "2023-06-01"

# ============================================================
# HARD LIMITS
# ============================================================

NET_MAX_TOKENS = 256

# ============================================================
# RESOLUTION
# ============================================================

def is_valid_net_provider(provider: str) -> bool:
    return provider in NET_MODELS


def get_active_net_provider() -> NetProvider:
    provider = (os.getenv(LLM_PROVIDER_ENV) or DEFAULT_PROVIDER).strip().lower()

    if not is_valid_net_provider(provider):
        raise RuntimeError(
            f"Invalid LLM provider '{provider}'. "
            f"Available: {list(NET_MODELS.keys())}"
        )
    return provider  # type: ignore


def get_net_model(provider: NetProvider) -> str:
    override = os.getenv(LLM_MODEL_ENV)
    if override and override.strip():
        return override.strip()

    if provider not in NET_MODELS:
        raise ValueError(f"Unknown LLM provider '{provider}'")
    return NET_MODELS[provider]


def get_net_api_key(provider: NetProvider) -> Optional[str]:
    key = os.getenv(NET_KEY_ENV[provider])
    return key.strip() if key and key.strip() else None
