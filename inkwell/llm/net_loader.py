"""
net_loader.py

HTTP client for the external generative backend.

GUARANTEES:
- Every call carries a timeout (a hung provider cannot block a request)
- Returns plain text only
- Explicit, typed provider errors (callers decide how to degrade)
- No retries
"""

import logging
import time
from typing import Optional

import requests

from inkwell import config
from inkwell.llm.net_models import (
    ANTHROPIC_VERSION,
    NET_ENDPOINTS,
    NET_MAX_TOKENS,
    NetProvider,
    get_active_net_provider,
    get_net_api_key,
    get_net_model,
)

logger = logging.getLogger(__name__)


# ============================================================
# ERRORS
# ============================================================

class NetUsageError(Exception):
    pass


class NetAuthError(Exception):
    pass


class NetRateLimitError(Exception):
    pass


class NetProviderError(Exception):
    pass


# ============================================================
# RESPONSE HANDLING
# ============================================================

def _raise_for_status(provider: str, response: requests.Response) -> None:
    if response.status_code == 401:
        raise NetAuthError(f"Invalid {provider} API key")

    if response.status_code == 429:
        raise NetRateLimitError(f"{provider} quota exceeded")

    if response.status_code >= 400:
        raise NetProviderError(
            f"{provider} API error [{response.status_code}]: {response.text}"
        )


def _anthropic_text(data: dict) -> str:
    # first text block only; tool / thinking blocks are ignored
    for block in data.get("content") or []:
        if isinstance(block, dict) and block.get("type") == "text":
            return block.get("text") or ""
    return ""


def _openai_text(data: dict) -> str:
    choices = data.get("choices") or [{}]
    content = (choices[0].get("message") or {}).get("content")
    return content if isinstance(content, str) else ""


# ============================================================
# CLIENT
# ============================================================

class NetLLMClient:
    """
    complete(system, user, max_tokens, temperature) -> str
    """

    def __init__(
        self,
        provider: Optional[NetProvider] = None,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = config.LLM_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.provider = provider or get_active_net_provider()
        self.model = model or get_net_model(self.provider)
        self._api_key = api_key
        self.timeout = timeout
        self._http = session or requests.Session()

    def _key(self) -> str:
        key = self._api_key or get_net_api_key(self.provider)
        if not key:
            raise NetAuthError(f"{self.provider} API key missing")
        return key

    def _anthropic(self, system: str, user: str, max_tokens: int, temperature: float) -> str:
        payload = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": user}],
        }
        if system:
            payload["system"] = system

        headers = {
            "x-api-key": self._key(),
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }

        response = self._http.post(
            NET_ENDPOINTS["anthropic"],
            headers=headers,
            json=payload,
            timeout=self.timeout,
        )
        _raise_for_status("anthropic", response)
        return _anthropic_text(response.json())

    def _groq(self, system: str, user: str, max_tokens: int, temperature: float) -> str:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": user})

        payload = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        headers = {
            "Authorization": f"Bearer {self._key()}",
            "Content-Type": "application/json",
        }

        response = self._http.post(
            NET_ENDPOINTS["groq"],
            headers=headers,
            json=payload,
            timeout=self.timeout,
        )
        _raise_for_status("groq", response)
        return _openai_text(response.json())

    def complete(
        self,
        system: str,
        user: str,
        max_tokens: int,
        temperature: float = 0.7,
    ) -> str:
        if not user or not user.strip():
            raise NetUsageError("Prompt cannot be empty")

        max_tokens = max(1, min(max_tokens, NET_MAX_TOKENS))

        start = time.time()
        logger.info(
            "[LLM START] provider=%s | model=%s | max_tokens=%s",
            self.provider, self.model, max_tokens,
        )

        try:
            if self.provider == "anthropic":
                return self._anthropic(system, user, max_tokens, temperature)
            if self.provider == "groq":
                return self._groq(system, user, max_tokens, temperature)
            raise NetProviderError(f"Unsupported LLM provider '{self.provider}'")
        finally:
            elapsed = round(time.time() - start, 2)
            logger.info("[LLM END] provider=%s | %ss", self.provider, elapsed)
