"""
Thin async client for Groq's OpenAI-compatible chat completions endpoint.

HTTP status is never raised: callers get (ok, status, text) and decide
whether a failure aborts the request or moves on to the next model.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict

import httpx

from .config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatResult:
    ok: bool
    status: int
    text: str

    def content(self) -> str:
        """Return choices[0].message.content from the raw body ("" when absent or not text)."""
        data = json.loads(self.text)
        try:
            content = data["choices"][0]["message"].get("content")
        except (KeyError, IndexError, TypeError, AttributeError):
            return ""
        return content if isinstance(content, str) else ""


class GroqClient:
    def __init__(self, api_key: str, base_url: str, timeout: float = 60.0):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "GroqClient":
        return cls(settings.groq_api_key or "", settings.groq_base_url, settings.upstream_timeout)

    async def chat(self, body: Dict[str, Any]) -> ChatResult:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        logger.debug("POST %s/chat/completions model=%s", self.base_url, body.get("model"))
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(f"{self.base_url}/chat/completions", json=body, headers=headers)
        ok = 200 <= resp.status_code < 300
        return ChatResult(ok=ok, status=resp.status_code, text=resp.text)
