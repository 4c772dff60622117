from __future__ import annotations

from collections.abc import Sequence

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from .base import ChatMessage, to_wire


class OllamaLLM:
    def __init__(
        self,
        *,
        base_url: str,
        model: str,
        timeout_s: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout_s = timeout_s
        self.transport = transport

    @retry(
        reraise=True,
        stop=stop_after_attempt(4),
        wait=wait_exponential(multiplier=0.6, min=0.6, max=6),
        retry=retry_if_exception_type(httpx.HTTPError),
    )
    async def chat(self, messages: Sequence[ChatMessage], *, temperature: float = 0.2) -> str:
        payload = {
            "model": self.model,
            "stream": False,
            "messages": to_wire(messages),
            "options": {"temperature": temperature},
        }
        url = f"{self.base_url}/api/chat"
        async with httpx.AsyncClient(timeout=self.timeout_s, transport=self.transport) as client:
            r = await client.post(url, json=payload)
            r.raise_for_status()
            data = r.json()
        # Ollama returns: {"message": {"role": "...", "content": "..."}, ...}
        message = data.get("message")
        if not isinstance(message, dict):
            raise ValueError(f"Ollama response has no message (model={self.model!r})")
        return message.get("content", "") or ""
