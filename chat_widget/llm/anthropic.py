from __future__ import annotations

from collections.abc import Sequence

import httpx

from .base import SYSTEM, ChatMessage, to_wire


class AnthropicLLM:
    """Minimal Anthropic Messages API client via raw HTTP."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: str = "https://api.anthropic.com/v1",
        max_tokens: int = 1024,
        timeout_s: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.max_tokens = max_tokens
        self.timeout_s = timeout_s
        self.transport = transport

    async def chat(self, messages: Sequence[ChatMessage], *, temperature: float = 0.2) -> str:
        # Anthropic "messages" API: separate system string; user/assistant messages list.
        system = "\n".join([m.content for m in messages if m.role == SYSTEM]).strip()
        convo = to_wire([m for m in messages if m.role != SYSTEM])

        url = f"{self.base_url}/messages"
        payload = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": temperature,
            "messages": convo,
        }
        if system:
            payload["system"] = system
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": "2023-06-01",
            "content-type": "application/json",
        }
        async with httpx.AsyncClient(timeout=self.timeout_s, transport=self.transport) as client:
            r = await client.post(url, json=payload, headers=headers)
            r.raise_for_status()
            data = r.json()

        # Anthropic returns: content: [{type:"text", text:"..."}]
        blocks = data.get("content")
        if not isinstance(blocks, list):
            raise ValueError(f"Anthropic response has no content blocks (model={self.model!r})")
        texts: list[str] = []
        for b in blocks:
            if (b or {}).get("type") == "text":
                texts.append((b or {}).get("text", ""))
        return "\n".join(t for t in texts if t)
