from __future__ import annotations

from collections.abc import Sequence

import httpx

from .base import ChatMessage, to_wire


class OpenAICompatLLM:
    """
    Minimal OpenAI-compatible ChatCompletions client via raw HTTP.
    Works with OpenAI or any OpenAI-compatible gateway if you point base_url accordingly.
    """

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: str = "https://api.openai.com/v1",
        timeout_s: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.transport = transport

    async def chat(self, messages: Sequence[ChatMessage], *, temperature: float = 0.2) -> str:
        url = f"{self.base_url}/chat/completions"
        payload = {
            "model": self.model,
            "messages": to_wire(messages),
            "temperature": temperature,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        async with httpx.AsyncClient(timeout=self.timeout_s, transport=self.transport) as client:
            r = await client.post(url, json=payload, headers=headers)
            r.raise_for_status()
            data = r.json()
        # OpenAI returns: choices[0].message.content
        choices = data.get("choices") or []
        if not choices:
            raise ValueError(f"OpenAI response has no choices (model={self.model!r})")
        msg = (choices[0] or {}).get("message") or {}
        return msg.get("content", "") or ""
