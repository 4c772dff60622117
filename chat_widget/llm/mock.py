from __future__ import annotations

from collections.abc import Sequence

from .base import USER, ChatMessage


class MockLLM:
    """Deterministic mock backend: useful to try the widget without an external LLM."""

    async def chat(self, messages: Sequence[ChatMessage], *, temperature: float = 0.2) -> str:
        last_user = next((m.content for m in reversed(messages) if m.role == USER), "")
        return (
            "[MOCK] You said:\n"
            f"{last_user}\n\n"
            "Set CHAT_LLM_BACKEND to ollama, anthropic or openai for real replies."
        )
