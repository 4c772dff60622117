from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal, Protocol

Role = Literal["system", "user", "assistant"]

SYSTEM: Role = "system"
USER: Role = "user"
ASSISTANT: Role = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str
    # Set on assistant entries produced by a failed completion call.
    is_error: bool = False


class LLMClient(Protocol):
    async def chat(self, messages: Sequence[ChatMessage], *, temperature: float = 0.2) -> str:
        """Return assistant text output."""
        raise NotImplementedError


def to_wire(messages: Sequence[ChatMessage]) -> list[dict[str, str]]:
    return [{"role": m.role, "content": m.content} for m in messages]
