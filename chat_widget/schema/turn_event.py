from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class TurnEvent(BaseModel):
    """One line of a chat session's JSONL log."""

    ts: str
    run_id: str
    event: str = "message"
    role: Literal["system", "user", "assistant"] | None = None
    content: str = ""
    is_error: bool = False

    # Free-form context (backend, model, ...)
    extra: dict[str, Any] = Field(default_factory=dict)
