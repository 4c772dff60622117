"""Per-session JSONL message log.

The front ends only write these files. :func:`read_events` is the reader kept
for tooling that inspects a session afterwards.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from chat_widget.llm import ChatMessage
from chat_widget.schema import TurnEvent


@dataclass(frozen=True)
class RunLogPaths:
    run_id: str
    jsonl_path: Path


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def make_run_id() -> str:
    return _utcnow().strftime("%Y%m%dT%H%M%S%fZ")


def init_run_log(log_dir: Path, run_id: str) -> RunLogPaths:
    log_dir.mkdir(parents=True, exist_ok=True)
    return RunLogPaths(run_id=run_id, jsonl_path=log_dir / f"chat_{run_id}.jsonl")


def append_event(paths: RunLogPaths, event: TurnEvent) -> None:
    with paths.jsonl_path.open("a", encoding="utf-8", newline="\n") as f:
        f.write(json.dumps(event.model_dump(), ensure_ascii=False) + "\n")


def append_message(
    paths: RunLogPaths,
    message: ChatMessage,
    *,
    extra: dict[str, Any] | None = None,
) -> TurnEvent:
    event = TurnEvent(
        ts=_utcnow().isoformat(),
        run_id=paths.run_id,
        role=message.role,
        content=message.content,
        is_error=message.is_error,
        extra=extra or {},
    )
    append_event(paths, event)
    return event


def read_events(path: Path, limit: int = 5000) -> list[TurnEvent]:
    if not path.exists():
        return []
    lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
    if len(lines) > limit:
        lines = lines[-limit:]
    out: list[TurnEvent] = []
    for ln in lines:
        ln = ln.strip()
        if not ln:
            continue
        out.append(TurnEvent.model_validate_json(ln))
    return out
