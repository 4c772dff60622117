from __future__ import annotations

import io
import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from chat_widget import run
from chat_widget.chat import TranscriptController
from chat_widget.llm import ASSISTANT, USER, ChatMessage
from chat_widget.llm.mock import MockLLM
from chat_widget.utils.run_log import append_message, init_run_log, make_run_id, read_events


@pytest.fixture
def mock_console() -> Console:
    return Console(file=io.StringIO(), width=80, force_terminal=False)


def test_run_log_appends_one_line_per_message(tmp_path: Path):
    paths = init_run_log(tmp_path / "logs", "abc")
    assert paths.jsonl_path == tmp_path / "logs" / "chat_abc.jsonl"

    append_message(paths, ChatMessage(USER, "hi"))
    append_message(paths, ChatMessage(ASSISTANT, "oops", is_error=True), extra={"model": "mock"})

    lines = paths.jsonl_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    events = read_events(paths.jsonl_path)
    assert [(e.role, e.content, e.is_error) for e in events] == [
        ("user", "hi", False),
        ("assistant", "oops", True),
    ]
    assert events[1].extra == {"model": "mock"}
    assert all(e.run_id == "abc" for e in events)


def test_make_run_id_is_sortable_timestamp():
    rid = make_run_id()
    assert rid.endswith("Z")
    assert "T" in rid


@pytest.mark.asyncio
async def test_terminal_view_prints_replies_and_logs(tmp_path: Path, mock_console: Console, mock_logger: logging.Logger):
    controller = TranscriptController(MockLLM(), mock_logger)
    paths = init_run_log(tmp_path, "t1")
    view = run.TerminalView(controller, mock_console, paths)

    await controller.append_user_turn("[bold]hello[/bold]", view.on_update)

    output = mock_console.file.getvalue()
    assert "assistant" in output
    # Message text is printed literally, not as console markup.
    assert "[bold]hello[/bold]" in output
    assert view.shown == 3
    assert [e.role for e in read_events(paths.jsonl_path)] == ["user", "assistant"]


def test_main_reports_bad_backend(clean_env, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CHAT_LLM_BACKEND", "openai")
    with patch("chat_widget.run.setup_rich_logging"):
        assert run.main(["--no-log"]) == 2


def test_main_runs_chat_loop(clean_env, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CHAT_LOG_DIR", str(tmp_path))
    with (
        patch("chat_widget.run.setup_rich_logging"),
        patch("chat_widget.run.asyncio.run") as mock_asyncio_run,
    ):
        assert run.main(["--backend", "mock", "--system-prompt", "Be terse."]) == 0
    mock_asyncio_run.assert_called_once()
    mock_asyncio_run.call_args.args[0].close()

    logs = list(tmp_path.glob("chat_*.jsonl"))
    assert len(logs) == 1
    events = read_events(logs[0])
    assert events[0].role == "system"
    assert events[0].content == "Be terse."


def test_apply_overrides(clean_env):
    args = run.parse_args(["--backend", "ollama", "--log-level", "DEBUG", "--system-prompt", "Hi."])
    settings = run.apply_overrides(run.load_settings(), args)
    assert settings.llm_backend == "ollama"
    assert settings.log_level == "debug"
    assert settings.system_prompt == "Hi."
    assert args.no_log is False
