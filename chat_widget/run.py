from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace

from rich.console import Console
from rich.markup import escape

from chat_widget.chat import TranscriptController
from chat_widget.config import Settings, load_settings
from chat_widget.llm import ASSISTANT, BACKENDS, USER, ChatMessage, build_llm, model_label
from chat_widget.utils.logs import setup_rich_logging
from chat_widget.utils.run_log import RunLogPaths, append_message, init_run_log, make_run_id

EXIT_COMMANDS = {"/exit", "/quit"}

logger = logging.getLogger("chat_widget")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="chat-widget", description="Chat with an LLM in the terminal.")
    parser.add_argument("--backend", choices=BACKENDS, help="Overrides CHAT_LLM_BACKEND")
    parser.add_argument("--system-prompt", help="Overrides CHAT_SYSTEM_PROMPT")
    parser.add_argument("--log-level", help="Overrides CHAT_LOG_LEVEL (debug|info|warning|error)")
    parser.add_argument(
        "--no-log",
        action="store_true",
        help="Do not write the session log (default writes logs/chat_*.jsonl)",
    )
    return parser.parse_args(argv)


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    changes = {}
    if args.backend:
        changes["llm_backend"] = args.backend
    if args.system_prompt:
        changes["system_prompt"] = args.system_prompt
    if args.log_level:
        changes["log_level"] = args.log_level.lower()
    return replace(settings, **changes)


def print_message(console: Console, message: ChatMessage) -> None:
    if message.is_error:
        console.print(f"[bold red]assistant[/bold red]: {escape(message.content)}")
    elif message.role == ASSISTANT:
        console.print(f"[bold cyan]assistant[/bold cyan]: {escape(message.content)}")
    else:
        console.print(f"[dim]{message.role}[/dim]: {escape(message.content)}")


class TerminalView:
    """Prints and logs every message appended since the last update."""

    def __init__(self, controller: TranscriptController, console: Console, log_paths: RunLogPaths | None) -> None:
        self.controller = controller
        self.console = console
        self.log_paths = log_paths
        # The system message is shown once by the banner.
        self.shown = 1

    def on_update(self) -> None:
        messages = self.controller.messages
        for message in messages[self.shown :]:
            if message.role != USER:
                print_message(self.console, message)
            if self.log_paths is not None:
                append_message(self.log_paths, message)
        self.shown = len(messages)


async def chat_loop(controller: TranscriptController, view: TerminalView, console: Console) -> None:
    while True:
        try:
            text = await asyncio.to_thread(console.input, "[bold green]you[/bold green]: ")
        except EOFError:
            console.print()
            return
        text = text.strip()
        if not text:
            continue
        if text.lower() in EXIT_COMMANDS:
            return
        with console.status("thinking..."):
            await controller.append_user_turn(text, view.on_update)


def main(argv: list[str] | None = None) -> int:
    # Best-effort fix for Windows terminals that default to a legacy code page.
    try:
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")
    except AttributeError:
        pass

    args = parse_args(argv)
    console = Console()
    settings = apply_overrides(load_settings(), args)
    setup_rich_logging(settings.log_level)

    try:
        llm = build_llm(settings)
    except (RuntimeError, ValueError) as e:
        console.print(f"[bold red]error[/bold red]: {escape(str(e))}")
        return 2

    controller = TranscriptController(
        llm,
        logger,
        system_prompt=settings.system_prompt,
        temperature=settings.temperature,
    )

    log_paths = None
    if not args.no_log:
        log_paths = init_run_log(settings.log_dir, make_run_id())
        append_message(log_paths, controller.transcript[0], extra={"model": model_label(settings)})

    console.rule(f"chat-widget ({model_label(settings)})")
    console.print(f"[dim]system[/dim]: {escape(controller.system_prompt)}")
    if log_paths is not None:
        console.print(f"[bold]session_log[/bold]: {log_paths.jsonl_path}")
    console.print("[dim]Type /exit or press Ctrl+D to quit.[/dim]")

    view = TerminalView(controller, console, log_paths)
    try:
        asyncio.run(chat_loop(controller, view, console))
    except KeyboardInterrupt:
        console.print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
