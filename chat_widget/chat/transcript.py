"""Conversation transcript and the controller that runs one chat turn at a time.

The controller owns a single conversation. Each call to
:meth:`TranscriptController.append_user_turn` records the user's message,
asks the completion backend for a reply using the whole transcript as
context, and records the reply. Backend failures never escape a turn: they
are logged and stored as an assistant entry flagged with ``is_error``.
A cancelled turn is closed the same way and the cancellation is re-raised.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterator

from chat_widget.config import DEFAULT_SYSTEM_PROMPT
from chat_widget.llm import ASSISTANT, SYSTEM, USER, ChatMessage, LLMClient

APOLOGY = "Sorry, I could not get a reply from the assistant: "


class Transcript:
    """Append-only, ordered list of chat messages."""

    def __init__(self, system_prompt: str) -> None:
        self._messages: list[ChatMessage] = [ChatMessage(SYSTEM, system_prompt)]

    def append(self, message: ChatMessage) -> None:
        self._messages.append(message)

    def snapshot(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(self.snapshot())

    def __getitem__(self, index: int) -> ChatMessage:
        if not isinstance(index, int):
            raise TypeError(f"Transcript indices must be integers, not {type(index).__name__}; use snapshot() for slices")
        return self._messages[index]


def format_error(error: BaseException) -> str:
    detail = str(error) or type(error).__name__
    return APOLOGY + detail


class TranscriptController:
    """Runs chat turns against an LLM backend for one conversation.

    Parameters
    ----------
    llm : LLMClient
        Completion backend; receives the full transcript on every call.
    logger : logging.Logger
        Receives an info record before each completion call and an error
        record when a call fails.
    system_prompt : str
        Content of the leading system message.
    temperature : float
        Sampling temperature forwarded to the backend.
    """

    def __init__(
        self,
        llm: LLMClient,
        logger: logging.Logger,
        *,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        temperature: float = 0.2,
    ) -> None:
        self.llm = llm
        self.logger = logger
        self.temperature = temperature
        self.transcript = Transcript(system_prompt)

    @property
    def system_prompt(self) -> str:
        return self.transcript[0].content

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return self.transcript.snapshot()

    async def append_user_turn(self, text: str, on_update: Callable[[], None]) -> None:
        """Record ``text`` as a user message and append the assistant's reply.

        ``on_update`` is called once after the user message is recorded and
        once after the reply (or error entry) is recorded. Callers must not
        start another turn on this controller until this one returns.
        """
        self.transcript.append(ChatMessage(USER, text))
        on_update()

        request = self.transcript.snapshot()
        self.logger.info("Requesting completion for %d messages", len(request))
        try:
            reply = await self.llm.chat(request, temperature=self.temperature)
        except asyncio.CancelledError as e:
            # Close the turn before letting the cancellation through.
            self.logger.warning("Completion request cancelled")
            self.transcript.append(ChatMessage(ASSISTANT, format_error(e), is_error=True))
            on_update()
            raise
        except Exception as e:
            self.logger.exception("Completion request failed: %s", e)
            self.transcript.append(ChatMessage(ASSISTANT, format_error(e), is_error=True))
        else:
            self.transcript.append(ChatMessage(ASSISTANT, reply))
        on_update()
