"""Turn chat message text into HTML that is safe to inject into the page.

:func:`rewrite_images` is the only place model output is escaped before
display. Markdown ``[title](url)`` and ``![title](url)`` spans become
``<img>`` elements; every other character is HTML-escaped.
"""

from __future__ import annotations

import html
import re

from chat_widget.llm import ChatMessage

# Plain links match too and are rendered as images.
IMAGE_PATTERN = re.compile(r"!?\[([^\]]+)\]\s*\(([^)]+)\)")


class SafeHtml(str):
    """Markup that has already been escaped and must not be escaped again."""

    __slots__ = ()


def _unescape_angle_brackets(text: str) -> str:
    return text.replace("&lt;", "<").replace("&gt;", ">")


def rewrite_images(message: str) -> SafeHtml:
    text = _unescape_angle_brackets(message)
    parts: list[str] = []
    pos = 0
    for m in IMAGE_PATTERN.finditer(text):
        parts.append(html.escape(text[pos : m.start()]))
        title = html.escape(m.group(1))
        src = html.escape(m.group(2))
        parts.append(f'<img title="{title}" src="{src}">')
        pos = m.end()
    parts.append(html.escape(text[pos:]))
    return SafeHtml("".join(parts))


def render_message(message: ChatMessage) -> SafeHtml:
    body = rewrite_images(message.content)
    if message.is_error:
        return SafeHtml(f'<div class="chat-error">{body}</div>')
    return body
