from __future__ import annotations

import asyncio
import logging

import streamlit as st

from chat_widget.chat import TranscriptController
from chat_widget.config import Settings, load_settings
from chat_widget.llm import SYSTEM, ChatMessage, build_llm, model_label
from chat_widget.render import render_message
from chat_widget.utils.logs import setup_rich_logging

ERROR_CSS = """
<style>
.chat-error {
  border-left: 4px solid #d33;
  background: rgba(221, 51, 51, 0.08);
  padding: 0.5rem 0.75rem;
  border-radius: 0.25rem;
}
</style>
"""

logger = logging.getLogger("chat_widget.ui")


@st.cache_resource
def get_settings() -> Settings:
    settings = load_settings()
    setup_rich_logging(settings.log_level)
    return settings


def new_controller(settings: Settings) -> TranscriptController:
    return TranscriptController(
        build_llm(settings),
        logger,
        system_prompt=settings.system_prompt,
        temperature=settings.temperature,
    )


def draw_transcript(placeholder, messages: tuple[ChatMessage, ...]) -> None:
    with placeholder.container():
        for m in messages:
            if m.role == SYSTEM:
                continue
            with st.chat_message(m.role):
                st.html(render_message(m))


st.set_page_config(page_title="Chat Widget", layout="centered")
st.markdown(ERROR_CSS, unsafe_allow_html=True)
st.title("Chat")

settings = get_settings()

if "controller" not in st.session_state:
    try:
        st.session_state.controller = new_controller(settings)
    except (RuntimeError, ValueError) as e:
        st.error(str(e))
        st.stop()
    st.session_state.pending = None

controller: TranscriptController = st.session_state.controller
busy = st.session_state.pending is not None

st.sidebar.caption(f"model: `{model_label(settings)}`")
st.sidebar.caption(f"messages: {len(controller.transcript) - 1}")
if st.sidebar.button("New conversation", disabled=busy):
    del st.session_state["controller"]
    st.rerun()

transcript_view = st.empty()
draw_transcript(transcript_view, controller.messages)

prompt = st.chat_input("Type a message...", disabled=busy)
if prompt and prompt.strip() and not busy:
    # Rerun once so the input renders disabled while the turn is in flight.
    st.session_state.pending = prompt.strip()
    st.rerun()

if busy:
    text = st.session_state.pending
    try:
        with st.spinner("Thinking..."):
            asyncio.run(
                controller.append_user_turn(
                    text,
                    lambda: draw_transcript(transcript_view, controller.messages),
                )
            )
    finally:
        st.session_state.pending = None
    st.rerun()
