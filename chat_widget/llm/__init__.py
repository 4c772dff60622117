from .base import ASSISTANT, SYSTEM, USER, ChatMessage, LLMClient
from .factory import BACKENDS, build_llm, model_label

__all__ = [
    "ASSISTANT",
    "BACKENDS",
    "SYSTEM",
    "USER",
    "ChatMessage",
    "LLMClient",
    "build_llm",
    "model_label",
]
