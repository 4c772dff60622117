from __future__ import annotations

from chat_widget.config import Settings

from .anthropic import AnthropicLLM
from .base import LLMClient
from .mock import MockLLM
from .ollama import OllamaLLM
from .openai_compat import OpenAICompatLLM

BACKENDS = ("mock", "ollama", "anthropic", "openai")


def build_llm(settings: Settings) -> LLMClient:
    backend = settings.llm_backend
    if backend == "mock":
        return MockLLM()
    if backend == "ollama":
        return OllamaLLM(
            base_url=settings.ollama_base_url,
            model=settings.ollama_model,
            timeout_s=settings.timeout_s,
        )
    if backend == "anthropic":
        if not settings.anthropic_api_key:
            raise RuntimeError("ANTHROPIC_API_KEY is not set, but CHAT_LLM_BACKEND=anthropic")
        return AnthropicLLM(
            api_key=settings.anthropic_api_key,
            model=settings.anthropic_model,
            timeout_s=settings.timeout_s,
        )
    if backend == "openai":
        if not settings.openai_api_key:
            raise RuntimeError("OPENAI_API_KEY is not set, but CHAT_LLM_BACKEND=openai")
        return OpenAICompatLLM(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            timeout_s=settings.timeout_s,
        )
    raise ValueError(f"Unknown CHAT_LLM_BACKEND={backend!r}, choose one of: {'|'.join(BACKENDS)}")


def model_label(settings: Settings) -> str:
    """Human-readable ``backend:model`` label for status lines."""
    backend = settings.llm_backend
    model = {
        "ollama": settings.ollama_model,
        "anthropic": settings.anthropic_model,
        "openai": settings.openai_model,
    }.get(backend, "")
    return f"{backend}:{model}" if model else backend
