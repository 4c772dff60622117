from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant. Reply using short and precise sentences."


@dataclass(frozen=True)
class Settings:
    llm_backend: str

    ollama_base_url: str
    ollama_model: str

    anthropic_api_key: str | None
    anthropic_model: str

    openai_api_key: str | None
    openai_base_url: str
    openai_model: str

    temperature: float
    timeout_s: float
    system_prompt: str

    log_level: str
    log_dir: Path


def load_settings() -> Settings:
    # Allow users to keep secrets in a local `.env` (not committed).
    load_dotenv(override=False)

    def getenv(key: str, default: str | None = None) -> str | None:
        v = os.getenv(key)
        if v is None or v == "":
            return default
        return v

    llm_backend = (getenv("CHAT_LLM_BACKEND", "mock") or "mock").strip().lower()

    ollama_base_url = getenv("CHAT_OLLAMA_BASE_URL", "http://localhost:11434") or ""
    ollama_model = getenv("CHAT_OLLAMA_MODEL", "llama3.2:latest") or ""

    anthropic_api_key = getenv("ANTHROPIC_API_KEY", None)
    anthropic_model = getenv("CHAT_ANTHROPIC_MODEL", "claude-3-5-haiku-latest") or ""

    openai_api_key = getenv("OPENAI_API_KEY", None)
    openai_base_url = getenv("CHAT_OPENAI_BASE_URL", "https://api.openai.com/v1") or ""
    openai_model = getenv("CHAT_OPENAI_MODEL", "gpt-4o-mini") or ""

    temperature = float(getenv("CHAT_TEMPERATURE", "0.2") or "0.2")
    timeout_s = float(getenv("CHAT_TIMEOUT_S", "120") or "120")
    system_prompt = getenv("CHAT_SYSTEM_PROMPT", DEFAULT_SYSTEM_PROMPT) or DEFAULT_SYSTEM_PROMPT

    log_level = (getenv("CHAT_LOG_LEVEL", "info") or "info").strip().lower()
    log_dir = Path(getenv("CHAT_LOG_DIR", "logs") or "logs").resolve()

    return Settings(
        llm_backend=llm_backend,
        ollama_base_url=ollama_base_url,
        ollama_model=ollama_model,
        anthropic_api_key=anthropic_api_key,
        anthropic_model=anthropic_model,
        openai_api_key=openai_api_key,
        openai_base_url=openai_base_url,
        openai_model=openai_model,
        temperature=temperature,
        timeout_s=timeout_s,
        system_prompt=system_prompt,
        log_level=log_level,
        log_dir=log_dir,
    )
