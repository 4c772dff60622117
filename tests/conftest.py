"""Shared test fixtures."""

from __future__ import annotations

import logging
import os

import pytest


@pytest.fixture
def mock_logger() -> logging.Logger:
    """Provide a logger for testing."""
    logger = logging.getLogger("test")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Ensure tests run with a clean environment (no leftover vars)."""
    for var in list(os.environ):
        if var.startswith("CHAT_") or var in {"OPENAI_API_KEY", "ANTHROPIC_API_KEY"}:
            monkeypatch.delenv(var, raising=False)
    # Keep a developer's local .env out of the tests.
    monkeypatch.setattr("chat_widget.config.load_dotenv", lambda **kwargs: False)
    yield
