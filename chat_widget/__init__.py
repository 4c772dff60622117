"""Chat widget wired to hosted LLM chat-completion APIs."""

__version__ = "0.1.0"
