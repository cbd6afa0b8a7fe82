"""LLM integration helpers."""

from .openai_client import OpenAIChatClient

__all__ = ["OpenAIChatClient"]
