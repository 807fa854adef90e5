"""LLM client abstraction for Gemini, Azure OpenAI and OpenAI."""

from .factory import create_llm_client
from .client import BaseLLMClient

__all__ = ["create_llm_client", "BaseLLMClient"]
