"""LLM module."""

from clinic_ai.llm.model_factory import get_chat_model
from clinic_ai.llm.oracle import GenerativeOracle

__all__ = ["GenerativeOracle", "get_chat_model"]
