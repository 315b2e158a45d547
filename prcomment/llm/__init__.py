"""Completion endpoint client."""

from .runner import ChatRequest, LLMRunner

__all__ = ["ChatRequest", "LLMRunner"]
