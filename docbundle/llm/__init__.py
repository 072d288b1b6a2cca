"""Generation service adapters."""

from .gemini import GeminiRunner, GenerationRequest

__all__ = ["GeminiRunner", "GenerationRequest"]
