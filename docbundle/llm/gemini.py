"""Adapter around the Gemini generate-content API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from ..config import DEFAULT_MODEL
from ..errors import GenerationRequestError
from ..logging import get_logger

_LOGGER = get_logger("llm.gemini")


@dataclass
class GenerationRequest:
    """A single generate-content call."""

    model: str
    contents: str
    api_key: str
    temperature: Optional[float] = None


class GeminiRunner:
    """Sends prompts to Gemini and returns the response text."""

    def __init__(
        self,
        model: str | None = None,
        *,
        temperature: Optional[float] = None,
        runner: Callable[[GenerationRequest], Optional[str]] | None = None,
    ) -> None:
        self.model = model or DEFAULT_MODEL
        self.temperature = temperature
        self._runner = runner or self._genai_runner

    def run(self, contents: str, *, api_key: str) -> str:
        """Return the generated text, or an empty string when the response has none."""
        request = GenerationRequest(
            model=self.model,
            contents=contents,
            api_key=api_key,
            temperature=self.temperature,
        )
        _LOGGER.info("Requesting generation from %s (%d prompt chars)", self.model, len(contents))
        text = self._runner(request)
        return text or ""

    @staticmethod
    def _genai_runner(request: GenerationRequest) -> Optional[str]:
        client = genai.Client(api_key=request.api_key)
        config = None
        if request.temperature is not None:
            config = genai_types.GenerateContentConfig(temperature=request.temperature)
        try:
            response = client.models.generate_content(
                model=request.model,
                contents=request.contents,
                config=config,
            )
        except genai_errors.APIError as exc:
            raise GenerationRequestError(
                f"Gemini request failed with status {exc.code}: {exc.message}"
            ) from exc
        return response.text


__all__ = ["GeminiRunner", "GenerationRequest"]
