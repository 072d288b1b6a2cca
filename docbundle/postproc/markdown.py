"""Clean-up helpers for text returned by the generation service."""

from __future__ import annotations

import re

_LEADING_MARKDOWN_FENCE = re.compile(r"\A```(?:markdown|md)[ \t]*(?:\r?\n|\Z)", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"(?:\r?\n|\A)```[ \t]*\Z")


def clean_generated_markdown(text: str) -> str:
    """Remove a wrapping ```markdown fence and surrounding whitespace.

    This is narrower than "strip a leading marker and, separately, one
    trailing fence": a trailing ``` is removed only when a leading
    ```markdown (or ```md) marker was removed with it. Output such as
    ``"## Run\\n```bash\\nnpm test\\n```"`` is therefore returned unchanged
    instead of losing the close of its last code block. Nested wrappers are
    peeled until none is left, so applying the function twice gives the same
    result as applying it once.
    """
    cleaned = text.strip()
    while True:
        opening = _LEADING_MARKDOWN_FENCE.match(cleaned)
        if opening is None:
            return cleaned
        cleaned = cleaned[opening.end():]
        cleaned = _TRAILING_FENCE.sub("", cleaned, count=1).strip()


__all__ = ["clean_generated_markdown"]
