"""Post-processing helpers for generated documentation."""

from .markdown import clean_generated_markdown

__all__ = ["clean_generated_markdown"]
