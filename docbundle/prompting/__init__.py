"""Prompt templates and task dispatch."""

from .constants import CUSTOM_TASK, TASK_SPECS
from .dispatcher import PromptDispatcher, render_prompt
from .tasks import build_task_registry, fence_language

__all__ = [
    "CUSTOM_TASK",
    "PromptDispatcher",
    "TASK_SPECS",
    "build_task_registry",
    "fence_language",
    "render_prompt",
]
