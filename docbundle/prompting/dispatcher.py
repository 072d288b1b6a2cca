"""Select a documentation task and render its prompt."""

from __future__ import annotations

from typing import Mapping, Sequence

from jinja2 import Environment

from ..errors import UnknownTaskKind
from ..models import FileRecord, TaskDefinition
from .constants import CUSTOM_TASK
from .tasks import build_task_registry, create_environment


class PromptDispatcher:
    """Renders prompts from a fixed task registry.

    Rendering is pure: the templates are compiled when the dispatcher is built
    and the same inputs always produce the same prompt.
    """

    def __init__(
        self,
        registry: Mapping[str, TaskDefinition] | None = None,
        *,
        env: Environment | None = None,
    ) -> None:
        self._env = env or create_environment()
        self.registry = registry if registry is not None else build_task_registry(self._env)
        self._custom_template = self._env.get_template("custom.j2")

    def tasks(self) -> list[TaskDefinition]:
        return list(self.registry.values())

    def get_task(self, task_key: str) -> TaskDefinition:
        try:
            return self.registry[task_key]
        except KeyError:
            raise UnknownTaskKind(task_key) from None

    def render(
        self,
        task_key: str,
        files: Sequence[FileRecord],
        custom_prompt: str | None = None,
    ) -> str:
        """Return the prompt text for ``task_key`` over ``files``."""
        if task_key == CUSTOM_TASK and custom_prompt and custom_prompt.strip():
            return (
                self._custom_template.render(prompt=custom_prompt.strip(), files=list(files)).strip()
                + "\n"
            )
        return self.get_task(task_key).template(files)


_DEFAULT: PromptDispatcher | None = None


def default_dispatcher() -> PromptDispatcher:
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = PromptDispatcher()
    return _DEFAULT


def render_prompt(
    task_key: str,
    files: Sequence[FileRecord],
    custom_prompt: str | None = None,
) -> str:
    """Render ``task_key`` with the process-wide default dispatcher."""
    return default_dispatcher().render(task_key, files, custom_prompt)


__all__ = ["PromptDispatcher", "default_dispatcher", "render_prompt"]
