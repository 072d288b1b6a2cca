"""Static registry of documentation tasks backed by Jinja2 templates."""

from __future__ import annotations

from functools import partial
from pathlib import Path, PurePosixPath
from types import MappingProxyType
from typing import Mapping, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

from ..models import FileRecord, TaskDefinition
from .constants import FENCE_BY_SUFFIX, TASK_SPECS

TEMPLATES_DIR = Path(__file__).with_name("templates")


def fence_language(name: str) -> str:
    """Return the code-fence language tag for a file name ("" when unknown)."""
    suffix = PurePosixPath(name.replace("\\", "/")).suffix.lower()
    return FENCE_BY_SUFFIX.get(suffix, "")


def create_environment(templates_dir: Path | None = None) -> Environment:
    # auto_reload off: compiled templates are reused without touching the disk.
    env = Environment(
        loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        auto_reload=False,
        undefined=StrictUndefined,
    )
    env.filters["fence_language"] = fence_language
    return env


def _render(template: Template, files: Sequence[FileRecord]) -> str:
    return template.render(files=list(files)).strip() + "\n"


def build_task_registry(env: Environment | None = None) -> Mapping[str, TaskDefinition]:
    """Compile every task template and return an immutable key -> task mapping."""
    env = env or create_environment()
    # Partials are loaded up front so rendering never reaches the loader.
    env.get_template("input_files.j2")
    tasks = {}
    for key, (name, description, template_name) in TASK_SPECS.items():
        template = env.get_template(template_name)
        tasks[key] = TaskDefinition(
            key=key,
            name=name,
            description=description,
            template=partial(_render, template),
        )
    return MappingProxyType(tasks)


__all__ = [
    "TEMPLATES_DIR",
    "build_task_registry",
    "create_environment",
    "fence_language",
]
