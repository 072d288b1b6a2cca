"""Core data models shared across docbundle components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple, Union


@dataclass(frozen=True)
class FileRecord:
    """A file's display name paired with its full text content."""

    name: str
    content: str


@dataclass(frozen=True)
class TaskDefinition:
    """A named documentation strategy bound to a prompt template."""

    key: str
    name: str
    description: str
    template: Callable[[Sequence[FileRecord]], str]


@dataclass(frozen=True)
class DiscoveredFile:
    """A file found by the workspace scan, relative to the scan root."""

    path: str
    relative_parts: Tuple[str, ...]

    @property
    def name(self) -> str:
        return self.relative_parts[-1] if self.relative_parts else Path(self.path).name


@dataclass(frozen=True)
class FileLeaf:
    """Terminal node of a file tree."""

    path: str


@dataclass
class FileDirectory:
    """Intermediate node of a file tree keyed by path segment."""

    children: Dict[str, "FileNode"] = field(default_factory=dict)


FileNode = Union[FileLeaf, FileDirectory]


@dataclass
class GenerationOutcome:
    """Result of a documentation generation run."""

    path: Path
    task: str
    files: List[str]
