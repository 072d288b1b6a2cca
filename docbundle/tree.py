"""Build the nested file tree that drives the checkbox picker."""

from __future__ import annotations

from typing import Any, Dict, Iterable

from .models import DiscoveredFile, FileDirectory, FileLeaf, FileNode


def build_file_tree(files: Iterable[DiscoveredFile]) -> FileDirectory:
    """Fold a flat file list into a tree of directories keyed by path segment.

    Files sharing a directory prefix share the intermediate node. A later file
    whose final segment collides with an existing key replaces that entry.
    """
    root = FileDirectory()
    for item in files:
        parts = item.relative_parts
        if not parts:
            continue
        current = root
        for segment in parts[:-1]:
            child = current.children.get(segment)
            if not isinstance(child, FileDirectory):
                child = FileDirectory()
                current.children[segment] = child
            current = child
        current.children[parts[-1]] = FileLeaf(path=item.path)
    return root


def tree_to_dict(node: FileNode) -> Dict[str, Any]:
    """Render a tree in the picker's JSON shape (leaves carry ``isFile``)."""
    if isinstance(node, FileLeaf):
        return {"path": node.path, "isFile": True}
    return {name: tree_to_dict(child) for name, child in node.children.items()}


def iter_leaves(node: FileNode) -> Iterable[FileLeaf]:
    if isinstance(node, FileLeaf):
        yield node
        return
    for child in node.children.values():
        yield from iter_leaves(child)


def render_tree(node: FileDirectory, indent: str = "") -> str:
    """Plain-text outline of the tree for terminal output."""
    lines = []
    for name, child in node.children.items():
        if isinstance(child, FileLeaf):
            lines.append(f"{indent}{name}")
        else:
            lines.append(f"{indent}{name}/")
            nested = render_tree(child, indent + "  ")
            if nested:
                lines.append(nested)
    return "\n".join(lines)


__all__ = ["build_file_tree", "iter_leaves", "render_tree", "tree_to_dict"]
