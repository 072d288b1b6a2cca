"""Tests for docbundle.discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from docbundle.discovery import discover_files
from docbundle.errors import DirectoryNotFound


def test_discovers_spec_and_test_files(workspace) -> None:
    workspace.write(
        {
            "tests/login.spec.ts": "",
            "tests/cart.test.js": "",
            "src/app.ts": "",
            "README.md": "",
        }
    )

    found = discover_files(workspace.path())

    relative = sorted("/".join(item.relative_parts) for item in found)
    assert relative == ["tests/cart.test.js", "tests/login.spec.ts"]
    login = next(item for item in found if item.name == "login.spec.ts")
    assert login.path == (workspace.path().resolve() / "tests" / "login.spec.ts").as_posix()


def test_excludes_dependency_directories(workspace) -> None:
    workspace.write(
        {
            "node_modules/pkg/index.spec.ts": "",
            "packages/web/node_modules/dep/a.test.ts": "",
            "packages/web/e2e/home.spec.ts": "",
        }
    )

    found = discover_files(workspace.path())

    assert ["/".join(item.relative_parts) for item in found] == ["packages/web/e2e/home.spec.ts"]


def test_custom_suffixes_and_globs(workspace) -> None:
    workspace.write({"pkg/mod.py": "", "pkg/vendor/lib.py": "", "pkg/data.json": ""})

    found = discover_files(workspace.path(), [".py"], ["**/vendor/**"])

    assert [item.name for item in found] == ["mod.py"]


def test_missing_root_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(DirectoryNotFound):
        discover_files(tmp_path / "missing")
