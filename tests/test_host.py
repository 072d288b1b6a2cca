"""Tests for docbundle.host."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from docbundle.host import (
    ChainedSecretStore,
    EnvSecretStore,
    FileSecretStore,
    LocalFileSystem,
    RecordingPrompt,
    default_secret_store,
)


def test_file_secret_store_round_trip(tmp_path: Path) -> None:
    store = FileSecretStore(tmp_path / "conf" / "credentials.json")

    assert store.get() is None
    store.set("abc123")

    assert store.get() == "abc123"
    mode = stat.S_IMODE(os.stat(store.path).st_mode)
    assert mode == 0o600


def test_file_secret_store_ignores_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "credentials.json"
    path.write_text("{not json", encoding="utf-8")

    assert FileSecretStore(path).get() is None


def test_env_secret_store_ignores_blank_values(monkeypatch) -> None:
    monkeypatch.setenv("DOCBUNDLE_TEST_KEY", "   ")

    assert EnvSecretStore("DOCBUNDLE_TEST_KEY").get() is None


def test_chained_store_reads_in_order_and_writes_first(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("DOCBUNDLE_TEST_KEY", "from-env")
    file_store = FileSecretStore(tmp_path / "credentials.json")
    chained = ChainedSecretStore([file_store, EnvSecretStore("DOCBUNDLE_TEST_KEY")])

    assert chained.get() == "from-env"
    chained.set("from-file")

    assert chained.get() == "from-file"
    assert file_store.get() == "from-file"


def test_chained_store_needs_a_store() -> None:
    with pytest.raises(ValueError):
        ChainedSecretStore([])


def test_default_store_uses_xdg_config_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    store = default_secret_store()
    store.set("saved")

    assert (tmp_path / "docbundle" / "credentials.json").exists()
    assert store.get() == "saved"


def test_local_file_system(tmp_path: Path) -> None:
    fs = LocalFileSystem()
    target_dir = tmp_path / "a" / "b"

    fs.make_dirs(target_dir)
    fs.write_text(target_dir / "x.md", "héllo")

    assert fs.read_text(target_dir / "x.md") == "héllo"


def test_recording_prompt_separates_errors() -> None:
    prompt = RecordingPrompt()
    prompt.info("working")
    prompt.error("boom", kind="EmptyGenerationResult")

    assert [m.level for m in prompt.messages] == ["info", "error"]
    assert prompt.errors[0].kind == "EmptyGenerationResult"
