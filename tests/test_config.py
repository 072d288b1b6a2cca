"""Tests for docbundle.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from docbundle.config import DEFAULT_MODEL, ConfigError, load_config


def test_load_config_defaults_when_missing(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("DOCBUNDLE_MODEL", raising=False)
    config = load_config(tmp_path)

    assert config.root == tmp_path.resolve()
    assert config.gemini.model == DEFAULT_MODEL
    assert config.gemini.api_key_env == "GEMINI_API_KEY"
    assert ".spec.ts" in config.discovery.include_suffixes
    assert config.discovery.exclude_globs == ["**/node_modules/**"]
    assert config.convert.keep_originals is False
    assert config.output_dir == "documentation"


def test_load_config_reads_sections(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("DOCBUNDLE_MODEL", raising=False)
    (tmp_path / ".docbundle.yml").write_text(
        """
gemini:
  model: gemini-1.5-pro
  temperature: 0.1
  api_key_env: MY_KEY
discovery:
  include_suffixes: [".py"]
  exclude_globs:
    - "**/vendor/**"
convert:
  text_suffixes: [txt, ".PDF"]
  always_include: ["Object Edge.pdf"]
  keep_originals: yes
output:
  directory: docs/generated
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path / ".docbundle.yml")

    assert config.gemini.model == "gemini-1.5-pro"
    assert config.gemini.temperature == pytest.approx(0.1)
    assert config.gemini.api_key_env == "MY_KEY"
    assert config.discovery.include_suffixes == [".py"]
    assert config.discovery.exclude_globs == ["**/vendor/**"]
    assert config.convert.text_suffixes == [".txt", ".pdf"]
    assert config.convert.always_include == ["Object Edge.pdf"]
    assert config.convert.keep_originals is True
    assert config.output_dir == "docs/generated"


def test_env_overrides_model(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / ".docbundle.yml").write_text("gemini:\n  model: from-file\n", encoding="utf-8")
    monkeypatch.setenv("DOCBUNDLE_MODEL", "from-env")

    assert load_config(tmp_path).gemini.model == "from-env"


def test_empty_file_uses_defaults(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("DOCBUNDLE_MODEL", raising=False)
    (tmp_path / ".docbundle.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).gemini.model == DEFAULT_MODEL


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".docbundle.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".docbundle.yml").write_text("gemini: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        load_config(tmp_path)
    assert ".docbundle.yml" in str(excinfo.value)
