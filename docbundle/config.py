"""Configuration loading for docbundle (.docbundle.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".docbundle.yml"
DEFAULT_MODEL = "gemini-2.0-flash"
ENV_MODEL_KEY = "DOCBUNDLE_MODEL"

DEFAULT_INCLUDE_SUFFIXES: tuple[str, ...] = (".spec.ts", ".test.ts", ".spec.js", ".test.js")
DEFAULT_EXCLUDE_GLOBS: tuple[str, ...] = ("**/node_modules/**",)
DEFAULT_TEXT_SUFFIXES: tuple[str, ...] = (".txt", ".md", ".ts", ".js")


@dataclass
class GeminiConfig:
    """Generation service settings."""

    model: str = DEFAULT_MODEL
    temperature: Optional[float] = None
    api_key_env: str = "GEMINI_API_KEY"


@dataclass
class DiscoveryConfig:
    """Which workspace files are offered in the file picker."""

    include_suffixes: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE_SUFFIXES))
    exclude_globs: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_GLOBS))


@dataclass
class ConvertConfig:
    """Classifier/converter behaviour."""

    text_suffixes: List[str] = field(default_factory=lambda: list(DEFAULT_TEXT_SUFFIXES))
    always_include: List[str] = field(default_factory=list)
    keep_originals: bool = False


@dataclass
class DocBundleConfig:
    """Represents the settings defined in .docbundle.yml."""

    root: Path
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    convert: ConvertConfig = field(default_factory=ConvertConfig)
    output_dir: str = "documentation"


def load_config(config_path: Path) -> DocBundleConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    config = DocBundleConfig(root=root)
    if config_file.exists():
        data = _read_config(config_file)
        if not isinstance(data, dict):
            raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")
        _apply(config, data)

    env_model = os.getenv(ENV_MODEL_KEY)
    if env_model:
        config.gemini.model = env_model
    return config


def _apply(config: DocBundleConfig, data: Dict[str, Any]) -> None:
    gemini_data = _as_dict(data.get("gemini"))
    if gemini_data:
        config.gemini.model = _as_str(gemini_data.get("model")) or config.gemini.model
        config.gemini.temperature = _as_float(gemini_data.get("temperature"))
        config.gemini.api_key_env = (
            _as_str(gemini_data.get("api_key_env")) or config.gemini.api_key_env
        )

    discovery_data = _as_dict(data.get("discovery"))
    if discovery_data:
        if "include_suffixes" in discovery_data:
            config.discovery.include_suffixes = _as_str_list(discovery_data["include_suffixes"])
        if "exclude_globs" in discovery_data:
            config.discovery.exclude_globs = _as_str_list(discovery_data["exclude_globs"])

    convert_data = _as_dict(data.get("convert"))
    if convert_data:
        if "text_suffixes" in convert_data:
            config.convert.text_suffixes = [
                _normalise_suffix(item) for item in _as_str_list(convert_data["text_suffixes"])
            ]
        config.convert.always_include = _as_str_list(convert_data.get("always_include"))
        config.convert.keep_originals = bool(_as_bool(convert_data.get("keep_originals")))

    output_data = _as_dict(data.get("output"))
    directory = _as_str(output_data.get("directory")) if output_data else None
    if directory:
        config.output_dir = directory


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _normalise_suffix(value: str) -> str:
    value = value.strip().lower()
    return value if value.startswith(".") else f".{value}"


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "ConfigError",
    "ConvertConfig",
    "DiscoveryConfig",
    "DocBundleConfig",
    "GeminiConfig",
    "load_config",
]
