"""Narrow interfaces to the host environment plus local implementations."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

from .logging import get_logger

CREDENTIALS_FILENAME = "credentials.json"


class FileSystem(Protocol):
    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, text: str) -> None: ...

    def make_dirs(self, path: Path) -> None: ...


class UserPrompt(Protocol):
    def info(self, message: str) -> None: ...

    def error(self, message: str, *, kind: str) -> None: ...


class SecretStore(Protocol):
    def get(self) -> Optional[str]: ...

    def set(self, value: str) -> None: ...


class LocalFileSystem:
    """UTF-8 file access on the local disk."""

    def read_text(self, path: Path) -> str:
        return Path(path).read_text(encoding="utf-8")

    def write_text(self, path: Path, text: str) -> None:
        Path(path).write_text(text, encoding="utf-8")

    def make_dirs(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)


class LoggingPrompt:
    """Reports user-facing messages through the docbundle logger."""

    def __init__(self) -> None:
        self.logger = get_logger("prompt")

    def info(self, message: str) -> None:
        self.logger.info(message)

    def error(self, message: str, *, kind: str) -> None:
        self.logger.error("%s: %s", kind, message)


@dataclass(frozen=True)
class PromptMessage:
    level: str
    message: str
    kind: Optional[str] = None


class RecordingPrompt:
    """Collects messages so they can be returned to a remote caller."""

    def __init__(self) -> None:
        self.messages: List[PromptMessage] = []

    def info(self, message: str) -> None:
        self.messages.append(PromptMessage(level="info", message=message))

    def error(self, message: str, *, kind: str) -> None:
        self.messages.append(PromptMessage(level="error", message=message, kind=kind))

    @property
    def errors(self) -> List[PromptMessage]:
        return [message for message in self.messages if message.level == "error"]


class EnvSecretStore:
    """Reads the API key from an environment variable."""

    def __init__(self, key: str = "GEMINI_API_KEY") -> None:
        self.key = key

    def get(self) -> Optional[str]:
        value = os.getenv(self.key)
        return value.strip() if value and value.strip() else None

    def set(self, value: str) -> None:
        os.environ[self.key] = value


def default_config_home() -> Path:
    base = os.getenv("XDG_CONFIG_HOME")
    return (Path(base) if base else Path.home() / ".config") / "docbundle"


class FileSecretStore:
    """Persists the API key in a user-only JSON file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or default_config_home() / CREDENTIALS_FILENAME

    def get(self) -> Optional[str]:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError):
            get_logger("secrets").warning("Ignoring unreadable credentials file %s", self.path)
            return None
        value = payload.get("api_key") if isinstance(payload, dict) else None
        return value if isinstance(value, str) and value.strip() else None

    def set(self, value: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"api_key": value}), encoding="utf-8")
        os.chmod(self.path, 0o600)


class ChainedSecretStore:
    """Looks the key up in order; writes go to the first store."""

    def __init__(self, stores: Sequence[SecretStore]) -> None:
        if not stores:
            raise ValueError("ChainedSecretStore needs at least one store")
        self.stores = list(stores)

    def get(self) -> Optional[str]:
        for store in self.stores:
            value = store.get()
            if value:
                return value
        return None

    def set(self, value: str) -> None:
        self.stores[0].set(value)


def default_secret_store(env_key: str = "GEMINI_API_KEY") -> SecretStore:
    return ChainedSecretStore([FileSecretStore(), EnvSecretStore(env_key)])


__all__ = [
    "ChainedSecretStore",
    "EnvSecretStore",
    "FileSecretStore",
    "FileSystem",
    "LocalFileSystem",
    "LoggingPrompt",
    "PromptMessage",
    "RecordingPrompt",
    "SecretStore",
    "UserPrompt",
    "default_secret_store",
]
