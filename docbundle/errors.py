"""Error kinds raised across docbundle components."""

from __future__ import annotations


class DocBundleError(RuntimeError):
    """Base class for docbundle failures that are reported to the user."""

    @property
    def kind(self) -> str:
        return type(self).__name__


class ConfigError(DocBundleError):
    """Raised when the configuration file cannot be parsed."""


class MissingCredential(DocBundleError):
    """No API key is configured for the generation service."""


class EmptyGenerationResult(DocBundleError):
    """The generation service answered without any text."""


class UnknownTaskKind(DocBundleError, KeyError):
    """The requested task key is not present in the task registry."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Unknown task kind: {key!r}")
        self.key = key

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0])


class NoWorkspaceOpen(DocBundleError):
    """There is no workspace directory to write documentation into."""


class NoFilesSelected(DocBundleError):
    """Generation was requested without any input files."""


class GenerationInProgress(DocBundleError):
    """Another generation is already running on the same orchestrator."""


class GenerationRequestError(DocBundleError):
    """The call to the generation service failed."""


class FileConversionFailure(DocBundleError):
    """A single file could not be converted to text."""

    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"Failed to convert {path}: {reason}")
        self.path = path
        self.reason = reason


class DirectoryNotFound(DocBundleError, FileNotFoundError):
    """The directory to list does not exist or is not a directory."""


__all__ = [
    "ConfigError",
    "DirectoryNotFound",
    "DocBundleError",
    "EmptyGenerationResult",
    "FileConversionFailure",
    "GenerationInProgress",
    "GenerationRequestError",
    "MissingCredential",
    "NoFilesSelected",
    "NoWorkspaceOpen",
    "UnknownTaskKind",
]
