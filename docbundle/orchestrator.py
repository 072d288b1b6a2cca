"""Pipeline orchestration for listing, converting, and generating documentation."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import List, Optional, Sequence

from .config import DocBundleConfig, load_config
from .converters import FileConverter
from .discovery import discover_files
from .errors import (
    DocBundleError,
    EmptyGenerationResult,
    GenerationInProgress,
    MissingCredential,
    NoFilesSelected,
    NoWorkspaceOpen,
)
from .host import (
    FileSystem,
    LocalFileSystem,
    LoggingPrompt,
    SecretStore,
    UserPrompt,
    default_secret_store,
)
from .llm.gemini import GeminiRunner
from .logging import get_logger
from .models import FileDirectory, FileRecord, GenerationOutcome, TaskDefinition
from .postproc.markdown import clean_generated_markdown
from .prompting.constants import CUSTOM_TASK
from .prompting.dispatcher import PromptDispatcher
from .tree import build_file_tree


def output_filename(file_paths: Sequence[str]) -> str:
    """Name of the Markdown artifact for a selection of input files."""
    if not file_paths:
        raise NoFilesSelected("Please select at least one file.")
    stem = Path(file_paths[0]).stem
    suffix = "-combined" if len(file_paths) > 1 else ""
    return f"{stem}{suffix}.md"


class Orchestrator:
    """Coordinates the documentation flow against injected host services.

    Only one generation runs at a time per instance; a concurrent request is
    rejected with :class:`GenerationInProgress` rather than queued.
    """

    def __init__(
        self,
        workspace: Path | str | None = None,
        *,
        config: DocBundleConfig | None = None,
        dispatcher: PromptDispatcher | None = None,
        runner: GeminiRunner | None = None,
        secrets: SecretStore | None = None,
        filesystem: FileSystem | None = None,
        prompt: UserPrompt | None = None,
    ) -> None:
        self.workspace = Path(workspace).expanduser().resolve() if workspace else None
        if config is None:
            config = load_config(self.workspace) if self.workspace else DocBundleConfig(root=Path.cwd())
        self.config = config
        self.dispatcher = dispatcher or PromptDispatcher()
        self.runner = runner or GeminiRunner(
            config.gemini.model, temperature=config.gemini.temperature
        )
        self.secrets = secrets or default_secret_store(config.gemini.api_key_env)
        self.filesystem = filesystem or LocalFileSystem()
        self.prompt = prompt or LoggingPrompt()
        self.logger = get_logger("orchestrator")
        self._generation_lock = threading.Lock()

    def tasks(self) -> List[TaskDefinition]:
        return self.dispatcher.tasks()

    def list_files(self, root: Path | str | None = None) -> FileDirectory:
        """Scan the workspace (or ``root``) and return the picker tree."""
        scan_root = Path(root) if root else self._require_workspace()
        files = discover_files(
            scan_root,
            self.config.discovery.include_suffixes,
            self.config.discovery.exclude_globs,
        )
        self.logger.debug("Discovered %d candidate files under %s", len(files), scan_root)
        return build_file_tree(files)

    def convert_directory(
        self,
        directory: Path | str,
        company: str | None = None,
        *,
        keep_originals: bool | None = None,
    ) -> List[str]:
        """Normalise ``directory`` into text files and return their names."""
        settings = self.config.convert
        converter = FileConverter(
            text_suffixes=settings.text_suffixes,
            always_include=settings.always_include,
            keep_originals=settings.keep_originals if keep_originals is None else keep_originals,
        )
        return converter.list_convertible_files(directory, company)

    def save_api_key(self, value: str) -> None:
        cleaned = value.strip()
        if not cleaned:
            raise MissingCredential("API key cannot be empty")
        self.secrets.set(cleaned)
        self.prompt.info("Gemini API key saved successfully")

    def generate_documentation(
        self,
        file_paths: Sequence[str],
        task: str,
        custom_prompt: str | None = None,
        *,
        prompt: UserPrompt | None = None,
    ) -> Optional[GenerationOutcome]:
        """Render a prompt for the selected files and write the returned Markdown.

        Unknown task keys and concurrent calls raise. Every other failure is
        reported through the user prompt (``prompt`` overrides the instance one
        for this call) and ``None`` is returned.
        """
        if not (task == CUSTOM_TASK and custom_prompt and custom_prompt.strip()):
            self.dispatcher.get_task(task)

        if not self._generation_lock.acquire(blocking=False):
            raise GenerationInProgress("A documentation generation is already running")
        reporter = prompt or self.prompt
        try:
            return self._generate(list(file_paths), task, custom_prompt, reporter)
        except DocBundleError as exc:
            reporter.error(str(exc), kind=exc.kind)
            return None
        except Exception as exc:  # network and library failures end the run with one message
            self.logger.debug("Generation failed", exc_info=True)
            reporter.error(f"Failed to generate docs: {exc}", kind="GenerationRequestError")
            return None
        finally:
            self._generation_lock.release()

    def _generate(
        self,
        file_paths: List[str],
        task: str,
        custom_prompt: str | None,
        reporter: UserPrompt,
    ) -> GenerationOutcome:
        if not file_paths:
            raise NoFilesSelected("Please select at least one file.")
        api_key = self.secrets.get()
        if not api_key:
            raise MissingCredential(
                "Gemini API key is not configured. Save one with `docbundle set-key`."
            )
        workspace = self._require_workspace()

        reporter.info("Generating documentation with Gemini...")
        records = [
            FileRecord(name=Path(path).name, content=self.filesystem.read_text(Path(path)))
            for path in file_paths
        ]
        prompt_text = self.dispatcher.render(task, records, custom_prompt)
        self.logger.debug("Rendered %s prompt for %d files", task, len(records))

        documentation = clean_generated_markdown(self.runner.run(prompt_text, api_key=api_key))
        if not documentation:
            raise EmptyGenerationResult("No documentation received from Gemini.")

        doc_dir = workspace / self.config.output_dir
        self.filesystem.make_dirs(doc_dir)
        target = doc_dir / output_filename(file_paths)
        self.filesystem.write_text(target, documentation + "\n")
        self.logger.info("Documentation written to %s", target)
        reporter.info(f"Documentation saved to {self.config.output_dir}/{target.name}")
        return GenerationOutcome(path=target, task=task, files=file_paths)

    def _require_workspace(self) -> Path:
        if self.workspace is None or not self.workspace.is_dir():
            raise NoWorkspaceOpen("No workspace folder open.")
        return self.workspace


__all__ = ["Orchestrator", "output_filename"]
