"""FastAPI application exposing docbundle operations over HTTP."""

from __future__ import annotations

import asyncio
from functools import partial
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..errors import DirectoryNotFound, DocBundleError, GenerationInProgress, UnknownTaskKind
from ..host import RecordingPrompt
from ..orchestrator import Orchestrator
from ..tree import tree_to_dict


class HealthResponse(BaseModel):
    status: str


class TaskInfo(BaseModel):
    key: str
    name: str
    description: str


class ConvertRequest(BaseModel):
    directory: str
    company: Optional[str] = None


class ConvertResponse(BaseModel):
    files: List[str]


class GenerateRequest(BaseModel):
    files: List[str]
    task: str
    custom_prompt: Optional[str] = None


class MessageModel(BaseModel):
    level: str
    message: str
    kind: Optional[str] = None


class GenerateResponse(BaseModel):
    status: str
    path: Optional[str] = None
    messages: List[MessageModel] = Field(default_factory=list)


class ApiKeyRequest(BaseModel):
    value: str = Field(min_length=1)


class ApiKeyResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator(Path.cwd())


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application that backs the file picker.

    A single orchestrator serves every request so its generation lock is
    shared between concurrent calls.
    """
    app = FastAPI(title="DocBundle Service", version="0.1.0")
    orchestrator = orchestrator_factory()
    app.state.orchestrator = orchestrator

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/tasks", response_model=List[TaskInfo])
    async def list_tasks() -> List[TaskInfo]:
        return [
            TaskInfo(key=task.key, name=task.name, description=task.description)
            for task in orchestrator.tasks()
        ]

    @app.get("/files")
    async def list_files(root: Optional[str] = None) -> Dict[str, Any]:
        tree = await asyncio.to_thread(orchestrator.list_files, root)
        return tree_to_dict(tree)

    @app.post("/convert", response_model=ConvertResponse)
    async def convert(payload: ConvertRequest) -> ConvertResponse:
        names = await asyncio.to_thread(
            orchestrator.convert_directory, payload.directory, payload.company
        )
        return ConvertResponse(files=names)

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(payload: GenerateRequest) -> GenerateResponse:
        recorder = RecordingPrompt()
        outcome = await asyncio.to_thread(
            partial(
                orchestrator.generate_documentation,
                payload.files,
                payload.task,
                payload.custom_prompt,
                prompt=recorder,
            )
        )
        messages = [
            MessageModel(level=item.level, message=item.message, kind=item.kind)
            for item in recorder.messages
        ]
        if outcome is None:
            return GenerateResponse(status="error", messages=messages)
        return GenerateResponse(status="ok", path=str(outcome.path), messages=messages)

    @app.post("/api-key", response_model=ApiKeyResponse)
    async def save_api_key(payload: ApiKeyRequest) -> ApiKeyResponse:
        await asyncio.to_thread(orchestrator.save_api_key, payload.value)
        return ApiKeyResponse(status="saved")

    @app.exception_handler(DirectoryNotFound)
    async def directory_not_found_handler(_: Any, exc: DirectoryNotFound) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc), "kind": exc.kind})

    @app.exception_handler(UnknownTaskKind)
    async def unknown_task_handler(_: Any, exc: UnknownTaskKind) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc), "kind": exc.kind})

    @app.exception_handler(GenerationInProgress)
    async def in_progress_handler(_: Any, exc: GenerationInProgress) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc), "kind": exc.kind})

    @app.exception_handler(DocBundleError)
    async def docbundle_error_handler(_: Any, exc: DocBundleError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc), "kind": exc.kind})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000, workspace: str | None = None
) -> None:  # pragma: no cover - integration path
    import uvicorn

    root = Path(workspace or ".").expanduser().resolve()
    app = create_app(lambda: Orchestrator(root))
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service"]
