"""Tests for the FastAPI service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from docbundle.config import DocBundleConfig
from docbundle.host import RecordingPrompt
from docbundle.llm.gemini import GeminiRunner, GenerationRequest
from docbundle.orchestrator import Orchestrator
from docbundle.service import create_app


class _MemorySecrets:
    def __init__(self, value: Optional[str] = None) -> None:
        self.value = value

    def get(self) -> Optional[str]:
        return self.value

    def set(self, value: str) -> None:
        self.value = value


def _client(root: Path, *, key: Optional[str] = "k", response: Optional[str] = "# Docs") -> TestClient:
    def runner(request: GenerationRequest) -> Optional[str]:
        return response

    orchestrator = Orchestrator(
        root,
        config=DocBundleConfig(root=root),
        runner=GeminiRunner("m", runner=runner),
        secrets=_MemorySecrets(key),
        prompt=RecordingPrompt(),
    )
    return TestClient(create_app(lambda: orchestrator))


@pytest.fixture
def client(workspace) -> TestClient:
    workspace.write({"e2e/login.spec.ts": "test('login')", "e2e/cart.spec.ts": "test('cart')"})
    return _client(workspace.path())


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_tasks_endpoint(client: TestClient) -> None:
    response = client.get("/tasks")

    assert response.status_code == 200
    keys = [item["key"] for item in response.json()]
    assert keys == ["code", "testAutomation", "api", "component", "custom"]


def test_files_endpoint_returns_tree(client: TestClient, workspace) -> None:
    response = client.get("/files")

    assert response.status_code == 200
    tree = response.json()
    leaf = tree["e2e"]["login.spec.ts"]
    assert leaf["isFile"] is True
    assert leaf["path"].endswith("e2e/login.spec.ts")


def test_files_endpoint_missing_root(client: TestClient, tmp_path: Path) -> None:
    response = client.get("/files", params={"root": str(tmp_path / "missing")})

    assert response.status_code == 404
    assert response.json()["kind"] == "DirectoryNotFound"


def test_convert_endpoint(client: TestClient, workspace) -> None:
    workspace.write({"docs/a.txt": "x", "docs/Acme.txt": "y"})

    response = client.post(
        "/convert", json={"directory": str(workspace.path("docs")), "company": "Acme"}
    )

    assert response.status_code == 200
    assert response.json() == {"files": ["Acme.txt"]}


def test_generate_endpoint_writes_documentation(client: TestClient, workspace) -> None:
    files = [str(workspace.path("e2e/login.spec.ts")), str(workspace.path("e2e/cart.spec.ts"))]

    response = client.post("/generate", json={"files": files, "task": "testAutomation"})

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["path"].endswith("documentation/login.spec-combined.md")
    assert (workspace.path("documentation") / "login.spec-combined.md").exists()
    assert data["messages"][-1]["level"] == "info"


def test_generate_endpoint_reports_missing_key(workspace) -> None:
    workspace.write({"a.spec.ts": "test()"})
    client = _client(workspace.path(), key=None)

    response = client.post(
        "/generate", json={"files": [str(workspace.path("a.spec.ts"))], "task": "code"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "error"
    assert data["messages"] == [
        {
            "level": "error",
            "message": "Gemini API key is not configured. Save one with `docbundle set-key`.",
            "kind": "MissingCredential",
        }
    ]


def test_generate_endpoint_unknown_task(client: TestClient, workspace) -> None:
    response = client.post(
        "/generate",
        json={"files": [str(workspace.path("e2e/login.spec.ts"))], "task": "bogus"},
    )

    assert response.status_code == 400
    assert response.json()["kind"] == "UnknownTaskKind"


def test_api_key_endpoint(client: TestClient) -> None:
    response = client.post("/api-key", json={"value": "secret"})

    assert response.status_code == 200
    assert response.json() == {"status": "saved"}
    assert client.app.state.orchestrator.secrets.get() == "secret"


def test_api_key_endpoint_rejects_empty(client: TestClient) -> None:
    assert client.post("/api-key", json={"value": ""}).status_code == 422
    assert client.post("/api-key", json={"value": "   "}).status_code == 400


class _LoopAwareSecrets(_MemorySecrets):
    def __init__(self) -> None:
        super().__init__(None)
        self.saved_on_event_loop: Optional[bool] = None

    def set(self, value: str) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            self.saved_on_event_loop = False
        else:
            self.saved_on_event_loop = True
        super().set(value)


def test_api_key_is_stored_off_the_event_loop(workspace) -> None:
    root = workspace.path()
    secrets = _LoopAwareSecrets()
    orchestrator = Orchestrator(
        root,
        config=DocBundleConfig(root=root),
        secrets=secrets,
        prompt=RecordingPrompt(),
    )
    client = TestClient(create_app(lambda: orchestrator))

    assert client.post("/api-key", json={"value": "secret"}).status_code == 200
    assert secrets.get() == "secret"
    assert secrets.saved_on_event_loop is False
