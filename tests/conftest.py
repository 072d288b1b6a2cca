from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.workspace_builder import WorkspaceBuilder


@pytest.fixture
def workspace(tmp_path: Path) -> WorkspaceBuilder:
    """Provide a reusable workspace builder rooted at the pytest tmp_path."""
    return WorkspaceBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_docbundle_logger() -> Iterator[None]:
    # CLI tests call configure_logging(), which detaches the logger from caplog.
    yield
    logger = logging.getLogger("docbundle")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
