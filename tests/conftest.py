"""Test configuration and fixtures."""

from __future__ import annotations

import logging
import textwrap
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from workflow_merge_triggers.logging import JsonFormatter
from workflow_merge_triggers.models import WorkflowDescriptor, WorkflowDocument

SETTINGS_ENV_VARS = (
    "LOG_LEVEL",
    "WORKFLOW_DEFAULT_BRANCH",
    "WORKFLOW_ANALYSIS_MAX_WORKERS",
    "WORKFLOWS_DIR",
)


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """The CLI reconfigures root logging; undo that after each test."""

    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler.formatter, JsonFormatter):
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Isolate settings from the developer's environment and any `.env` file."""

    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def make_document() -> Callable[..., WorkflowDocument]:
    """Build a `WorkflowDocument` from inline YAML."""

    def _make(
        content: str,
        *,
        index: int = 0,
        name: str = "ci.yml",
        error: bool = False,
    ) -> WorkflowDocument:
        return WorkflowDocument(
            workflow=WorkflowDescriptor(name=name, path=f".github/workflows/{name}"),
            content=textwrap.dedent(content),
            index=index,
            error=error,
        )

    return _make


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    (root / ".github" / "workflows").mkdir(parents=True)
    return root


@pytest.fixture
def write_workflow(repo_root: Path) -> Callable[[str, str], Path]:
    """Write a workflow file into the temporary repository."""

    def _write(filename: str, content: str) -> Path:
        path = repo_root / ".github" / "workflows" / filename
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write
