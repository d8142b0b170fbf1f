"""Read analysis inputs from a local checkout.

This is the only module that touches the filesystem. A workflow file that
cannot be read still yields a `WorkflowDocument`, flagged with `error=True`
and carrying a placeholder message, so its siblings are analysed as usual.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import TextIO

import yaml

from workflow_merge_triggers.models import PullRequestFile, WorkflowDescriptor, WorkflowDocument

logger = logging.getLogger(__name__)

DEFAULT_WORKFLOWS_DIR = Path(".github/workflows")
WORKFLOW_SUFFIXES = frozenset({".yml", ".yaml"})


def discover_workflow_files(workflows_dir: Path) -> list[Path]:
    """Return workflow definition files in a stable (filename) order."""

    if not workflows_dir.is_dir():
        return []

    candidates = [
        p for p in workflows_dir.iterdir() if p.is_file() and p.suffix in WORKFLOW_SUFFIXES
    ]
    return sorted(candidates, key=lambda p: p.name)


def _relative_posix(path: Path, repo_root: Path) -> str:
    try:
        return path.relative_to(repo_root).as_posix()
    except ValueError:
        return path.as_posix()


def _modified_at(path: Path) -> datetime | None:
    try:
        return datetime.fromtimestamp(path.stat().st_mtime, tz=UTC)
    except OSError:
        return None


def _workflow_name(content: str, fallback: str) -> str:
    """Return the workflow's `name:` key, or `fallback` when it has none."""

    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError:
        return fallback
    if isinstance(document, Mapping):
        name = document.get("name")
        if isinstance(name, str) and name.strip():
            return name.strip()
    return fallback


def load_workflow_documents(
    repo_root: Path, workflows_dir: Path = DEFAULT_WORKFLOWS_DIR
) -> list[WorkflowDocument]:
    """Load every workflow under `workflows_dir` (relative to `repo_root` unless absolute).

    Workflows are named by their `name:` key, or by their repository-relative
    path when they declare none or cannot be read.
    """

    directory = workflows_dir if workflows_dir.is_absolute() else repo_root / workflows_dir
    documents: list[WorkflowDocument] = []

    for index, path in enumerate(discover_workflow_files(directory)):
        relative = _relative_posix(path, repo_root)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(
                "Failed to read workflow file", extra={"path": relative, "error": str(e)}
            )
            documents.append(
                WorkflowDocument(
                    workflow=WorkflowDescriptor(
                        name=relative, path=relative, updated_at=_modified_at(path)
                    ),
                    content=f"Failed to read workflow file: {e}",
                    index=index,
                    error=True,
                )
            )
            continue

        descriptor = WorkflowDescriptor(
            name=_workflow_name(content, relative),
            path=relative,
            updated_at=_modified_at(path),
        )
        documents.append(WorkflowDocument(workflow=descriptor, content=content, index=index))

    logger.debug(
        "Workflow files loaded", extra={"directory": str(directory), "count": len(documents)}
    )
    return documents


def _load_json_list(text: str) -> list[object] | None:
    if not text.startswith("["):
        return None
    try:
        raw = json.loads(text)
    except json.JSONDecodeError:
        return None
    return raw if isinstance(raw, list) else None


def parse_changed_files(text: str) -> list[PullRequestFile]:
    """Parse a changed-file list.

    Accepts either newline-separated paths (e.g. `git diff --name-only` output)
    or a JSON list as returned by the pull request files API, whose items are
    objects with a `filename` key (plain strings are accepted too). Text that
    does not decode as a JSON list is read line by line, so paths such as
    `[slug].tsx` are kept as-is.

    Raises:
        ValueError: if a JSON list holds an entry without a usable filename.
    """

    stripped = text.strip()
    if not stripped:
        return []

    raw = _load_json_list(stripped)
    if raw is not None:
        files: list[PullRequestFile] = []
        for item in raw:
            if isinstance(item, str):
                files.append(PullRequestFile(filename=item))
            elif isinstance(item, dict):
                files.append(PullRequestFile.from_json(item))
            else:
                raise ValueError(f"Unexpected changed file entry: {item!r}")
        return files

    lines = (line.strip() for line in stripped.splitlines())
    return [PullRequestFile(filename=line) for line in lines if line]


def read_changed_files(source: str, *, stdin: TextIO | None = None) -> list[PullRequestFile]:
    """Read a changed-file list from a path, or from stdin when `source` is "-"."""

    if source == "-":
        return parse_changed_files((stdin or sys.stdin).read())
    return parse_changed_files(Path(source).read_text(encoding="utf-8"))
