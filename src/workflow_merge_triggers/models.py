"""Domain types shared by the analysis core and its collaborators."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class WorkflowDescriptor:
    """Identity of one CI workflow file."""

    name: str
    path: str
    state: str = "active"
    created_at: datetime | None = None
    updated_at: datetime | None = None
    html_url: str | None = None


@dataclass(frozen=True, slots=True)
class WorkflowDocument:
    """A workflow descriptor paired with its raw definition text.

    When the text could not be obtained, `content` holds a human-readable
    placeholder and `error` is True.
    """

    workflow: WorkflowDescriptor
    content: str
    index: int
    error: bool = False


@dataclass(frozen=True, slots=True)
class TriggerAnalysis:
    """When a workflow runs, relative to the repository's default branch.

    `trigger_branches` and `trigger_paths` use "*" to mean "all"; exclude path
    patterns carry a leading "!".
    """

    is_triggered_on_default_branch: bool = False
    trigger_events: tuple[str, ...] = ()
    trigger_branches: tuple[str, ...] = ()
    trigger_paths: tuple[str, ...] = ()

    def to_json(self) -> dict[str, object]:
        return {
            "is_triggered_on_default_branch": self.is_triggered_on_default_branch,
            "trigger_events": list(self.trigger_events),
            "trigger_branches": list(self.trigger_branches),
            "trigger_paths": list(self.trigger_paths),
        }


EMPTY_ANALYSIS = TriggerAnalysis()


@dataclass(frozen=True, slots=True)
class AnalyzedWorkflow:
    document: WorkflowDocument
    analysis: TriggerAnalysis | None

    @property
    def workflow(self) -> WorkflowDescriptor:
        return self.document.workflow


@dataclass(frozen=True, slots=True)
class PullRequestFile:
    """A file changed by a pull request."""

    filename: str

    @staticmethod
    def from_json(obj: Mapping[str, object]) -> PullRequestFile:
        filename = obj.get("filename")
        if not isinstance(filename, str) or not filename.strip():
            raise ValueError("Pull request file entry is missing 'filename'")
        return PullRequestFile(filename=filename)


def changed_paths(files: Iterable[PullRequestFile]) -> list[str]:
    """Return the repository-relative paths of the changed files, in order."""

    return [f.filename for f in files]
