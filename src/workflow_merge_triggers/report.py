"""Pydantic models for CLI report output."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from pydantic import BaseModel, Field

from workflow_merge_triggers.models import AnalyzedWorkflow


class WorkflowReport(BaseModel):
    index: int
    name: str
    path: str
    state: str
    updated_at: datetime | None = None
    html_url: str | None = None
    error: bool = False

    is_triggered_on_default_branch: bool = False
    trigger_events: list[str] = Field(default_factory=list)
    trigger_branches: list[str] = Field(default_factory=list)
    trigger_paths: list[str] = Field(default_factory=list)

    @classmethod
    def from_analyzed(cls, item: AnalyzedWorkflow) -> WorkflowReport:
        workflow = item.workflow
        analysis = item.analysis.to_json() if item.analysis is not None else {}
        return cls.model_validate(
            {
                "index": item.document.index,
                "name": workflow.name,
                "path": workflow.path,
                "state": workflow.state,
                "updated_at": workflow.updated_at,
                "html_url": workflow.html_url,
                "error": item.document.error,
                **analysis,
            }
        )


class AnalysisReport(BaseModel):
    default_branch: str
    changed_files: list[str] | None = None
    workflows: list[WorkflowReport] = Field(default_factory=list)

    @classmethod
    def build(
        cls,
        *,
        default_branch: str,
        workflows: Sequence[AnalyzedWorkflow],
        changed_files: Sequence[str] | None = None,
    ) -> AnalysisReport:
        return cls(
            default_branch=default_branch,
            changed_files=list(changed_files) if changed_files is not None else None,
            workflows=[WorkflowReport.from_analyzed(w) for w in workflows],
        )

    def render_text(self) -> str:
        if not self.workflows:
            return "No matching workflows"

        lines: list[str] = []
        for w in self.workflows:
            marker = "x" if w.is_triggered_on_default_branch else " "
            lines.append(f"[{marker}] {w.name} ({w.path})")
            if w.error:
                lines.append("    (workflow definition unavailable)")
                continue
            lines.append(f"    events:   {', '.join(w.trigger_events) or '-'}")
            lines.append(f"    branches: {', '.join(w.trigger_branches) or '-'}")
            lines.append(f"    paths:    {', '.join(w.trigger_paths) or '-'}")
        return "\n".join(lines)
