"""Workflow Merge Triggers.

Determines which GitHub Actions workflows of a repository run once a pull
request is merged into the default branch, and which of them are relevant to
the files the pull request changes.
"""

__version__ = "0.1.0"

from workflow_merge_triggers.analysis import analyze_workflow, filter_by_changed_files
from workflow_merge_triggers.models import TriggerAnalysis, WorkflowDescriptor, WorkflowDocument
from workflow_merge_triggers.pipeline import analyze_pull_request, analyze_workflows

__all__ = [
    "__version__",
    "TriggerAnalysis",
    "WorkflowDescriptor",
    "WorkflowDocument",
    "analyze_pull_request",
    "analyze_workflow",
    "analyze_workflows",
    "filter_by_changed_files",
]
