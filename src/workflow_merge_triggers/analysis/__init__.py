"""Workflow trigger classification engine.

Pure, synchronous functions only: no network, filesystem or global state.
"""

from workflow_merge_triggers.analysis.classifier import (
    Parsed,
    Unparseable,
    UnparseableReason,
    analyze_workflow,
    classify,
    parse_workflow,
)
from workflow_merge_triggers.analysis.patterns import matches
from workflow_merge_triggers.analysis.relevance import filter_by_changed_files, path_matches
from workflow_merge_triggers.analysis.triggers import normalize_trigger

__all__ = [
    "Parsed",
    "Unparseable",
    "UnparseableReason",
    "analyze_workflow",
    "classify",
    "filter_by_changed_files",
    "matches",
    "normalize_trigger",
    "parse_workflow",
    "path_matches",
]
