"""Run the classifier over a repository's workflows.

Two views are produced:
- per repository: every workflow paired with its analysis, or only the ones
  that run when a change lands on the default branch
- per pull request: the merge-triggered workflows whose path filters see at
  least one changed file

Classification is fanned out over a thread pool. Results are joined back in
document `index` order, never completion order.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

from workflow_merge_triggers.analysis.classifier import analyze_workflow
from workflow_merge_triggers.analysis.relevance import filter_by_changed_files
from workflow_merge_triggers.models import AnalyzedWorkflow, WorkflowDocument

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


def analyze_workflows(
    documents: Sequence[WorkflowDocument],
    default_branch: str,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[AnalyzedWorkflow]:
    """Classify every document against `default_branch`.

    Returns:
        One `AnalyzedWorkflow` per input document, ordered by `index`.
    """

    if max_workers <= 0:
        raise ValueError("max_workers must be a positive integer")
    if not documents:
        return []

    results: list[tuple[int, int, AnalyzedWorkflow]] = []
    with ThreadPoolExecutor(max_workers=min(max_workers, len(documents))) as pool:
        in_flight = {
            pool.submit(analyze_workflow, doc, default_branch): (position, doc)
            for position, doc in enumerate(documents)
        }
        for fut in as_completed(in_flight):
            position, doc = in_flight[fut]
            results.append(
                (doc.index, position, AnalyzedWorkflow(document=doc, analysis=fut.result()))
            )

    results.sort(key=lambda item: (item[0], item[1]))
    analyzed = [item[2] for item in results]

    logger.info(
        "Workflows analysed",
        extra={
            "default_branch": default_branch,
            "workflows": len(analyzed),
            "merge_triggered": sum(1 for w in analyzed if _is_merge_triggered(w)),
        },
    )
    return analyzed


def _is_merge_triggered(workflow: AnalyzedWorkflow) -> bool:
    return workflow.analysis is not None and workflow.analysis.is_triggered_on_default_branch


def select_merge_triggered(workflows: Sequence[AnalyzedWorkflow]) -> list[AnalyzedWorkflow]:
    """Keep only workflows that run when a change reaches the default branch."""

    return [w for w in workflows if _is_merge_triggered(w)]


def analyze_pull_request(
    documents: Sequence[WorkflowDocument],
    default_branch: str,
    changed_paths: Sequence[str],
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[AnalyzedWorkflow]:
    """Workflows that will run once the pull request is merged and touch its changes."""

    analyzed = analyze_workflows(documents, default_branch, max_workers=max_workers)
    return filter_by_changed_files(analyzed, changed_paths)
