"""Narrow merge-triggered workflows to those relevant to a pull request's changes.

Exclude patterns (`!`-prefixed entries of `trigger_paths`) are collected by the
classifier but are NOT applied here: a changed file under an excluded path can
still make a workflow relevant. Tests pin this behaviour.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from functools import lru_cache

from workflow_merge_triggers.models import AnalyzedWorkflow, TriggerAnalysis

logger = logging.getLogger(__name__)

EXCLUDE_PREFIX = "!"


@lru_cache(maxsize=512)
def _path_regex(pattern: str) -> re.Pattern[str]:
    return re.compile(re.escape(pattern).replace(r"\*", ".*"))


def path_matches(file_path: str, pattern: str) -> bool:
    """Match a changed file path against a single path pattern.

    Patterns with `*` are evaluated as anchored globs where `*` spans any run
    of characters (including `/`). Plain patterns match the exact path or any
    path inside that directory.
    """

    if "*" in pattern:
        return _path_regex(pattern).fullmatch(file_path) is not None
    return file_path == pattern or file_path.startswith(f"{pattern}/")


def positive_patterns(trigger_paths: Iterable[str]) -> list[str]:
    return [p for p in trigger_paths if not p.startswith(EXCLUDE_PREFIX)]


def is_relevant(analysis: TriggerAnalysis | None, changed_paths: Sequence[str]) -> bool:
    """Return True if the workflow runs on merge and its path filters see a change."""

    if analysis is None or not analysis.is_triggered_on_default_branch:
        return False
    if not analysis.trigger_paths:
        return True

    patterns = positive_patterns(analysis.trigger_paths)
    return any(path_matches(path, pattern) for path in changed_paths for pattern in patterns)


def filter_by_changed_files(
    workflows: Sequence[AnalyzedWorkflow], changed_paths: Sequence[str]
) -> list[AnalyzedWorkflow]:
    """Keep the workflows that will run on merge and are relevant to `changed_paths`.

    Input order is preserved.
    """

    logger.debug(
        "Filtering workflows by changed files", extra={"changed_files": len(changed_paths)}
    )
    kept = [w for w in workflows if is_relevant(w.analysis, changed_paths)]
    logger.info(
        "Pull request relevance filter applied",
        extra={"workflows": len(workflows), "relevant": len(kept)},
    )
    return kept
