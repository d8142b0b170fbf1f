"""Classify when a workflow runs relative to the repository's default branch.

The classifier answers one question per workflow: can this workflow fire as a
direct consequence of a change landing on the default branch (a push to it,
or a pull request targeting it)? Along the way it records which events,
branch patterns and path patterns were involved so that a second stage can
check relevance against a pull request's changed files.

Classification is a pure function of `(trigger, default_branch)`. Documents
that cannot be analysed produce an explicit `Unparseable` outcome, which
`analyze_workflow` collapses into the all-empty, not-triggered analysis.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

import yaml

from workflow_merge_triggers.analysis.patterns import MATCH_ALL, matches
from workflow_merge_triggers.analysis.triggers import (
    EventConfig,
    Trigger,
    find_trigger_declaration,
    normalize_trigger,
)
from workflow_merge_triggers.models import EMPTY_ANALYSIS, TriggerAnalysis, WorkflowDocument

logger = logging.getLogger(__name__)

PUSH_EVENT = "push"
PULL_REQUEST_EVENTS = frozenset({"pull_request", "pull_request_target"})


class UnparseableReason(str, Enum):
    INPUT_UNAVAILABLE = "input_unavailable"
    INVALID_YAML = "invalid_yaml"
    NOT_A_MAPPING = "not_a_mapping"
    MISSING_TRIGGER = "missing_trigger"


@dataclass(frozen=True, slots=True)
class Parsed:
    analysis: TriggerAnalysis


@dataclass(frozen=True, slots=True)
class Unparseable:
    reason: UnparseableReason
    detail: str = ""


ParseOutcome = Parsed | Unparseable


@dataclass(slots=True)
class _AnalysisBuilder:
    triggered: bool = False
    events: list[str] = field(default_factory=list)
    branches: list[str] = field(default_factory=list)
    paths: list[str] = field(default_factory=list)

    def build(self) -> TriggerAnalysis:
        return TriggerAnalysis(
            is_triggered_on_default_branch=self.triggered,
            trigger_events=tuple(self.events),
            trigger_branches=tuple(self.branches),
            trigger_paths=tuple(self.paths),
        )


def _targets_default_branch(
    config: EventConfig | None, default_branch: str, branches_out: list[str]
) -> bool:
    """Record the declared branch patterns and report whether one covers the default branch.

    Only the `branches` filter is consulted; an event without it does not count.
    """

    if config is None or config.branches is None:
        return False

    branches_out.extend(config.branches)
    if default_branch in config.branches:
        return True
    return any(matches(default_branch, pattern) for pattern in config.branches)


def _collect_paths(config: EventConfig, paths_out: list[str]) -> None:
    if config.paths is not None:
        paths_out.extend(config.paths)
    if config.paths_ignore is not None:
        paths_out.extend(f"!{p}" for p in config.paths_ignore)
    if config.paths is None and config.paths_ignore is None:
        paths_out.append(MATCH_ALL)


def classify(trigger: Trigger | None, default_branch: str) -> TriggerAnalysis:
    """Classify a normalised trigger declaration against the default branch."""

    if trigger is None:
        return EMPTY_ANALYSIS

    builder = _AnalysisBuilder()
    for event, config in trigger.events():
        builder.events.append(event)

        if event == PUSH_EVENT and config is None:
            # Unfiltered push: every branch, every path.
            builder.triggered = True
            builder.branches.append(MATCH_ALL)
            builder.paths.append(MATCH_ALL)
            continue

        if event != PUSH_EVENT and event not in PULL_REQUEST_EVENTS:
            continue

        if _targets_default_branch(config, default_branch, builder.branches):
            assert config is not None
            builder.triggered = True
            _collect_paths(config, builder.paths)

    return builder.build()


def parse_workflow(document: WorkflowDocument, default_branch: str) -> ParseOutcome:
    """Parse a workflow document and classify its trigger declaration."""

    if document.error:
        return Unparseable(UnparseableReason.INPUT_UNAVAILABLE, document.content)

    try:
        loaded = yaml.safe_load(document.content)
    except yaml.YAMLError as e:
        return Unparseable(UnparseableReason.INVALID_YAML, str(e))

    if not isinstance(loaded, Mapping):
        return Unparseable(UnparseableReason.NOT_A_MAPPING)

    trigger = normalize_trigger(find_trigger_declaration(loaded))
    if trigger is None:
        return Unparseable(UnparseableReason.MISSING_TRIGGER)

    return Parsed(classify(trigger, default_branch))


def analyze_workflow(document: WorkflowDocument, default_branch: str) -> TriggerAnalysis:
    """Return the trigger analysis for one workflow.

    Never raises: any failure yields the not-triggered analysis so a single bad
    workflow cannot block its siblings.
    """

    try:
        outcome = parse_workflow(document, default_branch)
    except Exception:
        logger.exception(
            "Unexpected error while analysing workflow",
            extra={"workflow": document.workflow.path},
        )
        return EMPTY_ANALYSIS

    if isinstance(outcome, Unparseable):
        log = logger.warning if outcome.reason is UnparseableReason.INVALID_YAML else logger.debug
        log(
            "Workflow has no usable trigger declaration",
            extra={
                "workflow": document.workflow.path,
                "reason": outcome.reason.value,
                "detail": outcome.detail,
            },
        )
        return EMPTY_ANALYSIS

    return outcome.analysis
