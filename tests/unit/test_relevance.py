"""Unit tests for the pull request relevance filter."""

from __future__ import annotations

from workflow_merge_triggers.analysis.relevance import (
    filter_by_changed_files,
    is_relevant,
    path_matches,
)
from workflow_merge_triggers.models import (
    AnalyzedWorkflow,
    TriggerAnalysis,
    WorkflowDescriptor,
    WorkflowDocument,
)


def _workflow(
    index: int, analysis: TriggerAnalysis | None, name: str = "ci.yml"
) -> AnalyzedWorkflow:
    doc = WorkflowDocument(
        workflow=WorkflowDescriptor(name=name, path=f".github/workflows/{name}"),
        content="",
        index=index,
    )
    return AnalyzedWorkflow(document=doc, analysis=analysis)


SRC_ONLY = TriggerAnalysis(
    is_triggered_on_default_branch=True,
    trigger_events=("push",),
    trigger_branches=("main",),
    trigger_paths=("src/**", "!src/generated/**"),
)


def test_changed_file_under_included_path_is_relevant() -> None:
    assert is_relevant(SRC_ONLY, ["src/app.ts"])


def test_changed_file_outside_included_paths_is_not_relevant() -> None:
    assert not is_relevant(SRC_ONLY, ["docs/readme.md"])


def test_exclude_patterns_do_not_veto_a_match() -> None:
    # Excluded paths are reported but not enforced: this still counts as relevant.
    assert is_relevant(SRC_ONLY, ["src/generated/x.ts"])


def test_only_exclude_patterns_never_match() -> None:
    analysis = TriggerAnalysis(
        is_triggered_on_default_branch=True,
        trigger_events=("pull_request",),
        trigger_branches=("main",),
        trigger_paths=("!docs/**",),
    )

    assert not is_relevant(analysis, ["src/app.py", "docs/index.md"])


def test_missing_or_untriggered_analysis_is_dropped() -> None:
    assert not is_relevant(None, ["src/app.ts"])
    assert not is_relevant(TriggerAnalysis(trigger_events=("push",)), ["src/app.ts"])


def test_triggered_without_path_filters_is_always_relevant() -> None:
    analysis = TriggerAnalysis(
        is_triggered_on_default_branch=True,
        trigger_events=("pull_request",),
        trigger_branches=("main",),
    )

    assert is_relevant(analysis, ["anything.txt"])
    assert is_relevant(analysis, [])


def test_match_all_sentinel() -> None:
    analysis = TriggerAnalysis(
        is_triggered_on_default_branch=True,
        trigger_events=("push",),
        trigger_branches=("*",),
        trigger_paths=("*",),
    )

    assert is_relevant(analysis, ["deep/nested/file.py"])
    assert not is_relevant(analysis, [])


def test_path_matches_wildcards() -> None:
    assert path_matches("src/app.ts", "src/**")
    assert path_matches("docs/guide/intro.md", "*.md")
    assert not path_matches("docs/guide/intro.mdx", "*.md")
    assert not path_matches("srcXapp.ts", "src.*")
    assert path_matches("src.ts", "src.*")


def test_path_matches_plain_patterns_by_equality_or_directory() -> None:
    assert path_matches("README.md", "README.md")
    assert path_matches("docs/a.md", "docs")
    assert not path_matches("docs2/a.md", "docs")
    assert not path_matches("file1.txt", "file?.txt")


def test_filter_preserves_order_and_drops_irrelevant() -> None:
    docs_only = TriggerAnalysis(
        is_triggered_on_default_branch=True,
        trigger_events=("push",),
        trigger_branches=("main",),
        trigger_paths=("docs/**",),
    )
    workflows = [
        _workflow(0, SRC_ONLY, "src.yml"),
        _workflow(1, docs_only, "docs.yml"),
        _workflow(2, None, "broken.yml"),
        _workflow(3, SRC_ONLY, "src-again.yml"),
    ]

    kept = filter_by_changed_files(workflows, ["src/main.py"])

    assert [w.workflow.name for w in kept] == ["src.yml", "src-again.yml"]
