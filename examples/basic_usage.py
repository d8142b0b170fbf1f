#!/usr/bin/env python3
"""Programmatic analysis example.

This demonstrates using the analysis components directly:

* load workflow definitions from a local checkout
* classify which of them run when a change lands on the default branch
* narrow the result to the files a pull request changes

Changed files are passed as arguments (e.g. from `git diff --name-only`).
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from workflow_merge_triggers.config import AnalyzerSettings
from workflow_merge_triggers.logging import configure_logging
from workflow_merge_triggers.pipeline import analyze_pull_request
from workflow_merge_triggers.sources import load_workflow_documents


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List workflows a pull request will run on merge.")
    parser.add_argument("--repo-root", default=".", help="Path to the repository checkout")
    parser.add_argument("--default-branch", default="", help="Default branch (optional)")
    parser.add_argument("changed_files", nargs="+", help="Changed file paths")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = AnalyzerSettings()
    configure_logging(settings.log_level)

    documents = load_workflow_documents(Path(args.repo_root), settings.workflows_dir)
    default_branch = args.default_branch or settings.default_branch

    relevant = analyze_pull_request(
        documents, default_branch, args.changed_files, max_workers=settings.max_workers
    )
    if not relevant:
        print(f"No workflows will run when this change is merged into {default_branch}")
        return 0

    for item in relevant:
        assert item.analysis is not None
        print(f"{item.workflow.path}: events={', '.join(item.analysis.trigger_events)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
