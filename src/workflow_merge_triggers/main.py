"""CLI entrypoint for the workflow merge-trigger analyser.

Reads workflow definitions from a local checkout and reports which workflows
run once a change is merged into the default branch, optionally narrowed to
the files a pull request changes.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from workflow_merge_triggers import __version__
from workflow_merge_triggers.config import AnalyzerSettings
from workflow_merge_triggers.logging import configure_logging
from workflow_merge_triggers.models import PullRequestFile, changed_paths
from workflow_merge_triggers.pipeline import (
    analyze_pull_request,
    analyze_workflows,
    select_merge_triggered,
)
from workflow_merge_triggers.report import AnalysisReport
from workflow_merge_triggers.sources import load_workflow_documents, read_changed_files

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_NO_WORKFLOWS = 5


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--repo-root",
        default=".",
        help="Path to the repository checkout (defaults to the current directory)",
    )
    parser.add_argument(
        "--default-branch",
        default=None,
        help="Repository default branch (defaults to WORKFLOW_DEFAULT_BRANCH or 'main')",
    )
    parser.add_argument(
        "--workflows-dir",
        default=None,
        help="Workflow directory relative to the repo root (defaults to .github/workflows)",
    )
    parser.add_argument("--json", action="store_true", help="Emit a JSON report")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workflow-merge-triggers",
        description="Report which CI workflows run when a change is merged into the default branch",
    )
    parser.add_argument(
        "--version", action="version", version=f"workflow-merge-triggers {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser(
        "analyze", help="Classify every workflow in the repository"
    )
    _add_common_arguments(analyze)
    analyze.add_argument(
        "--merge-triggered-only",
        action="store_true",
        help="Only list workflows that run when a change reaches the default branch",
    )

    pull_request = subparsers.add_parser(
        "pull-request",
        help="List workflows that run on merge and are relevant to a pull request's changes",
    )
    _add_common_arguments(pull_request)
    pull_request.add_argument(
        "--changed-file",
        action="append",
        default=[],
        dest="changed_files",
        help="A changed file path (repeatable)",
    )
    pull_request.add_argument(
        "--changed-files-from",
        default=None,
        help=(
            "Read changed files from a file ('-' for stdin): newline-separated paths "
            "or a JSON list of pull request file objects"
        ),
    )

    return parser


def _print_report(report: AnalysisReport, *, as_json: bool) -> None:
    if as_json:
        print(report.model_dump_json(indent=2))
    else:
        print(report.render_text())


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = AnalyzerSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_USAGE

    configure_logging(settings.log_level)

    repo_root = Path(args.repo_root)
    default_branch = (args.default_branch or settings.default_branch).strip()
    workflows_dir = Path(args.workflows_dir) if args.workflows_dir else settings.workflows_dir

    try:
        if not default_branch:
            print("--default-branch must not be empty", file=sys.stderr)
            return EXIT_USAGE

        documents = load_workflow_documents(repo_root, workflows_dir)
        if not documents:
            print(f"No workflow files found in {repo_root / workflows_dir}")
            return EXIT_NO_WORKFLOWS

        if args.command == "analyze":
            analyzed = analyze_workflows(
                documents, default_branch, max_workers=settings.max_workers
            )
            if args.merge_triggered_only:
                analyzed = select_merge_triggered(analyzed)

            report = AnalysisReport.build(default_branch=default_branch, workflows=analyzed)
            _print_report(report, as_json=args.json)
            return EXIT_OK

        if args.command == "pull-request":
            files = [PullRequestFile(filename=p) for p in args.changed_files]
            if args.changed_files_from:
                files.extend(read_changed_files(args.changed_files_from))
            if not files:
                print(
                    "Provide changed files via --changed-file or --changed-files-from",
                    file=sys.stderr,
                )
                return EXIT_USAGE

            paths = changed_paths(files)
            relevant = analyze_pull_request(
                documents, default_branch, paths, max_workers=settings.max_workers
            )

            report = AnalysisReport.build(
                default_branch=default_branch, workflows=relevant, changed_files=paths
            )
            _print_report(report, as_json=args.json)
            return EXIT_OK

        logger.error("Unknown command", extra={"command": args.command})
        return EXIT_USAGE

    except ValueError as e:
        logger.warning(str(e))
        print(str(e), file=sys.stderr)
        return EXIT_USAGE

    except Exception:
        logger.exception("Command failed")
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
