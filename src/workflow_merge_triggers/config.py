"""Configuration for the workflow merge-trigger analyser.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Command-line flags take precedence over these values.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalyzerSettings(BaseSettings):
    """Settings for the analyser CLI.

    Environment variables:
    - LOG_LEVEL                       (optional)
    - WORKFLOW_DEFAULT_BRANCH         (optional)
    - WORKFLOW_ANALYSIS_MAX_WORKERS   (optional)
    - WORKFLOWS_DIR                   (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `AnalyzerSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    default_branch: str = Field(
        default="main",
        validation_alias="WORKFLOW_DEFAULT_BRANCH",
        description="Default branch assumed when none is given on the command line",
    )

    max_workers: int = Field(
        default=8,
        gt=0,
        validation_alias="WORKFLOW_ANALYSIS_MAX_WORKERS",
        description="Thread pool size used to analyse workflows in parallel",
    )

    workflows_dir: Path = Field(
        default=Path(".github/workflows"),
        validation_alias="WORKFLOWS_DIR",
        description="Directory holding workflow definitions, relative to the repository root",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("default_branch")
    @classmethod
    def _require_branch_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("WORKFLOW_DEFAULT_BRANCH must not be empty")
        return value.strip()
