"""Checker configuration — loaded from environment / .env file."""

from __future__ import annotations

from pydantic_settings import BaseSettings

DEFAULT_WORKSPACES = [
    "api",
    "client",
    "packages/data-provider",
    "packages/data-schemas",
    "packages/api",
    "packages/client",
]


class Settings(BaseSettings):
    """Settings for a dependency health run.

    Every field can be overridden with a ``DEPHEALTH_`` prefixed variable,
    e.g. ``DEPHEALTH_WORKSPACES='["api", "client"]'``.
    """

    model_config = {
        "env_prefix": "DEPHEALTH_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    # Workspaces checked after the root project, in this order
    workspaces: list[str] = list(DEFAULT_WORKSPACES)

    # Location check
    manifest_name: str = "package.json"
    required_workspace: str = "api"  # must have a manifest for the run to start

    # npm
    npm_path: str = "npm"  # assumes `npm` is on PATH
    audit_level: str = "high"  # low | moderate | high | critical
    command_timeout: int | None = None  # seconds, None = wait forever

    # Logging
    log_level: str = "WARNING"


settings = Settings()
