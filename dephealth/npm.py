"""npm commands used by the health checker."""

from __future__ import annotations

from pathlib import Path

from dephealth.commands import CommandResult, CommandRunner

AUDIT_LEVELS = ("info", "low", "moderate", "high", "critical")


class NpmClient:
    """The three npm invocations the checker relies on."""

    def __init__(
        self,
        runner: CommandRunner | None = None,
        npm_path: str = "npm",
        audit_level: str = "high",
    ) -> None:
        if audit_level not in AUDIT_LEVELS:
            raise ValueError(
                f"Unknown audit level '{audit_level}', expected one of {', '.join(AUDIT_LEVELS)}"
            )
        self.runner = runner or CommandRunner()
        self.npm_path = npm_path
        self.audit_level = audit_level

    def list_installed(self, cwd: Path) -> CommandResult:
        """Top-level dependency listing; non-zero means something is missing or invalid."""
        return self.runner.run([self.npm_path, "ls", "--depth=0"], cwd, stream=False)

    def install(self, cwd: Path) -> CommandResult:
        """Reinstall with peer-dependency conflicts tolerated."""
        return self.runner.run([self.npm_path, "install", "--legacy-peer-deps"], cwd, stream=True)

    def audit(self, cwd: Path) -> CommandResult:
        return self.runner.run(
            [self.npm_path, "audit", f"--audit-level={self.audit_level}"], cwd, stream=True
        )
