"""Health checker — probes each workspace, repairs once, then audits.

Workspaces are processed strictly one after another: the root project first,
then the configured list in order, then a single security audit. Installs
mutate shared lockfile state, so nothing here runs in parallel.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from dephealth.commands import CommandResult
from dephealth.npm import NpmClient
from dephealth.reporter import ConsoleReporter
from dephealth.workspaces import ROOT_WORKSPACE, Workspace

logger = logging.getLogger(__name__)


# ── Models ───────────────────────────────────────────────────────────────────


class WorkspaceStatus(str, Enum):
    NOT_CHECKED = "not_checked"
    SKIPPED = "skipped"
    RESOLVED = "resolved"
    REPAIRED = "repaired"
    REPAIR_FAILED = "repair_failed"


class AuditStatus(str, Enum):
    NOT_RUN = "not_run"
    PASSED = "passed"
    VULNERABLE = "vulnerable"


@dataclass
class WorkspaceResult:
    """Final state of one workspace within a run."""

    workspace: Workspace
    status: WorkspaceStatus = WorkspaceStatus.NOT_CHECKED
    probe: CommandResult | None = None
    install: CommandResult | None = None
    timestamp: str = ""

    def __post_init__(self) -> None:
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat()


@dataclass
class AuditResult:
    status: AuditStatus = AuditStatus.NOT_RUN
    command: CommandResult | None = None


@dataclass
class HealthReport:
    """Everything one run observed. Results are in visiting order."""

    results: list[WorkspaceResult] = field(default_factory=list)
    audit: AuditResult = field(default_factory=AuditResult)

    def counts(self) -> dict[WorkspaceStatus, int]:
        return dict(Counter(r.status for r in self.results))

    def get(self, name: str) -> WorkspaceResult | None:
        return next((r for r in self.results if r.workspace.name == name), None)


# ── Checker ──────────────────────────────────────────────────────────────────


class DependencyHealthChecker:
    """Runs the probe → repair sequence for the root and each workspace."""

    def __init__(
        self,
        root: Path,
        workspaces: Sequence[Workspace],
        npm: NpmClient | None = None,
        reporter: ConsoleReporter | None = None,
        manifest_name: str = "package.json",
    ) -> None:
        self.root = root
        self.workspaces = list(workspaces)
        self.npm = npm or NpmClient()
        self.reporter = reporter or ConsoleReporter()
        self.manifest_name = manifest_name

    def run(self) -> HealthReport:
        report = HealthReport()

        report.results.append(self.check_workspace(ROOT_WORKSPACE, is_root=True))
        for workspace in self.workspaces:
            report.results.append(self.check_workspace(workspace))

        self.reporter.summary(report)

        report.audit = self.run_audit()
        self.reporter.finished()

        logger.info(
            "Dependency health check finished: %s",
            ", ".join(f"{s.value}={n}" for s, n in report.counts().items()),
        )
        return report

    def check_workspace(self, workspace: Workspace, is_root: bool = False) -> WorkspaceResult:
        """Probe one workspace and reinstall once if the probe fails."""
        result = WorkspaceResult(workspace=workspace)
        self.reporter.workspace_started(workspace, is_root=is_root)

        if not workspace.has_manifest(self.root, self.manifest_name):
            result.status = WorkspaceStatus.SKIPPED
            self.reporter.workspace_skipped(workspace, self.manifest_name)
            logger.debug("No %s in %s, skipped", self.manifest_name, workspace.path)
            return result

        cwd = workspace.directory(self.root)
        result.probe = self.npm.list_installed(cwd)
        if result.probe.ok:
            result.status = WorkspaceStatus.RESOLVED
            self.reporter.workspace_resolved(workspace)
            return result

        self.reporter.dependencies_missing(workspace)
        self.reporter.install_started(workspace, is_root=is_root)
        result.install = self.npm.install(cwd)
        if result.install.ok:
            result.status = WorkspaceStatus.REPAIRED
            self.reporter.install_succeeded(workspace)
        else:
            result.status = WorkspaceStatus.REPAIR_FAILED
            self.reporter.install_failed(workspace, result.install)
            logger.debug(
                "Install failed in %s (exit %d)", workspace.path, result.install.exit_code
            )
        return result

    def run_audit(self) -> AuditResult:
        """Run the security audit once at the project root."""
        self.reporter.audit_started()
        command = self.npm.audit(self.root)
        if command.ok:
            return AuditResult(status=AuditStatus.PASSED, command=command)
        self.reporter.audit_failed(command)
        return AuditResult(status=AuditStatus.VULNERABLE, command=command)
