"""Entry point — `dephealth` console script.

Exit status is 1 only when the run cannot start from the project root or
the checker itself blows up. Failed probes, installs and audits are
reported on the console and leave the exit status at 0.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from dephealth.checker import DependencyHealthChecker, HealthReport
from dephealth.commands import CommandRunner
from dephealth.config import Settings, settings
from dephealth.npm import NpmClient
from dephealth.reporter import ConsoleReporter
from dephealth.workspaces import ProjectRootError, verify_project_root, workspaces_from_paths

logger = logging.getLogger(__name__)


def build_checker(
    root: Path,
    config: Settings,
    reporter: ConsoleReporter | None = None,
) -> DependencyHealthChecker:
    """Wire a checker from settings."""
    npm = NpmClient(
        runner=CommandRunner(timeout_sec=config.command_timeout),
        npm_path=config.npm_path,
        audit_level=config.audit_level,
    )
    return DependencyHealthChecker(
        root=root,
        workspaces=workspaces_from_paths(config.workspaces),
        npm=npm,
        reporter=reporter,
        manifest_name=config.manifest_name,
    )


def run(
    root: Path | None = None,
    config: Settings | None = None,
    reporter: ConsoleReporter | None = None,
) -> int:
    """Run one health check and return the process exit status."""
    config = config or settings
    root = root or Path.cwd()
    reporter = reporter or ConsoleReporter()

    reporter.started()
    try:
        verify_project_root(root, config.manifest_name, config.required_workspace)
    except ProjectRootError as e:
        reporter.location_error(str(e))
        return 1

    try:
        report: HealthReport = build_checker(root, config, reporter).run()
    except Exception as e:
        logger.exception("Dependency health check failed")
        reporter.unexpected_error(e)
        return 1

    logger.debug("Report: %d workspaces, audit %s", len(report.results), report.audit.status.value)
    return 0


def main() -> None:
    """Check, repair and audit dependencies of the project in the current directory."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    sys.exit(run())


if __name__ == "__main__":
    main()
