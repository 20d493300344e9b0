"""Shared test fixtures."""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path

import pytest
from rich.console import Console

from dephealth.checker import DependencyHealthChecker
from dephealth.commands import CommandResult
from dephealth.config import DEFAULT_WORKSPACES
from dephealth.npm import NpmClient
from dephealth.reporter import ConsoleReporter
from dephealth.workspaces import workspaces_from_paths


@dataclass
class Call:
    argv: list[str]
    path: str  # relative to the project root, "." for the root itself
    stream: bool

    @property
    def subcommand(self) -> str:
        return self.argv[1]


class FakeRunner:
    """Records every command instead of running it.

    ``exit_codes`` maps ``(relative_path, subcommand)`` to the exit code to
    return; anything not listed exits 0.
    """

    def __init__(self, root: Path, exit_codes: dict[tuple[str, str], int] | None = None) -> None:
        self.root = root
        self.exit_codes = exit_codes or {}
        self.calls: list[Call] = []

    def run(self, argv: list[str], cwd: Path, stream: bool = False) -> CommandResult:
        rel = Path(cwd).relative_to(self.root).as_posix()
        self.calls.append(Call(argv=list(argv), path=rel, stream=stream))
        return CommandResult(
            argv=list(argv),
            cwd=str(cwd),
            exit_code=self.exit_codes.get((rel, argv[1]), 0),
            duration_ms=1,
        )

    def sequence(self) -> list[tuple[str, str]]:
        return [(c.path, c.subcommand) for c in self.calls]

    def calls_for(self, path: str) -> list[Call]:
        return [c for c in self.calls if c.path == path]


def make_project(root: Path, workspaces: list[str], with_root: bool = True) -> Path:
    """Create a project tree with a package.json in the root and each workspace."""
    if with_root:
        (root / "package.json").write_text('{"name": "root"}', encoding="utf-8")
    for ws in workspaces:
        d = root / ws
        d.mkdir(parents=True, exist_ok=True)
        (d / "package.json").write_text(f'{{"name": "{ws}"}}', encoding="utf-8")
    return root


def make_reporter() -> tuple[ConsoleReporter, io.StringIO, io.StringIO]:
    out, err = io.StringIO(), io.StringIO()
    reporter = ConsoleReporter(
        console=Console(file=out, width=200, force_terminal=False),
        err_console=Console(file=err, width=200, force_terminal=False),
    )
    return reporter, out, err


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project root where every default workspace has a manifest."""
    return make_project(tmp_path, list(DEFAULT_WORKSPACES))


@pytest.fixture
def output() -> tuple[ConsoleReporter, io.StringIO, io.StringIO]:
    return make_reporter()


@pytest.fixture
def build(project: Path, output):
    """Factory returning (checker, runner) for the default project."""
    reporter = output[0]

    def _build(exit_codes: dict[tuple[str, str], int] | None = None, workspaces=None):
        runner = FakeRunner(project, exit_codes)
        checker = DependencyHealthChecker(
            root=project,
            workspaces=workspaces_from_paths(workspaces or DEFAULT_WORKSPACES),
            npm=NpmClient(runner=runner),
            reporter=reporter,
        )
        return checker, runner

    return _build
