"""Workspace models and the project-root guard.

A workspace is a directory holding its own dependency manifest. The root
project is treated as a workspace too, always checked first.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path


class DependencyHealthError(Exception):
    """Base class for errors that stop a health run."""


class ProjectRootError(DependencyHealthError):
    """Raised when the checker is not started from the project root."""


@dataclass(frozen=True)
class Workspace:
    """A directory with its own manifest, relative to the project root."""

    name: str
    path: str

    def directory(self, root: Path) -> Path:
        return root / self.path

    def manifest(self, root: Path, manifest_name: str = "package.json") -> Path:
        return self.directory(root) / manifest_name

    def has_manifest(self, root: Path, manifest_name: str = "package.json") -> bool:
        return self.manifest(root, manifest_name).is_file()


ROOT_WORKSPACE = Workspace(name="Root", path=".")


def workspaces_from_paths(paths: Iterable[str]) -> list[Workspace]:
    """Build workspaces from relative paths, keeping their order.

    The path doubles as the display name. Blank entries are dropped.
    """
    result = []
    for p in paths:
        cleaned = p.strip().strip("/")
        if cleaned:
            result.append(Workspace(name=cleaned, path=cleaned))
    return result


def verify_project_root(
    root: Path,
    manifest_name: str = "package.json",
    required_workspace: str = "api",
) -> None:
    """Ensure ``root`` holds the root manifest and the required workspace manifest.

    Raises ProjectRootError otherwise.
    """
    required = Workspace(name=required_workspace, path=required_workspace)
    if not ROOT_WORKSPACE.has_manifest(root, manifest_name) or not required.has_manifest(
        root, manifest_name
    ):
        raise ProjectRootError("This script must be run from the project root directory")
