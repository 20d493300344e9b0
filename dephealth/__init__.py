"""Dependency health checker for multi-workspace npm projects."""

from dephealth.checker import (
    AuditResult,
    AuditStatus,
    DependencyHealthChecker,
    HealthReport,
    WorkspaceResult,
    WorkspaceStatus,
)
from dephealth.workspaces import ROOT_WORKSPACE, Workspace

__version__ = "0.1.0"
