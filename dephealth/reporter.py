"""Console output for a health run."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dephealth.commands import CommandResult
from dephealth.workspaces import Workspace

if TYPE_CHECKING:
    from dephealth.checker import HealthReport

# status value -> (label, style)
_STATUS_LABELS = {
    "not_checked": ("not checked", "dim"),
    "skipped": ("skipped", "yellow"),
    "resolved": ("resolved", "green"),
    "repaired": ("fixed", "green"),
    "repair_failed": ("failed", "bold red"),
}

HINTS = [
    "Run this check periodically to catch dependency issues early",
    "If a workspace keeps failing, delete its node_modules and run: npm ci",
    "To fix reported vulnerabilities, run: npm audit fix",
]


class ConsoleReporter:
    """Prints status lines for every step of the run."""

    def __init__(self, console: Console | None = None, err_console: Console | None = None) -> None:
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def started(self) -> None:
        self.console.print(Panel.fit("🔍 Dependency Health Check Starting...", style="bold blue"))
        self.console.print()

    def location_error(self, message: str) -> None:
        self.err_console.print(f"[bold red]❌ {escape(message)}[/bold red]")

    def unexpected_error(self, exc: BaseException) -> None:
        self.err_console.print(
            f"[bold red]❌ Health check aborted: {escape(type(exc).__name__)}: {escape(str(exc))}[/bold red]"
        )

    # ── Workspaces ───────────────────────────────────────────────────────────

    def workspace_started(self, workspace: Workspace, is_root: bool = False) -> None:
        if is_root:
            self.console.print("📦 Checking root workspace dependencies...")
        else:
            self.console.print(f"📦 Checking workspace: [bold]{escape(workspace.name)}[/bold]")

    def workspace_skipped(self, workspace: Workspace, manifest_name: str) -> None:
        self.console.print(
            f"[yellow]⚠️  {escape(manifest_name)} not found in {escape(workspace.name)}, skipping...[/yellow]"
        )

    def workspace_resolved(self, workspace: Workspace) -> None:
        self.console.print(f"[green]✅ {escape(workspace.name)}: All dependencies resolved[/green]")

    def dependencies_missing(self, workspace: Workspace) -> None:
        self.console.print(f"[yellow]⚠️  {escape(workspace.name)}: Missing dependencies detected[/yellow]")

    def install_started(self, workspace: Workspace, is_root: bool = False) -> None:
        if is_root:
            self.console.print("🔧 Installing root dependencies...")
        else:
            self.console.print(f"🔧 Installing missing dependencies for {escape(workspace.name)}...")

    def install_succeeded(self, workspace: Workspace) -> None:
        self.console.print(f"[green]✅ {escape(workspace.name)}: Dependencies fixed[/green]")

    def install_failed(self, workspace: Workspace, result: CommandResult) -> None:
        self.console.print(f"[red]❌ {escape(workspace.name)}: Failed to fix dependencies[/red]")
        if result.error:
            self.console.print(f"[dim]   {escape(result.error)}[/dim]")

    # ── Summary / audit ──────────────────────────────────────────────────────

    def summary(self, report: HealthReport) -> None:
        self.console.print("\n[bold]🏥 Health Check Summary:[/bold]")

        table = Table(show_header=True, header_style="bold")
        table.add_column("Workspace")
        table.add_column("Status")
        for r in report.results:
            label, style = _STATUS_LABELS.get(r.status.value, (r.status.value, ""))
            table.add_row(escape(r.workspace.name), f"[{style}]{label}[/{style}]" if style else label)
        self.console.print(table)

        for hint in HINTS:
            self.console.print(f"- {escape(hint)}")

    def audit_started(self) -> None:
        self.console.print("\n[bold]🔒 Security Check:[/bold]")

    def audit_failed(self, result: CommandResult) -> None:
        self.console.print("[yellow]⚠️  Security vulnerabilities found. Run: npm audit fix[/yellow]")
        if result.error:
            self.console.print(f"[dim]   {escape(result.error)}[/dim]")

    def finished(self) -> None:
        self.console.print("\n[bold green]✨ Dependency health check completed![/bold green]")
