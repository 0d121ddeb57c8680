"""
CLI formatters for enforcement reports and host lists.

Keeps display logic out of the command functions.
"""

import logging
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from autonetbios.application.reporter import EnforcementReport
from autonetbios.domain.models import ActionResult

logger = logging.getLogger(__name__)


class ReportFormatter:
    """Render an EnforcementReport to the console."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def display_progress(self, result: ActionResult) -> None:
        """One line per host as results arrive."""
        if result.success:
            count = len(result.changed_interfaces)
            self.console.print(f"[green]✅ {result.host}[/green] - {count} interface(s)")
        else:
            self.console.print(f"[red]❌ {result.host}[/red] - {result.error}")

    def display_report(self, report: EnforcementReport, verbose: bool = False) -> None:
        """
        Display the report as a per-host table plus a summary panel.

        Args:
            report: Report to display
            verbose: Also list every changed interface
        """
        title = "NetBIOS Enforcement (dry run)" if report.dry_run else "NetBIOS Enforcement"
        table = Table(title=title)
        table.add_column("Host", style="cyan", no_wrap=True)
        table.add_column("Status")
        table.add_column("Interfaces", justify="right")
        table.add_column("Detail", style="dim")

        for host in report.hosts:
            if host.success:
                status = "[green]Success[/green]"
                detail = ", ".join(i.display_name or i.interface_id for i in host.interfaces)
            else:
                status = "[red]Failed[/red]"
                detail = next((f.error for f in report.failures if f.host == host.host), "")
            table.add_row(host.host, status, str(len(host.interfaces)), detail)

        self.console.print(table)

        if verbose:
            self._display_interfaces(report)

        color = "green" if report.all_succeeded else "red"
        summary = (
            f"[bold]Hosts:[/bold] {report.total_hosts}\n"
            f"[bold]Succeeded:[/bold] {report.succeeded}\n"
            f"[bold]Failed:[/bold] {report.failed}\n"
            f"[bold]Interfaces changed:[/bold] {report.interfaces_changed}"
        )
        if report.audit_failures:
            summary += f"\n[yellow]Audit events not written:[/yellow] {report.audit_failures}"
        self.console.print(Panel.fit(summary, title="📊 Summary", border_style=color))

    def _display_interfaces(self, report: EnforcementReport) -> None:
        table = Table(title="Changed interfaces")
        table.add_column("Host", style="cyan", no_wrap=True)
        table.add_column("Interface", no_wrap=True)
        table.add_column("Adapter")
        table.add_column("Provider")
        table.add_column("Before")
        table.add_column("Audit")
        for host in report.hosts:
            for record in host.interfaces:
                table.add_row(
                    host.host,
                    record.interface_id,
                    record.display_name or "",
                    record.provider_name or "",
                    record.previous_label,
                    "✅" if record.audit_logged else "—",
                )
        self.console.print(table)


class HostListFormatter:
    """Render a resolved host list."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def display_hosts(self, hosts: List[str]) -> None:
        if not hosts:
            self.console.print("[yellow]No hosts resolved[/yellow]")
            return
        for host in hosts:
            self.console.print(host)
        self.console.print(f"\n[blue]{len(hosts)} host(s)[/blue]")
