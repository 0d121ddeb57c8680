"""
Enforce command - disable NetBIOS over TCP/IP on target hosts.
"""

from pathlib import Path
from typing import List, Optional

import typer

from autonetbios.application.enforcement_service import EnforcementService
from autonetbios.domain.errors import DiscoveryError
from autonetbios.interface.cli.commands.common import (
    EXIT_HOST_FAILURES,
    fail,
    load_settings,
)
from autonetbios.interface.cli.formatters.report_formatter import ReportFormatter


def enforce_hosts(
    hosts: Optional[List[str]] = typer.Option(
        None,
        "--host",
        "-t",
        help="Target host (repeatable). If omitted, hosts are discovered from Active Directory",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to enforcement_config.json (default: ./config/enforcement_config.json)",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Report what would change without writing registry values or events",
    ),
    max_concurrency: Optional[int] = typer.Option(
        None,
        "--max-concurrency",
        min=1,
        max=50,
        help="Maximum hosts processed at once (default from config, 10)",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the report as JSON instead of tables",
    ),
    details: bool = typer.Option(
        False,
        "--details",
        "-d",
        help="List every changed interface",
    ),
):
    """
    Force-disable NetBIOS over TCP/IP on every NetBIOS-capable interface.

    Sets NetbiosOptions=2 under the NetBT interfaces key of each host and
    writes one System event (ID 555) per changed interface. Per-host
    failures are reported and do not stop the run.
    """
    settings = load_settings(
        config_file,
        {
            "dry_run": True if dry_run else None,
            "max_concurrency": max_concurrency,
        },
    )
    service = EnforcementService(settings)
    formatter = ReportFormatter()

    try:
        report = service.enforce(
            hosts,
            progress_callback=None if json_output else formatter.display_progress,
        )
    except DiscoveryError as e:
        fail(f"Host discovery failed: {e}")

    if json_output:
        typer.echo(report.model_dump_json(indent=2))
    else:
        formatter.display_report(report, verbose=details)

    if not report.all_succeeded:
        raise typer.Exit(code=EXIT_HOST_FAILURES)
