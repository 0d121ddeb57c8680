"""
Discover command - show which hosts a run would target.
"""

from pathlib import Path
from typing import Optional

import typer

from autonetbios.application.enforcement_service import EnforcementService
from autonetbios.domain.errors import DiscoveryError
from autonetbios.interface.cli.commands.common import fail, load_settings
from autonetbios.interface.cli.formatters.report_formatter import HostListFormatter


def discover_hosts(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to enforcement_config.json",
    ),
    prefix: Optional[str] = typer.Option(
        None,
        "--prefix",
        help="Name prefix override (default: first 4 characters of the local domain)",
    ),
):
    """List enabled directory computers matching the environment prefix."""
    settings = load_settings(config_file, {"host_prefix": prefix})
    service = EnforcementService(settings)
    try:
        hosts = service.resolve_hosts()
    except DiscoveryError as e:
        fail(f"Host discovery failed: {e}")
    HostListFormatter().display_hosts(hosts)
