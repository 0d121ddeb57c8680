"""
CLI application - typer app wiring.

Global options configure logging; each command lives in ``commands``.
"""

import logging
from pathlib import Path
from typing import Optional

import typer

from autonetbios import __version__
from autonetbios.infrastructure.logging_config import setup_logging
from autonetbios.interface.cli.commands import discover_hosts, enforce_hosts

app = typer.Typer(
    name="autonetbios",
    help="🔒 Fleet enforcement of NetBIOS-over-TCP/IP disablement",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"autonetbios {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on the console"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write a DEBUG log to this file"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """
    🔒 AutoNetbios - disable NetBIOS over TCP/IP across a Windows fleet

    🎯 **Commands:**
    - `autonetbios enforce` - set NetbiosOptions=2 on every NetBT interface
    - `autonetbios discover` - list the hosts a run would target

    Hosts come from `--host` or, when omitted, from Active Directory
    (enabled computers whose name starts with the first 4 characters of
    the local domain). Remote hosts are reached over WinRM.
    """
    setup_logging(logging.DEBUG if verbose else logging.WARNING, str(log_file) if log_file else None)


app.command("enforce")(enforce_hosts)
app.command("discover")(discover_hosts)
