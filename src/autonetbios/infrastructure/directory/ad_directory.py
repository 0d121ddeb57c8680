"""
Active Directory lookups for host discovery.

Runs the ActiveDirectory PowerShell module on the operator machine and
parses its JSON output into ComputerRecord objects.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

from autonetbios.domain.errors import DiscoveryError
from autonetbios.domain.models import ComputerRecord, OnError
from autonetbios.infrastructure.psremote.client import PSRemoteResult, run_local_ps

logger = logging.getLogger(__name__)

COMPUTERS_SCRIPT = """
$ErrorActionPreference = 'Stop'
Import-Module ActiveDirectory
$rows = @(Get-ADComputer -Filter * -Properties Enabled, DNSHostName | ForEach-Object {
    [pscustomobject]@{ Name = $_.Name; Enabled = [bool]$_.Enabled; DNSHostName = $_.DNSHostName }
})
ConvertTo-Json -InputObject $rows -Depth 3 -Compress
"""

DOMAIN_SCRIPT = """
$ErrorActionPreference = 'Stop'
(Get-CimInstance -ClassName Win32_ComputerSystem).Domain
"""


class DirectoryService(ABC):
    """Read-only source of computer objects and the local domain name."""

    @abstractmethod
    def query_computers(self, on_error: OnError = OnError.STOP) -> list[ComputerRecord]:
        """Return every computer object in the directory."""

    @abstractmethod
    def local_domain(self, on_error: OnError = OnError.STOP) -> str:
        """Return the domain the local machine is joined to."""


class ActiveDirectoryClient(DirectoryService):
    """DirectoryService backed by Get-ADComputer."""

    def __init__(
        self,
        runner: Callable[[str], PSRemoteResult] = run_local_ps,
    ) -> None:
        self._run = runner

    def query_computers(self, on_error: OnError = OnError.STOP) -> list[ComputerRecord]:
        try:
            rows = self._run_json(COMPUTERS_SCRIPT, "Get-ADComputer")
            return [self._to_record(row) for row in self._as_list(rows)]
        except DiscoveryError:
            if on_error is OnError.STOP:
                raise
            logger.warning("Directory query failed; continuing with no computers", exc_info=True)
            return []

    def local_domain(self, on_error: OnError = OnError.STOP) -> str:
        result = self._run(DOMAIN_SCRIPT)
        domain = result.stdout.strip() if result.success else ""
        if not domain:
            if on_error is OnError.STOP:
                raise DiscoveryError(f"Cannot determine local domain: {result.error or 'empty output'}")
            logger.warning("Cannot determine local domain: %s", result.error or "empty output")
        return domain

    def _run_json(self, script: str, label: str) -> Any:
        result = self._run(script)
        if not result.success:
            raise DiscoveryError(f"{label} failed: {result.error or result.stderr or 'unknown error'}")
        try:
            return result.json()
        except json.JSONDecodeError as exc:
            raise DiscoveryError(f"{label} returned malformed JSON: {exc}") from exc

    @staticmethod
    def _as_list(rows: Any) -> list:
        if rows is None:
            return []
        if isinstance(rows, dict):
            return [rows]
        if isinstance(rows, list):
            return rows
        raise DiscoveryError(f"Unexpected directory payload type: {type(rows).__name__}")

    @staticmethod
    def _to_record(row: Any) -> ComputerRecord:
        if not isinstance(row, dict) or not row.get("Name"):
            raise DiscoveryError(f"Malformed computer object: {row!r}")
        return ComputerRecord(
            name=str(row["Name"]),
            enabled=row.get("Enabled") is True,
            dns_host_name=row.get("DNSHostName") or None,
        )
