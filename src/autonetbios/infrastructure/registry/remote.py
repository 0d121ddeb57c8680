"""
Remote host access over PowerShell remoting.

Each primitive is one small PowerShell script run through PSRemoteClient;
registry reads come back as compressed JSON.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from autonetbios.domain.config import Credential, WinRMSettings
from autonetbios.domain.errors import AuditWriteError, RegistryAccessError, RemoteTransportError
from autonetbios.domain.models import AuditEntry, OnError, RegistryKey
from autonetbios.infrastructure.psremote.client import PSRemoteClient, ps_quote
from autonetbios.infrastructure.registry.base import HostAccess

logger = logging.getLogger(__name__)

ENUMERATE_SCRIPT = """
$ErrorActionPreference = 'Stop'
$names = @({names})
$rows = @(Get-ChildItem -Path {root} | ForEach-Object {{
    $props = Get-ItemProperty -Path $_.PSPath -ErrorAction {item_action}
    $values = @{{}}
    foreach ($n in $names) {{
        if ($props -and ($props.PSObject.Properties.Name -contains $n)) {{ $values[$n] = $props.$n }}
        else {{ $values[$n] = $null }}
    }}
    [pscustomobject]@{{ Path = $_.Name; Values = $values }}
}})
ConvertTo-Json -InputObject $rows -Depth 4 -Compress
"""

SET_DWORD_SCRIPT = """
$ErrorActionPreference = 'Stop'
Set-ItemProperty -Path {path} -Name {name} -Value {value} -Type DWord
"""

WRITE_EVENT_SCRIPT = """
$ErrorActionPreference = 'Stop'
if (-not [System.Diagnostics.EventLog]::SourceExists({source})) {{
    New-EventLog -LogName {log} -Source {source}
}}
Write-EventLog -LogName {log} -Source {source} -EventId {event_id} -EntryType {entry_type} -Message {message}
"""


def _provider_path(path: str) -> str:
    return ps_quote(f"Registry::{path}")


class RemoteHostAccess(HostAccess):
    """HostAccess that drives a remote host's registry and event log via WinRM."""

    def __init__(
        self,
        hostname: str,
        settings: WinRMSettings,
        credential: Optional[Credential] = None,
        client: Optional[PSRemoteClient] = None,
    ) -> None:
        super().__init__(hostname)
        self.client = client or PSRemoteClient(hostname, settings, credential)

    def _enumerate_keys(
        self, path: str, value_names: list[str], on_error: OnError
    ) -> list[RegistryKey]:
        script = ENUMERATE_SCRIPT.format(
            names=", ".join(ps_quote(n) for n in value_names),
            root=_provider_path(path),
            item_action="Stop" if on_error is OnError.STOP else "SilentlyContinue",
        )
        result = self.client.run_ps(script)
        if not result.success:
            raise RegistryAccessError(path, result.error or result.stderr or "enumeration failed")
        try:
            rows = result.json()
        except json.JSONDecodeError as exc:
            raise RegistryAccessError(path, f"unparseable enumeration output: {exc}") from exc

        if rows is None:
            rows = []
        elif isinstance(rows, dict):
            rows = [rows]

        keys = []
        for row in rows:
            values = row.get("Values") or {}
            keys.append(
                RegistryKey(
                    path=row.get("Path", ""),
                    values={name: values.get(name) for name in value_names},
                )
            )
        logger.debug("[%s] Enumerated %d subkeys under %s", self.hostname, len(keys), path)
        return keys

    def _set_dword(self, path: str, name: str, value: int) -> None:
        script = SET_DWORD_SCRIPT.format(
            path=_provider_path(path),
            name=ps_quote(name),
            value=int(value),
        )
        result = self.client.run_ps(script)
        if not result.success:
            raise RegistryAccessError(path, result.error or f"failed to set {name}")

    def _write_event(self, entry: AuditEntry) -> None:
        script = WRITE_EVENT_SCRIPT.format(
            log=ps_quote(entry.log_name),
            source=ps_quote(entry.source),
            event_id=int(entry.event_id),
            entry_type=entry.severity.value,
            message=ps_quote(entry.message),
        )
        try:
            result = self.client.run_ps(script)
        except RemoteTransportError as exc:
            raise AuditWriteError(f"Write-EventLog not delivered: {exc}") from exc
        if not result.success:
            raise AuditWriteError(result.error or f"Write-EventLog failed on {self.hostname}")

    def close(self) -> None:
        self.client.close()
