"""
NetBIOS disable action.

The unit of work run once per host. It only touches the HostAccess it is
given, so the same call works in-process and over WinRM.
"""

from __future__ import annotations

import logging
from typing import Optional

from autonetbios.domain.config import EnforcementSettings
from autonetbios.domain.errors import (
    IdentifierParseError,
    RegistryAccessError,
    RemoteTransportError,
)
from autonetbios.domain.models import (
    UUID_PATTERN,
    ActionResult,
    AdapterMatched,
    AdapterMetadata,
    AuditEntry,
    InterfaceRecord,
    NetbiosSetting,
    OnError,
    RegistryKey,
    match_adapter,
)
from autonetbios.infrastructure.registry.base import HostAccess

logger = logging.getLogger(__name__)

NETBT_INTERFACES_PATH = (
    r"HKEY_LOCAL_MACHINE\SYSTEM\CurrentControlSet\Services\NetBT\Parameters\Interfaces"
)
ADAPTER_CLASS_PATH = (
    r"HKEY_LOCAL_MACHINE\SYSTEM\CurrentControlSet\Control\Class"
    r"\{4D36E972-E325-11CE-BFC1-08002BE10318}"
)
NETBIOS_OPTIONS = "NetbiosOptions"
ADAPTER_VALUES = ("ComponentId", "DriverDesc", "NetCfgInstanceId", "*IfType", "ProviderName")
AUDIT_MESSAGE_PREFIX = "NetBIOS over TCP/IP has been force-disabled on adapter: "


def extract_interface_id(key: RegistryKey) -> str:
    """Return the UUID embedded in the key's final path segment (e.g. ``Tcpip_{...}``)."""
    match = UUID_PATTERN.search(key.leaf)
    if not match:
        raise IdentifierParseError(key.path)
    return match.group(0)


class NetbiosDisableAction:
    """
    Force ``NetbiosOptions = 2`` on every NetBT interface that has the value.

    Interfaces without the value are never written. Each change is followed
    by one informational audit event; a failed audit write does not undo or
    fail the change.
    """

    def __init__(self, settings: Optional[EnforcementSettings] = None, dry_run: Optional[bool] = None):
        self.settings = settings or EnforcementSettings()
        self.dry_run = self.settings.dry_run if dry_run is None else dry_run

    def __call__(self, access: HostAccess, executed_locally: bool = False) -> ActionResult:
        return self.execute(access, executed_locally=executed_locally)

    def execute(self, access: HostAccess, executed_locally: bool = False) -> ActionResult:
        host = access.hostname
        changed: list[InterfaceRecord] = []
        try:
            interfaces = access.enumerate_keys(
                NETBT_INTERFACES_PATH, [NETBIOS_OPTIONS], on_error=OnError.STOP
            )
            adapters = self._read_adapters(access)

            for key in interfaces:
                record = self._apply(access, key, adapters)
                if record is not None:
                    changed.append(record)
        except (RegistryAccessError, IdentifierParseError, RemoteTransportError) as exc:
            logger.error("[%s] Enforcement failed: %s", host, exc)
            return ActionResult.failure_result(
                host, exc, changed, executed_locally=executed_locally, dry_run=self.dry_run
            )

        logger.info(
            "[%s] %s NetBIOS on %d interface(s)",
            host,
            "Would disable" if self.dry_run else "Disabled",
            len(changed),
        )
        return ActionResult.success_result(
            host, changed, executed_locally=executed_locally, dry_run=self.dry_run
        )

    def _read_adapters(self, access: HostAccess) -> list[AdapterMetadata]:
        keys = access.enumerate_keys(ADAPTER_CLASS_PATH, ADAPTER_VALUES, on_error=OnError.CONTINUE)
        adapters = []
        for key in keys:
            try:
                adapters.append(AdapterMetadata.from_registry(key))
            except (TypeError, ValueError) as exc:
                logger.debug("[%s] Ignoring adapter key %s: %s", access.hostname, key.path, exc)
        return adapters

    def _apply(
        self,
        access: HostAccess,
        key: RegistryKey,
        adapters: list[AdapterMetadata],
    ) -> Optional[InterfaceRecord]:
        previous = key.get(NETBIOS_OPTIONS)
        if previous is None:
            logger.debug("[%s] Skipping %s (no %s)", access.hostname, key.leaf, NETBIOS_OPTIONS)
            return None

        if not self.dry_run:
            access.set_dword(key.path, NETBIOS_OPTIONS, NetbiosSetting.DISABLED, on_error=OnError.STOP)

        interface_id = extract_interface_id(key)
        match = match_adapter(interface_id, adapters)
        adapter = match.adapter if isinstance(match, AdapterMatched) else None

        audit_logged = False
        if not self.dry_run:
            audit_logged = access.write_event(self._audit_entry(adapter), on_error=OnError.CONTINUE)

        return InterfaceRecord(
            interface_id=interface_id,
            registry_path=key.path,
            previous_setting=int(previous),
            current_setting=NetbiosSetting.DISABLED,
            display_name=adapter.driver_description if adapter else None,
            provider_name=adapter.provider_name if adapter else None,
            model=adapter.model if adapter else None,
            network_type=adapter.network_type if adapter else None,
            audit_logged=audit_logged,
        )

    def _audit_entry(self, adapter: Optional[AdapterMetadata]) -> AuditEntry:
        parts = (adapter.driver_description, adapter.interface_id) if adapter else ()
        detail = " ".join(part for part in parts if part)
        return AuditEntry(
            log_name=self.settings.event_log,
            source=self.settings.event_source,
            event_id=self.settings.event_id,
            message=f"{AUDIT_MESSAGE_PREFIX}{detail}".rstrip(),
        )
