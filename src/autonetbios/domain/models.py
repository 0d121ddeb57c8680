"""
Core domain models for NetBIOS enforcement.

InterfaceRecord and ActionResult are pydantic models so they serialize
cleanly for the JSON report; the adapter join outcome is a small sum type of
frozen dataclasses.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

HostIdentifier = str

UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


class NetbiosSetting(IntEnum):
    """Values of the NetBT ``NetbiosOptions`` registry attribute."""

    DEFAULT = 0
    ENABLED = 1
    DISABLED = 2


class OnError(Enum):
    """Explicit failure policy handed to every port call."""

    STOP = "stop"
    CONTINUE = "continue"


class Severity(Enum):
    """Event log entry types."""

    INFORMATION = "Information"
    WARNING = "Warning"
    ERROR = "Error"


@dataclass(frozen=True)
class RegistryKey:
    """Raw snapshot of one registry subkey and the values that were asked for."""

    path: str
    values: dict[str, Any] = field(default_factory=dict)

    def get(self, name: str) -> Any:
        return self.values.get(name)

    @property
    def leaf(self) -> str:
        return self.path.rstrip("\\").rsplit("\\", 1)[-1]


@dataclass(frozen=True)
class AdapterMetadata:
    """One subkey of the network adapter device class."""

    model: str = ""
    driver_description: str = ""
    interface_id: str = ""
    network_type: Optional[int] = None
    provider_name: str = ""

    @classmethod
    def from_registry(cls, key: RegistryKey) -> "AdapterMetadata":
        network_type = key.get("*IfType")
        return cls(
            model=str(key.get("ComponentId") or ""),
            driver_description=str(key.get("DriverDesc") or ""),
            interface_id=str(key.get("NetCfgInstanceId") or ""),
            network_type=int(network_type) if network_type is not None else None,
            provider_name=str(key.get("ProviderName") or ""),
        )


@dataclass(frozen=True)
class AdapterMatched:
    adapter: AdapterMetadata


@dataclass(frozen=True)
class AdapterUnmatched:
    interface_id: str


AdapterMatch = Union[AdapterMatched, AdapterUnmatched]


def match_adapter(interface_id: str, adapters: List[AdapterMetadata]) -> AdapterMatch:
    """
    Join an interface UUID against adapter metadata.

    The adapter's NetCfgInstanceId is usually ``{UUID}``, so this is a
    case-insensitive containment test rather than equality.
    """
    needle = interface_id.lower()
    for adapter in adapters:
        if adapter.interface_id and needle in adapter.interface_id.lower():
            return AdapterMatched(adapter)
    return AdapterUnmatched(interface_id)


class InterfaceRecord(BaseModel):
    """A NetBIOS-capable interface that was (or would be) force-disabled."""

    model_config = ConfigDict(frozen=True)

    interface_id: str = Field(..., description="UUID extracted from the NetBT key name")
    registry_path: str = Field(..., description="Full path of the NetBT interface key")
    previous_setting: Optional[int] = Field(None, description="NetbiosOptions before the write")
    current_setting: int = Field(NetbiosSetting.DISABLED, description="NetbiosOptions after the write")
    display_name: Optional[str] = Field(None, description="Adapter driver description")
    provider_name: Optional[str] = Field(None, description="Adapter driver provider")
    model: Optional[str] = Field(None, description="Adapter component id")
    network_type: Optional[int] = Field(None, description="IANA interface type")
    audit_logged: bool = Field(False, description="Whether the audit event was written")

    @property
    def previous_label(self) -> str:
        if self.previous_setting is None:
            return "absent"
        try:
            return NetbiosSetting(self.previous_setting).name.lower()
        except ValueError:
            return str(self.previous_setting)


class ActionResult(BaseModel):
    """Outcome of one Remote Action on one host."""

    model_config = ConfigDict(frozen=True)

    host: HostIdentifier = Field(..., description="Host the action ran against")
    changed_interfaces: List[InterfaceRecord] = Field(default_factory=list)
    success: bool = Field(..., description="Whether the action completed")
    error: Optional[str] = Field(None, description="Error detail if failed")
    error_type: Optional[str] = Field(None, description="Error class name if failed")
    executed_locally: bool = Field(False, description="Ran in-process rather than over WinRM")
    dry_run: bool = Field(False, description="No registry or event log writes were made")

    @classmethod
    def success_result(
        cls,
        host: str,
        changed: List[InterfaceRecord],
        executed_locally: bool = False,
        dry_run: bool = False,
    ) -> "ActionResult":
        return cls(
            host=host,
            changed_interfaces=list(changed),
            success=True,
            executed_locally=executed_locally,
            dry_run=dry_run,
        )

    @classmethod
    def failure_result(
        cls,
        host: str,
        error: BaseException | str,
        changed: Optional[List[InterfaceRecord]] = None,
        executed_locally: bool = False,
        dry_run: bool = False,
    ) -> "ActionResult":
        if isinstance(error, BaseException):
            message = str(error) or type(error).__name__
            error_type = type(error).__name__
        else:
            message = error
            error_type = None
        return cls(
            host=host,
            changed_interfaces=list(changed or []),
            success=False,
            error=message,
            error_type=error_type,
            executed_locally=executed_locally,
            dry_run=dry_run,
        )


@dataclass(frozen=True)
class AuditEntry:
    """One event log record per changed interface."""

    log_name: str
    source: str
    event_id: int
    message: str
    severity: Severity = Severity.INFORMATION


@dataclass(frozen=True)
class ComputerRecord:
    """Computer object as returned by the directory service."""

    name: str
    enabled: bool
    dns_host_name: Optional[str] = None
