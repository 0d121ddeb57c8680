"""
Domain layer - models, error taxonomy and configuration.

Pure data and rules; no registry, WinRM or directory access.
"""

from .errors import (
    AuditWriteError,
    AutoNetbiosError,
    DiscoveryError,
    IdentifierParseError,
    RegistryAccessError,
    RemoteTransportError,
)
from .models import (
    ActionResult,
    AdapterMatched,
    AdapterMetadata,
    AdapterUnmatched,
    AuditEntry,
    ComputerRecord,
    InterfaceRecord,
    NetbiosSetting,
    OnError,
    RegistryKey,
    Severity,
    match_adapter,
)

__all__ = [
    "ActionResult",
    "AdapterMatched",
    "AdapterMetadata",
    "AdapterUnmatched",
    "AuditEntry",
    "AuditWriteError",
    "AutoNetbiosError",
    "ComputerRecord",
    "DiscoveryError",
    "IdentifierParseError",
    "InterfaceRecord",
    "NetbiosSetting",
    "OnError",
    "RegistryAccessError",
    "RegistryKey",
    "RemoteTransportError",
    "Severity",
    "match_adapter",
]
