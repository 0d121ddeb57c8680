"""
Domain error taxonomy.

Host-local errors (registry, identifier parsing, transport) are captured into
that host's ActionResult; only DiscoveryError aborts a whole run.
"""


class AutoNetbiosError(Exception):
    """Base for all AutoNetbios errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DiscoveryError(AutoNetbiosError):
    """Directory query failed or returned malformed data."""


class RemoteTransportError(AutoNetbiosError):
    """Host unreachable or rejected authentication."""

    def __init__(self, host: str, message: str) -> None:
        self.host = host
        super().__init__(f"{host}: {message}")


class RegistryAccessError(AutoNetbiosError):
    """Registry read/write denied or path missing."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


class IdentifierParseError(AutoNetbiosError):
    """Interface registry path did not contain a UUID."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No interface UUID found in registry path: {path}")


class AuditWriteError(AutoNetbiosError):
    """Event log write failed. Never fatal."""
