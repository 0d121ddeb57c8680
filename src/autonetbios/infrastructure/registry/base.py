"""
Host access port.

A HostAccess exposes the three host-local primitives the enforcement action
needs: enumerate registry subkeys, write a DWORD value, write an event log
entry. Implementations supply the ``_`` primitives; the public methods apply
the caller's explicit OnError policy.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Sequence

from autonetbios.domain.errors import AuditWriteError, RegistryAccessError, RemoteTransportError
from autonetbios.domain.models import AuditEntry, OnError, RegistryKey

logger = logging.getLogger(__name__)

HKLM = "HKEY_LOCAL_MACHINE"


def split_hive(path: str) -> tuple[str, str]:
    """Split ``HKEY_LOCAL_MACHINE\\SYSTEM\\...`` into hive and subkey."""
    hive, _, subkey = path.partition("\\")
    if hive.upper() in ("HKLM", "HKLM:"):
        hive = HKLM
    return hive.upper(), subkey


class HostAccess(ABC):
    """Registry and event log access scoped to a single host."""

    def __init__(self, hostname: str) -> None:
        self.hostname = hostname

    def enumerate_keys(
        self,
        path: str,
        value_names: Sequence[str],
        on_error: OnError = OnError.STOP,
    ) -> list[RegistryKey]:
        """
        Return every direct subkey of ``path`` with the requested values.

        Under STOP an unreadable subkey fails the whole enumeration. Under
        CONTINUE it is reported with all values absent, and a failure to
        reach the parent key (registry or transport) yields an empty list.
        """
        try:
            return self._enumerate_keys(path, list(value_names), on_error)
        except (RegistryAccessError, RemoteTransportError) as exc:
            if on_error is OnError.STOP:
                raise
            logger.warning("[%s] Ignoring registry enumeration failure: %s", self.hostname, exc)
            return []

    def set_dword(
        self,
        path: str,
        name: str,
        value: int,
        on_error: OnError = OnError.STOP,
    ) -> bool:
        """Write ``name`` as REG_DWORD under ``path``. Returns whether it was written."""
        try:
            self._set_dword(path, name, value)
            return True
        except RegistryAccessError as exc:
            if on_error is OnError.STOP:
                raise
            logger.warning("[%s] Ignoring registry write failure: %s", self.hostname, exc)
            return False

    def write_event(self, entry: AuditEntry, on_error: OnError = OnError.CONTINUE) -> bool:
        """Write ``entry`` to the host's event log. Returns whether it was written."""
        try:
            self._write_event(entry)
            return True
        except AuditWriteError as exc:
            if on_error is OnError.STOP:
                raise
            logger.warning("[%s] Audit event not written: %s", self.hostname, exc)
            return False

    @abstractmethod
    def _enumerate_keys(
        self, path: str, value_names: list[str], on_error: OnError
    ) -> list[RegistryKey]:
        """Raise RegistryAccessError on failure; ``on_error`` governs unreadable subkeys."""

    @abstractmethod
    def _set_dword(self, path: str, name: str, value: int) -> None:
        """Raise RegistryAccessError on failure."""

    @abstractmethod
    def _write_event(self, entry: AuditEntry) -> None:
        """Raise AuditWriteError on failure."""

    def close(self) -> None:
        """Release any session held by this access object."""
