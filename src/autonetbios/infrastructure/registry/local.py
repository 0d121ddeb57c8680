"""
Local host access using winreg and pywin32.

Used when the only target is the machine running the tool, so no WinRM
session is involved. Windows only; the imports are deferred so the rest of
the package loads on any platform.
"""

from __future__ import annotations

import logging
import socket

from autonetbios.domain.errors import AuditWriteError, RegistryAccessError
from autonetbios.domain.models import AuditEntry, OnError, RegistryKey, Severity
from autonetbios.infrastructure.registry.base import HKLM, HostAccess, split_hive

logger = logging.getLogger(__name__)


def _winreg():
    try:
        import winreg  # pylint: disable=import-outside-toplevel
    except ImportError as exc:
        raise RegistryAccessError(HKLM, "winreg is only available on Windows") from exc
    return winreg


class LocalHostAccess(HostAccess):
    """HostAccess bound to the local registry and event log."""

    def __init__(self, hostname: str | None = None) -> None:
        super().__init__(hostname or socket.gethostname())

    def _open(self, path: str, access: int):
        winreg = _winreg()
        hive, subkey = split_hive(path)
        if hive != HKLM:
            raise RegistryAccessError(path, f"Unsupported hive {hive}")
        try:
            return winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, subkey, 0, access)
        except FileNotFoundError as exc:
            raise RegistryAccessError(path, "key not found") from exc
        except PermissionError as exc:
            raise RegistryAccessError(path, "access denied") from exc
        except OSError as exc:
            raise RegistryAccessError(path, str(exc)) from exc

    def _enumerate_keys(
        self, path: str, value_names: list[str], on_error: OnError
    ) -> list[RegistryKey]:
        winreg = _winreg()
        keys: list[RegistryKey] = []
        parent = self._open(path, winreg.KEY_READ)
        try:
            index = 0
            while True:
                try:
                    child_name = winreg.EnumKey(parent, index)
                except OSError:
                    break
                index += 1
                child_path = f"{path}\\{child_name}"
                try:
                    values = self._read_values(child_path, value_names)
                except RegistryAccessError as exc:
                    if on_error is OnError.STOP:
                        raise
                    # e.g. the adapter class "Properties" subkey denies reads
                    logger.debug("Skipping unreadable key %s: %s", child_path, exc)
                    values = {name: None for name in value_names}
                keys.append(RegistryKey(child_path, values))
        finally:
            winreg.CloseKey(parent)
        logger.debug("Enumerated %d subkeys under %s", len(keys), path)
        return keys

    def _read_values(self, path: str, value_names: list[str]) -> dict:
        winreg = _winreg()
        values: dict = {}
        key = self._open(path, winreg.KEY_READ)
        try:
            for name in value_names:
                try:
                    values[name], _ = winreg.QueryValueEx(key, name)
                except FileNotFoundError:
                    values[name] = None
                except OSError as exc:
                    raise RegistryAccessError(path, f"cannot read {name}: {exc}") from exc
        finally:
            winreg.CloseKey(key)
        return values

    def _set_dword(self, path: str, name: str, value: int) -> None:
        winreg = _winreg()
        key = self._open(path, winreg.KEY_SET_VALUE)
        try:
            winreg.SetValueEx(key, name, 0, winreg.REG_DWORD, int(value))
        except OSError as exc:
            raise RegistryAccessError(path, f"failed to set {name}: {exc}") from exc
        finally:
            winreg.CloseKey(key)

    def _write_event(self, entry: AuditEntry) -> None:
        try:
            import win32evtlog  # pylint: disable=import-outside-toplevel
            import win32evtlogutil  # pylint: disable=import-outside-toplevel
        except ImportError as exc:
            raise AuditWriteError("pywin32 is not available") from exc

        event_types = {
            Severity.INFORMATION: win32evtlog.EVENTLOG_INFORMATION_TYPE,
            Severity.WARNING: win32evtlog.EVENTLOG_WARNING_TYPE,
            Severity.ERROR: win32evtlog.EVENTLOG_ERROR_TYPE,
        }
        try:
            win32evtlogutil.AddSourceToRegistry(entry.source, eventLogType=entry.log_name)
            win32evtlogutil.ReportEvent(
                entry.source,
                entry.event_id,
                eventType=event_types[entry.severity],
                strings=[entry.message],
            )
        except Exception as exc:  # pywintypes.error has no stable import path
            raise AuditWriteError(f"{entry.log_name}/{entry.source}: {exc}") from exc
