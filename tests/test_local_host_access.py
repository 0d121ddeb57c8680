"""
Tests for LocalHostAccess.

``winreg`` and the pywin32 event log modules are replaced in ``sys.modules``
with in-memory stand-ins, so these run on any platform.
"""

import sys
from types import SimpleNamespace

import pytest

from autonetbios.application.remote_action import (
    ADAPTER_CLASS_PATH,
    NETBT_INTERFACES_PATH,
    NetbiosDisableAction,
)
from autonetbios.domain.errors import AuditWriteError, RegistryAccessError
from autonetbios.domain.models import AuditEntry, OnError, Severity
from autonetbios.infrastructure.registry.base import split_hive
from autonetbios.infrastructure.registry.local import LocalHostAccess

from fakes import ETH_GUID, WIFI_GUID

NETBT_SUBKEY = split_hive(NETBT_INTERFACES_PATH)[1]
CLASS_SUBKEY = split_hive(ADAPTER_CLASS_PATH)[1]


class FakeWinreg:
    """Just enough of the winreg module for LocalHostAccess."""

    HKEY_LOCAL_MACHINE = "HKLM"
    KEY_READ = 0x20019
    KEY_SET_VALUE = 0x0002
    REG_DWORD = 4

    def __init__(self) -> None:
        self.keys: dict[str, dict] = {}
        self.denied: set[str] = set()
        self.write_denied: set[str] = set()
        self.unreadable_values: set[tuple[str, str]] = set()
        self.set_calls: list[tuple[str, str, int, int]] = []
        self.open_handles = 0

    def add_key(self, subkey: str, **values) -> None:
        self.keys[subkey] = dict(values)

    def OpenKey(self, hive, subkey, reserved, access):  # pylint: disable=invalid-name
        assert hive == self.HKEY_LOCAL_MACHINE
        if subkey in self.denied:
            raise PermissionError(5, "Access is denied")
        if access == self.KEY_SET_VALUE and subkey in self.write_denied:
            raise PermissionError(5, "Access is denied")
        if subkey not in self.keys:
            raise FileNotFoundError(2, "The system cannot find the file specified")
        self.open_handles += 1
        return subkey

    def EnumKey(self, handle, index):  # pylint: disable=invalid-name
        prefix = handle + "\\"
        children = [
            key[len(prefix):]
            for key in self.keys
            if key.startswith(prefix) and "\\" not in key[len(prefix):]
        ]
        if index >= len(children):
            raise OSError(259, "No more data is available")
        return children[index]

    def QueryValueEx(self, handle, name):  # pylint: disable=invalid-name
        if (handle, name) in self.unreadable_values:
            raise PermissionError(5, "Access is denied")
        values = self.keys[handle]
        if name not in values:
            raise FileNotFoundError(2, "The system cannot find the file specified")
        return values[name], self.REG_DWORD

    def SetValueEx(self, handle, name, reserved, value_type, value):  # pylint: disable=invalid-name
        self.set_calls.append((handle, name, value_type, value))
        self.keys[handle][name] = value

    def CloseKey(self, handle):  # pylint: disable=invalid-name
        self.open_handles -= 1


@pytest.fixture
def winreg(monkeypatch):
    fake = FakeWinreg()
    fake.add_key(NETBT_SUBKEY)
    fake.add_key(f"{NETBT_SUBKEY}\\Tcpip_{{{ETH_GUID}}}", NetbiosOptions=0)
    fake.add_key(f"{NETBT_SUBKEY}\\Tcpip_{{{WIFI_GUID}}}", NetbiosOptions=1)
    fake.add_key(CLASS_SUBKEY)
    fake.add_key(
        f"{CLASS_SUBKEY}\\0001",
        DriverDesc="Intel(R) Ethernet Connection I219-V",
        NetCfgInstanceId="{" + ETH_GUID + "}",
        ProviderName="Intel",
    )
    fake.add_key(f"{CLASS_SUBKEY}\\Properties")
    fake.denied.add(f"{CLASS_SUBKEY}\\Properties")
    monkeypatch.setitem(sys.modules, "winreg", fake)
    return fake


@pytest.fixture
def event_log(monkeypatch):
    reported = []
    evtlog = SimpleNamespace(
        EVENTLOG_INFORMATION_TYPE=4,
        EVENTLOG_WARNING_TYPE=2,
        EVENTLOG_ERROR_TYPE=1,
    )
    evtlogutil = SimpleNamespace(
        AddSourceToRegistry=lambda source, eventLogType: reported.append(("source", source, eventLogType)),
        ReportEvent=lambda source, event_id, eventType, strings: reported.append(
            ("event", source, event_id, eventType, strings)
        ),
    )
    monkeypatch.setitem(sys.modules, "win32evtlog", evtlog)
    monkeypatch.setitem(sys.modules, "win32evtlogutil", evtlogutil)
    return reported


class TestEnumerateKeys:
    """Test subkey enumeration against the local registry."""

    def test_reads_requested_values(self, winreg):
        keys = LocalHostAccess("WS01").enumerate_keys(NETBT_INTERFACES_PATH, ["NetbiosOptions"])

        assert [k.get("NetbiosOptions") for k in keys] == [0, 1]
        assert keys[0].path == f"{NETBT_INTERFACES_PATH}\\Tcpip_{{{ETH_GUID}}}"
        assert winreg.open_handles == 0

    def test_missing_value_is_none(self, winreg):
        winreg.add_key(f"{NETBT_SUBKEY}\\Tcpip_loopback")

        keys = LocalHostAccess("WS01").enumerate_keys(NETBT_INTERFACES_PATH, ["NetbiosOptions"])

        assert keys[-1].get("NetbiosOptions") is None

    def test_unreadable_subkey_fails_when_stopping(self, winreg):
        winreg.denied.add(f"{NETBT_SUBKEY}\\Tcpip_{{{WIFI_GUID}}}")

        with pytest.raises(RegistryAccessError, match="access denied"):
            LocalHostAccess("WS01").enumerate_keys(
                NETBT_INTERFACES_PATH, ["NetbiosOptions"], on_error=OnError.STOP
            )
        assert winreg.open_handles == 0

    def test_unreadable_value_fails_when_stopping(self, winreg):
        winreg.unreadable_values.add((f"{NETBT_SUBKEY}\\Tcpip_{{{ETH_GUID}}}", "NetbiosOptions"))

        with pytest.raises(RegistryAccessError):
            LocalHostAccess("WS01").enumerate_keys(NETBT_INTERFACES_PATH, ["NetbiosOptions"])

    def test_unreadable_subkey_skipped_when_continuing(self, winreg):
        keys = LocalHostAccess("WS01").enumerate_keys(
            ADAPTER_CLASS_PATH, ["DriverDesc", "NetCfgInstanceId"], on_error=OnError.CONTINUE
        )

        assert len(keys) == 2
        assert keys[0].get("DriverDesc") == "Intel(R) Ethernet Connection I219-V"
        assert keys[1].get("DriverDesc") is None

    def test_missing_parent_key(self, winreg):
        path = "HKEY_LOCAL_MACHINE\\SYSTEM\\Nowhere"

        with pytest.raises(RegistryAccessError, match="key not found"):
            LocalHostAccess("WS01").enumerate_keys(path, ["x"])
        assert LocalHostAccess("WS01").enumerate_keys(path, ["x"], on_error=OnError.CONTINUE) == []

    def test_other_hive_rejected(self, winreg):
        with pytest.raises(RegistryAccessError, match="Unsupported hive"):
            LocalHostAccess("WS01").enumerate_keys("HKEY_CURRENT_USER\\Software", ["x"])

    def test_without_winreg(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "winreg", None)

        with pytest.raises(RegistryAccessError, match="only available on Windows"):
            LocalHostAccess("WS01").enumerate_keys(NETBT_INTERFACES_PATH, ["NetbiosOptions"])


class TestSetDword:
    def test_writes_reg_dword(self, winreg):
        path = f"{NETBT_INTERFACES_PATH}\\Tcpip_{{{ETH_GUID}}}"

        assert LocalHostAccess("WS01").set_dword(path, "NetbiosOptions", 2) is True

        subkey = f"{NETBT_SUBKEY}\\Tcpip_{{{ETH_GUID}}}"
        assert winreg.set_calls == [(subkey, "NetbiosOptions", FakeWinreg.REG_DWORD, 2)]
        assert winreg.open_handles == 0

    def test_write_denied(self, winreg):
        subkey = f"{NETBT_SUBKEY}\\Tcpip_{{{ETH_GUID}}}"
        winreg.write_denied.add(subkey)

        with pytest.raises(RegistryAccessError, match="access denied"):
            LocalHostAccess("WS01").set_dword(f"HKEY_LOCAL_MACHINE\\{subkey}", "NetbiosOptions", 2)


class TestWriteEvent:
    def test_reports_event(self, event_log):
        entry = AuditEntry("System", "AutoNetbios", 555, "disabled", Severity.INFORMATION)

        assert LocalHostAccess("WS01").write_event(entry) is True

        assert event_log == [
            ("source", "AutoNetbios", "System"),
            ("event", "AutoNetbios", 555, 4, ["disabled"]),
        ]

    def test_without_pywin32(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "win32evtlog", None)
        entry = AuditEntry("System", "AutoNetbios", 555, "disabled")
        access = LocalHostAccess("WS01")

        assert access.write_event(entry) is False
        with pytest.raises(AuditWriteError, match="pywin32"):
            access.write_event(entry, on_error=OnError.STOP)


class TestLocalEnforcement:
    """The action run in-process against the local registry."""

    def test_disables_every_interface(self, winreg, event_log):
        result = NetbiosDisableAction().execute(LocalHostAccess("WS01"), executed_locally=True)

        assert result.success is True
        assert result.executed_locally is True
        assert [r.previous_setting for r in result.changed_interfaces] == [0, 1]
        assert all(
            values.get("NetbiosOptions") == 2
            for key, values in winreg.keys.items()
            if key.startswith(NETBT_SUBKEY + "\\")
        )
        assert result.changed_interfaces[0].display_name == "Intel(R) Ethernet Connection I219-V"

    def test_unreadable_interface_fails_host(self, winreg, event_log):
        """An interface whose key cannot be read must not be reported as compliant."""
        winreg.denied.add(f"{NETBT_SUBKEY}\\Tcpip_{{{WIFI_GUID}}}")

        result = NetbiosDisableAction().execute(LocalHostAccess("WS01"))

        assert result.success is False
        assert result.error_type == "RegistryAccessError"
        assert winreg.set_calls == []
