"""
PSRemote Client - pywinrm wrapper.

Runs PowerShell on a remote host over WinRM using the single transport and
authentication method from WinRMSettings. Also runs PowerShell on the
operator machine for directory lookups.

Connection and authentication failures raise RemoteTransportError; a script
that runs but fails is returned as an unsuccessful PSRemoteResult.
"""

from __future__ import annotations

import json
import logging
import os
import socket
import subprocess
import tempfile
from dataclasses import dataclass
from typing import Any, Optional

import winrm  # pywinrm
from winrm.exceptions import InvalidCredentialsError, WinRMError, WinRMTransportError
from requests.exceptions import RequestException

from autonetbios.domain.config import Credential, WinRMSettings
from autonetbios.domain.errors import RemoteTransportError

logger = logging.getLogger(__name__)

LOCALHOST_PATTERNS = {"localhost", "127.0.0.1", "::1", ".", "(local)"}


def is_local_host(hostname: str) -> bool:
    """
    Detect if hostname names the machine running this process.

    Matches: localhost, 127.0.0.1, ::1, ., local machine name (short or FQDN).
    """
    name = hostname.lower().strip()
    if name in LOCALHOST_PATTERNS:
        return True
    local_name = socket.gethostname().lower()
    if name in (local_name, local_name.split(".")[0]):
        return True
    try:
        fqdn = socket.getfqdn().lower()
    except OSError:
        return False
    return name == fqdn


@dataclass
class PSRemoteResult:
    """Result from a PowerShell invocation."""

    success: bool
    stdout: str = ""
    stderr: str = ""
    return_code: int = -1
    error: str = ""

    def json(self) -> Any:
        """Parse stdout as JSON; empty output parses to None."""
        text = self.stdout.strip()
        if not text:
            return None
        return json.loads(text)


class PSRemoteClient:
    """
    WinRM session for one host.

    The session is created lazily on the first command.
    """

    def __init__(
        self,
        hostname: str,
        settings: WinRMSettings,
        credential: Optional[Credential] = None,
    ) -> None:
        self.hostname = hostname
        self.settings = settings
        self.credential = credential
        self._session: Optional[winrm.Session] = None

    def _connect(self) -> winrm.Session:
        endpoint = self.settings.endpoint(self.hostname)
        if self.credential:
            auth = (self.credential.username, self.credential.get_password())
        else:
            auth = (None, None)
        logger.debug("Opening WinRM session: %s with %s", endpoint, self.settings.auth)
        return winrm.Session(
            target=endpoint,
            auth=auth,
            transport=self.settings.auth,
            server_cert_validation="validate" if self.settings.verify_ssl else "ignore",
            operation_timeout_sec=self.settings.operation_timeout_sec,
            read_timeout_sec=self.settings.read_timeout_sec,
        )

    def run_ps(self, script: str) -> PSRemoteResult:
        """
        Execute PowerShell script on the remote host.

        Raises:
            RemoteTransportError: host unreachable or credentials rejected
        """
        if self._session is None:
            self._session = self._connect()
        try:
            result = self._session.run_ps(script)
        except InvalidCredentialsError as exc:
            raise RemoteTransportError(self.hostname, f"authentication rejected: {exc}") from exc
        except (WinRMTransportError, WinRMError, RequestException) as exc:
            raise RemoteTransportError(self.hostname, f"{type(exc).__name__}: {exc}") from exc

        stderr = result.std_err.decode("utf-8", errors="replace")
        return PSRemoteResult(
            success=result.status_code == 0,
            stdout=result.std_out.decode("utf-8", errors="replace"),
            stderr=stderr,
            return_code=result.status_code,
            error=stderr.strip() if result.status_code != 0 else "",
        )

    def close(self) -> None:
        """Close the session."""
        self._session = None


def run_local_ps(script: str, timeout: int = 120) -> PSRemoteResult:
    """
    Execute PowerShell script on this machine.

    Writes script to a temp file and runs with ExecutionPolicy Bypass.
    """
    with tempfile.NamedTemporaryFile(
        mode="w", suffix=".ps1", delete=False, encoding="utf-8"
    ) as f:
        f.write(script)
        script_path = f.name

    cmd = [
        "powershell.exe",
        "-NoProfile",
        "-NonInteractive",
        "-ExecutionPolicy",
        "Bypass",
        "-File",
        script_path,
    ]
    logger.debug("Executing: %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return PSRemoteResult(success=False, error=f"Script timed out after {timeout}s")
    except OSError as exc:
        return PSRemoteResult(success=False, error=f"Cannot start PowerShell: {exc}")
    finally:
        try:
            os.unlink(script_path)
        except OSError:
            pass

    return PSRemoteResult(
        success=result.returncode == 0,
        stdout=result.stdout,
        stderr=result.stderr,
        return_code=result.returncode,
        error=result.stderr.strip() if result.returncode != 0 else "",
    )


def ps_quote(value: str) -> str:
    """Quote a value as a PowerShell single-quoted literal."""
    return "'" + str(value).replace("'", "''") + "'"
