"""
PSRemote Infrastructure Package.

PowerShell remoting over WinRM using pywinrm, plus local PowerShell.
The remote channel lives in ``psremote.channel`` (it depends on the registry package).
"""

from autonetbios.infrastructure.psremote.client import (
    PSRemoteClient,
    PSRemoteResult,
    is_local_host,
    ps_quote,
    run_local_ps,
)

__all__ = [
    "PSRemoteClient",
    "PSRemoteResult",
    "is_local_host",
    "ps_quote",
    "run_local_ps",
]
