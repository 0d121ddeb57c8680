"""
Host registry and event log access.

LocalHostAccess for the operator machine, RemoteHostAccess over WinRM.
"""

from .base import HKLM, HostAccess, split_hive
from .local import LocalHostAccess
from .remote import RemoteHostAccess

__all__ = ["HKLM", "HostAccess", "LocalHostAccess", "RemoteHostAccess", "split_hive"]
