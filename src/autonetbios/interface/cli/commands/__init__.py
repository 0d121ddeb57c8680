"""CLI command functions."""

from .discover import discover_hosts
from .enforce import enforce_hosts

__all__ = ["discover_hosts", "enforce_hosts"]
