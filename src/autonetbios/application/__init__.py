"""
Application layer - host resolution, the NetBIOS action, dispatch and reporting.
"""

from .dispatcher import Dispatcher
from .enforcement_service import EnforcementService
from .host_resolver import HostResolver
from .remote_action import NetbiosDisableAction
from .reporter import EnforcementReport, summarize

__all__ = [
    "Dispatcher",
    "EnforcementReport",
    "EnforcementService",
    "HostResolver",
    "NetbiosDisableAction",
    "summarize",
]
