"""
Remote execution channel.

Binds a per-host work function to a RemoteHostAccess for that host and
makes sure the WinRM session is released afterwards. Concurrency is owned by
the caller.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional, TypeVar

from autonetbios.domain.config import Credential, WinRMSettings
from autonetbios.infrastructure.registry.base import HostAccess
from autonetbios.infrastructure.registry.remote import RemoteHostAccess

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RemoteChannel(ABC):
    """Authenticated dispatch of work to a named host."""

    @abstractmethod
    def invoke(self, host: str, work: Callable[[HostAccess], T]) -> T:
        """Run ``work`` against ``host``; transport failures raise RemoteTransportError."""


class WinRMChannel(RemoteChannel):
    """RemoteChannel over PowerShell remoting."""

    def __init__(self, settings: WinRMSettings, credential: Optional[Credential] = None) -> None:
        self.settings = settings
        self.credential = credential

    def invoke(self, host: str, work: Callable[[HostAccess], T]) -> T:
        access = RemoteHostAccess(host, self.settings, self.credential)
        logger.debug("Dispatching to %s via %s", host, self.settings.endpoint(host))
        try:
            return work(access)
        finally:
            access.close()
