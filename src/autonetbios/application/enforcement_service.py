"""
Enforcement service - wires resolver, action, dispatcher and reporter.

This is the programmatic entry point used by the CLI.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from autonetbios.application.dispatcher import Dispatcher
from autonetbios.application.host_resolver import HostResolver
from autonetbios.application.remote_action import NetbiosDisableAction
from autonetbios.application.reporter import EnforcementReport, summarize
from autonetbios.domain.config import EnforcementSettings
from autonetbios.domain.models import ActionResult
from autonetbios.infrastructure.directory.ad_directory import (
    ActiveDirectoryClient,
    DirectoryService,
)
from autonetbios.infrastructure.psremote.channel import RemoteChannel, WinRMChannel

logger = logging.getLogger(__name__)


class EnforcementService:
    """Resolve hosts, dispatch the NetBIOS action and summarize the outcome."""

    def __init__(
        self,
        settings: Optional[EnforcementSettings] = None,
        directory: Optional[DirectoryService] = None,
        channel: Optional[RemoteChannel] = None,
        dispatcher: Optional[Dispatcher] = None,
    ) -> None:
        self.settings = settings or EnforcementSettings()
        self.directory = directory or ActiveDirectoryClient()
        self.resolver = HostResolver(self.directory, host_prefix=self.settings.host_prefix)
        self.channel = channel or WinRMChannel(self.settings.winrm, self.settings.credentials)
        self._dispatcher = dispatcher

    def resolve_hosts(self, hosts: Optional[Sequence[str]] = None) -> List[str]:
        """Resolve targets. Raises DiscoveryError when the directory query fails."""
        return self.resolver.resolve(hosts)

    def build_dispatcher(
        self, progress_callback: Optional[Callable[[ActionResult], None]] = None
    ) -> Dispatcher:
        if self._dispatcher is not None:
            return self._dispatcher
        return Dispatcher(
            action=NetbiosDisableAction(self.settings),
            channel=self.channel,
            max_concurrency=self.settings.max_concurrency,
            progress_callback=progress_callback,
        )

    def enforce(
        self,
        hosts: Optional[Sequence[str]] = None,
        progress_callback: Optional[Callable[[ActionResult], None]] = None,
    ) -> EnforcementReport:
        """
        Run a full enforcement pass.

        Raises:
            DiscoveryError: host discovery failed; nothing was dispatched
        """
        targets = self.resolve_hosts(hosts)
        logger.info("Resolved %d target host(s)", len(targets))
        results = self.build_dispatcher(progress_callback).run(targets)
        report = summarize(results)
        logger.info(
            "Run complete: %d/%d hosts succeeded, %d interface(s) changed",
            report.succeeded,
            report.total_hosts,
            report.interfaces_changed,
        )
        return report
