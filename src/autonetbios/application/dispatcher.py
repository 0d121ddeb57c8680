"""
Dispatcher - runs the NetBIOS action against every resolved host.

A single host naming this machine runs in-process; everything else goes
through the remote channel on a bounded thread pool. One host's failure
never prevents results for the others.
"""

from __future__ import annotations

import concurrent.futures
import logging
from typing import Callable, List, Optional, Sequence

from autonetbios.application.remote_action import NetbiosDisableAction
from autonetbios.domain.models import ActionResult
from autonetbios.infrastructure.psremote.channel import RemoteChannel
from autonetbios.infrastructure.psremote.client import is_local_host
from autonetbios.infrastructure.registry.base import HostAccess
from autonetbios.infrastructure.registry.local import LocalHostAccess

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 10


class Dispatcher:
    """Fan the Remote Action out over hosts and collect ActionResults."""

    def __init__(
        self,
        action: NetbiosDisableAction,
        channel: RemoteChannel,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        local_access_factory: Callable[[str], HostAccess] = LocalHostAccess,
        is_local: Callable[[str], bool] = is_local_host,
        progress_callback: Optional[Callable[[ActionResult], None]] = None,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.action = action
        self.channel = channel
        self.max_concurrency = max_concurrency
        self.local_access_factory = local_access_factory
        self.is_local = is_local
        self.progress_callback = progress_callback

    def run(self, hosts: Sequence[str]) -> List[ActionResult]:
        """Execute against ``hosts``; results are in completion order."""
        if not hosts:
            logger.info("No hosts to process")
            return []

        if len(hosts) == 1 and self.is_local(hosts[0]):
            return [self._run_local(hosts[0])]

        return self._run_remote(hosts)

    def _run_local(self, host: str) -> ActionResult:
        logger.info("Target %s is this machine - running in-process", host)
        try:
            access = self.local_access_factory(host)
            result = self.action.execute(access, executed_locally=True)
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("Local execution failed: %s", exc)
            result = ActionResult.failure_result(
                host, exc, executed_locally=True, dry_run=self.action.dry_run
            )
        self._report(result)
        return result

    def _run_remote(self, hosts: Sequence[str]) -> List[ActionResult]:
        max_workers = min(self.max_concurrency, len(hosts))
        logger.info("Processing %d hosts with %d parallel workers", len(hosts), max_workers)

        results: List[ActionResult] = []
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_host = {
                executor.submit(self.channel.invoke, host, self.action): host
                for host in hosts
            }

            for future in concurrent.futures.as_completed(future_to_host):
                host = future_to_host[future]
                try:
                    result = future.result()
                    logger.debug("Completed host: %s", host)
                except Exception as exc:  # pylint: disable=broad-except
                    logger.error("Host %s failed: %s", host, exc)
                    result = ActionResult.failure_result(host, exc, dry_run=self.action.dry_run)
                results.append(result)
                self._report(result)

        return results

    def _report(self, result: ActionResult) -> None:
        if self.progress_callback is not None:
            self.progress_callback(result)
