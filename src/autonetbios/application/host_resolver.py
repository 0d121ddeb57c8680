"""
Host resolver - turns the caller's host list (or the directory) into targets.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from autonetbios.domain.errors import DiscoveryError
from autonetbios.domain.models import OnError
from autonetbios.infrastructure.directory.ad_directory import DirectoryService

logger = logging.getLogger(__name__)

PREFIX_LENGTH = 4


class HostResolver:
    """
    Resolve target host identifiers.

    An explicit list is returned untouched. Otherwise enabled directory
    computers with a DNS name whose name starts with the environment prefix
    are returned sorted. The prefix is the first four characters of the
    local machine's domain unless ``host_prefix`` overrides it.
    """

    def __init__(self, directory: DirectoryService, host_prefix: Optional[str] = None) -> None:
        self.directory = directory
        self.host_prefix = host_prefix

    def resolve(self, explicit_hosts: Optional[Sequence[str]] = None) -> List[str]:
        if explicit_hosts:
            return list(explicit_hosts)

        prefix = self.environment_prefix()
        computers = self.directory.query_computers(on_error=OnError.STOP)
        names = sorted(
            computer.name
            for computer in computers
            if computer.enabled
            and computer.dns_host_name is not None
            and computer.name.startswith(prefix)
        )
        logger.info(
            "Directory returned %d computers, %d match prefix '%s'",
            len(computers),
            len(names),
            prefix,
        )
        if not names:
            logger.warning("No enabled computers match prefix '%s'", prefix)
        return names

    def environment_prefix(self) -> str:
        if self.host_prefix:
            return self.host_prefix
        domain = self.directory.local_domain(on_error=OnError.STOP)
        if not domain:
            raise DiscoveryError("Local machine reports no domain membership")
        return domain[:PREFIX_LENGTH]
