"""
Reporter - aggregate per-host ActionResults into an EnforcementReport.
"""

from __future__ import annotations

from typing import List, Sequence

from pydantic import BaseModel, ConfigDict, Field

from autonetbios.domain.models import ActionResult, InterfaceRecord


class HostFailure(BaseModel):
    """A host whose action did not complete."""

    model_config = ConfigDict(frozen=True)

    host: str
    error: str
    error_type: str | None = None


class HostChanges(BaseModel):
    """Interfaces changed on one host."""

    model_config = ConfigDict(frozen=True)

    host: str
    success: bool
    interfaces: List[InterfaceRecord] = Field(default_factory=list)


class EnforcementReport(BaseModel):
    """Summary of one enforcement run."""

    model_config = ConfigDict(frozen=True)

    total_hosts: int = 0
    succeeded: int = 0
    failed: int = 0
    interfaces_changed: int = 0
    audit_failures: int = 0
    dry_run: bool = False
    failures: List[HostFailure] = Field(default_factory=list)
    hosts: List[HostChanges] = Field(default_factory=list)

    @property
    def all_succeeded(self) -> bool:
        return self.failed == 0


def summarize(results: Sequence[ActionResult]) -> EnforcementReport:
    """Aggregate results; hosts are listed in name order."""
    ordered = sorted(results, key=lambda r: r.host.lower())
    failures = [
        HostFailure(host=r.host, error=r.error or "unknown error", error_type=r.error_type)
        for r in ordered
        if not r.success
    ]
    interfaces = [i for r in ordered for i in r.changed_interfaces]
    return EnforcementReport(
        total_hosts=len(ordered),
        succeeded=sum(1 for r in ordered if r.success),
        failed=len(failures),
        interfaces_changed=len(interfaces),
        audit_failures=sum(
            1
            for r in ordered
            if not r.dry_run
            for i in r.changed_interfaces
            if not i.audit_logged
        ),
        dry_run=any(r.dry_run for r in ordered),
        failures=failures,
        hosts=[
            HostChanges(host=r.host, success=r.success, interfaces=list(r.changed_interfaces))
            for r in ordered
        ],
    )
