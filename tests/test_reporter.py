"""
Tests for result aggregation.
"""

from autonetbios.application.reporter import summarize
from autonetbios.domain.errors import RemoteTransportError
from autonetbios.domain.models import ActionResult, InterfaceRecord


def record(interface_id: str, audit_logged: bool = True) -> InterfaceRecord:
    return InterfaceRecord(
        interface_id=interface_id,
        registry_path=f"HKLM\\...\\Tcpip_{{{interface_id}}}",
        previous_setting=0,
        audit_logged=audit_logged,
    )


class TestSummarize:
    def test_counts(self):
        results = [
            ActionResult.success_result("ws02", [record("a"), record("b", audit_logged=False)]),
            ActionResult.failure_result("WS03", RemoteTransportError("WS03", "timed out")),
            ActionResult.success_result("WS01", []),
        ]

        report = summarize(results)

        assert report.total_hosts == 3
        assert report.succeeded == 2
        assert report.failed == 1
        assert report.interfaces_changed == 2
        assert report.audit_failures == 1
        assert report.all_succeeded is False

    def test_hosts_sorted_case_insensitively(self):
        results = [
            ActionResult.success_result("ws02", []),
            ActionResult.success_result("WS01", []),
            ActionResult.success_result("Ws03", []),
        ]

        assert [h.host for h in summarize(results).hosts] == ["WS01", "ws02", "Ws03"]

    def test_failure_detail(self):
        report = summarize(
            [ActionResult.failure_result("WS03", RemoteTransportError("WS03", "timed out"))]
        )

        assert report.failures[0].host == "WS03"
        assert report.failures[0].error == "WS03: timed out"
        assert report.failures[0].error_type == "RemoteTransportError"

    def test_dry_run_does_not_count_audit_failures(self):
        report = summarize(
            [ActionResult.success_result("WS01", [record("a", audit_logged=False)], dry_run=True)]
        )

        assert report.dry_run is True
        assert report.audit_failures == 0

    def test_empty(self):
        report = summarize([])

        assert report.total_hosts == 0
        assert report.all_succeeded is True

    def test_json_serializable(self):
        report = summarize([ActionResult.success_result("WS01", [record("a")])])

        assert '"interface_id":"a"' in report.model_dump_json()
