"""
Shared test fixtures.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parents[1] / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from fakes import FakeHostAccess, standard_adapters, standard_interfaces  # noqa: E402


@pytest.fixture
def host_access() -> FakeHostAccess:
    """A workstation with Ethernet, Wi-Fi and a non-NetBIOS loopback interface."""
    return FakeHostAccess(interfaces=standard_interfaces(), adapters=standard_adapters())
