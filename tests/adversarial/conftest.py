"""
Shared fixtures for adversarial tests.
"""

import pytest

from src.domain.ports import DnsCredentials

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture
def credentials() -> DnsCredentials:
    return DnsCredentials(api_token="token", zone_id="zone-123")
