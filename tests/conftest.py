"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory store
- Recording DNS provider double
- Provider credentials and a wired registration service
"""

import pytest

from src.adapters.store.memory import InMemoryDomainStore
from src.domain.ports import DnsCredentials
from src.domain.registration import RegistrationService
from tests.doubles import FIXED_NOW, RecordingDnsProvider


@pytest.fixture
def store() -> InMemoryDomainStore:
    return InMemoryDomainStore()


@pytest.fixture
def dns_provider() -> RecordingDnsProvider:
    return RecordingDnsProvider()


@pytest.fixture
def credentials() -> DnsCredentials:
    return DnsCredentials(api_token="test-token", zone_id="zone-123")


@pytest.fixture
def service(
    store: InMemoryDomainStore, dns_provider: RecordingDnsProvider, credentials: DnsCredentials
) -> RegistrationService:
    return RegistrationService(
        store=store,
        dns_provider=dns_provider,
        credentials=credentials,
        clock=lambda: FIXED_NOW,
    )
