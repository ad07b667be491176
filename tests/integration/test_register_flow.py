"""
Integration tests for the registration flow.

Tests the full stack (routes, dependencies, domain service, store adapter)
with the in-memory store and a recording DNS provider in place of Cloudflare.
"""

import json
import logging
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from src.adapters.store.memory import InMemoryDomainStore
from src.api.dependencies import get_dns_provider
from src.api.main import app
from src.config.settings import Settings, get_settings
from tests.doubles import RecordingDnsProvider

REGISTRATION = {
    "subdomain": "test",
    "extension": ".example.com",
    "nameservers": ["ns1.x.com", "ns2.x.com"],
    "email": "a@b.com",
}


def configured_settings() -> Settings:
    return Settings(_env_file=None, store_backend="memory", cf_api_token="token", cf_zone_id="zone-123")


def unconfigured_settings() -> Settings:
    return Settings(_env_file=None, store_backend="memory", cf_api_token=None, cf_zone_id=None)


@pytest.fixture
def memory_store() -> InMemoryDomainStore:
    return InMemoryDomainStore()


@pytest.fixture
def provider() -> RecordingDnsProvider:
    return RecordingDnsProvider()


@pytest.fixture
def client(
    memory_store: InMemoryDomainStore, provider: RecordingDnsProvider
) -> Generator[TestClient, None, None]:
    """Create test client wired to the in-memory store and recording provider."""
    app.state.store = memory_store
    app.dependency_overrides[get_settings] = configured_settings
    app.dependency_overrides[get_dns_provider] = lambda: provider
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


class TestRegisterFlow:
    """Integration tests for POST /api/register."""

    def test_successful_registration(
        self,
        client: TestClient,
        memory_store: InMemoryDomainStore,
        provider: RecordingDnsProvider,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.INFO):
            response = client.post("/api/register", json=REGISTRATION)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["domain"] == "test.example.com"
        assert body["nameservers"] == ["ns1.x.com", "ns2.x.com"]
        assert body["message"]

        stored = json.loads(memory_store.get("test.example.com"))
        assert stored["status"] == "active"
        assert stored["fullDomain"] == "test.example.com"
        assert stored["email"] == "a@b.com"
        assert stored["registeredAt"].endswith("Z")

        assert [(r.type, r.name, r.content, r.ttl) for r in provider.records] == [
            ("NS", "test.example.com", "ns1.x.com", 3600),
            ("NS", "test.example.com", "ns2.x.com", 3600),
        ]
        assert "Registered test.example.com" in caplog.text

    def test_credentials_come_from_settings(
        self, client: TestClient, provider: RecordingDnsProvider
    ) -> None:
        client.post("/api/register", json=REGISTRATION)

        credentials, _ = provider.calls[0]
        assert credentials.api_token == "token"
        assert credentials.zone_id == "zone-123"

    def test_repeat_registration_returns_409(
        self,
        client: TestClient,
        memory_store: InMemoryDomainStore,
        provider: RecordingDnsProvider,
    ) -> None:
        first = client.post("/api/register", json=REGISTRATION)
        stored = memory_store.get("test.example.com")

        second = client.post("/api/register", json=REGISTRATION)

        assert first.status_code == 200
        assert second.status_code == 409
        assert second.json() == {"error": "Domain is already registered."}
        assert memory_store.get("test.example.com") == stored
        assert len(provider.calls) == 2

    def test_provider_failure_on_second_of_three(self, memory_store: InMemoryDomainStore) -> None:
        failing = RecordingDnsProvider(fail_on_call=2, error="Invalid nameserver content")
        app.state.store = memory_store
        app.dependency_overrides[get_settings] = configured_settings
        app.dependency_overrides[get_dns_provider] = lambda: failing
        try:
            response = TestClient(app).post(
                "/api/register",
                json={**REGISTRATION, "nameservers": ["ns1.x.com", "ns2.x.com", "ns3.x.com"]},
            )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"error": "DNS record creation failed: Invalid nameserver content"}
        assert memory_store.get("test.example.com") is None
        assert len(failing.calls) == 2

    def test_missing_provider_configuration(
        self, memory_store: InMemoryDomainStore, provider: RecordingDnsProvider
    ) -> None:
        app.state.store = memory_store
        app.dependency_overrides[get_settings] = unconfigured_settings
        app.dependency_overrides[get_dns_provider] = lambda: provider
        try:
            response = TestClient(app).post("/api/register", json=REGISTRATION)
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert "Cloudflare API configuration" in response.json()["error"]
        assert provider.calls == []
        assert len(memory_store) == 0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"subdomain": ""},
            {"subdomain": "Upper"},
            {"subdomain": "my.site"},
            {"subdomain": "my_site"},
            {"subdomain": "ab"},
            {"subdomain": "a" * 64},
            {"nameservers": []},
            {"nameservers": ["ns1.x.com"]},
            {"nameservers": [f"ns{i}.x.com" for i in range(5)]},
            {"email": ""},
        ],
    )
    def test_invalid_input_returns_400(
        self,
        client: TestClient,
        memory_store: InMemoryDomainStore,
        provider: RecordingDnsProvider,
        overrides: dict,
    ) -> None:
        response = client.post("/api/register", json={**REGISTRATION, **overrides})

        assert response.status_code == 400
        assert response.json()["error"]
        assert provider.calls == []
        assert len(memory_store) == 0


class TestCheckFlow:
    """Integration tests for GET /api/check."""

    def test_available_then_taken(self, client: TestClient) -> None:
        before = client.get("/api/check", params={"domain": "test.example.com"})
        client.post("/api/register", json=REGISTRATION)
        after = client.get("/api/check", params={"domain": "test.example.com"})

        assert before.json() == {"available": True, "domain": "test.example.com"}
        assert after.json() == {"available": False, "domain": "test.example.com"}

    def test_missing_domain_returns_400(self, client: TestClient) -> None:
        response = client.get("/api/check")

        assert response.status_code == 400
        assert response.json() == {"error": "Please enter a domain."}

    def test_empty_domain_returns_400(self, client: TestClient) -> None:
        response = client.get("/api/check", params={"domain": ""})
        assert response.status_code == 400


class TestLifespan:
    """Application startup with the in-memory backend."""

    def test_memory_backend_startup_and_health(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORE_BACKEND", "memory")
        get_settings.cache_clear()
        try:
            with TestClient(app) as client:
                assert isinstance(app.state.store, InMemoryDomainStore)
                response = client.get("/health")
        finally:
            get_settings.cache_clear()

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
