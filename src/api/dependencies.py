"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from functools import lru_cache

from fastapi import Depends, Request

from src.adapters.dns.cloudflare import CloudflareDnsProvider
from src.config.settings import Settings, get_settings
from src.domain.availability import AvailabilityService
from src.domain.ports import DnsProvider, DomainStore
from src.domain.registration import RegistrationService


def get_store(request: Request) -> DomainStore:
    """
    Get the domain store from app state.

    The store is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.store


@lru_cache
def _cloudflare_provider(base_url: str, timeout: float) -> CloudflareDnsProvider:
    return CloudflareDnsProvider(base_url=base_url, timeout=timeout)


def get_dns_provider(settings: Settings = Depends(get_settings)) -> DnsProvider:
    """Get Cloudflare DNS provider (one per base URL and timeout)."""
    return _cloudflare_provider(settings.cf_api_base_url, settings.dns_request_timeout)


def get_availability_service(store: DomainStore = Depends(get_store)) -> AvailabilityService:
    """Create availability service backed by the app's store."""
    return AvailabilityService(store=store)


def get_registration_service(
    store: DomainStore = Depends(get_store),
    dns_provider: DnsProvider = Depends(get_dns_provider),
    settings: Settings = Depends(get_settings),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the store, DNS provider and provider credentials.
    """
    return RegistrationService(
        store=store,
        dns_provider=dns_provider,
        credentials=settings.dns_credentials(),
    )
