"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure, plus the value types that cross them.
Adapters implement these protocols.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class RegistrationStatus(str, Enum):
    """
    Status of a stored registration.

    Records are created ACTIVE and never transition; there is no
    renewal or deletion flow.
    """

    ACTIVE = "active"


@dataclass(frozen=True)
class DnsCredentials:
    """Process-wide DNS provider configuration, read-only after startup."""

    api_token: str | None
    zone_id: str | None

    @property
    def is_complete(self) -> bool:
        return bool(self.api_token) and bool(self.zone_id)


@dataclass(frozen=True)
class DnsRecord:
    """A single DNS record to create at the provider."""

    type: str
    name: str
    content: str
    ttl: int


@dataclass(frozen=True)
class DnsRecordResult:
    """Outcome of a create-record call; error holds the provider message."""

    success: bool
    error: str | None = None


class DomainStore(Protocol):
    """Port interface for the key-value registration store."""

    def get(self, key: str) -> str | None:
        """
        Look up the value stored under key.

        Returns:
            The stored string, or None if the key is absent
        """
        ...

    def put(self, key: str, value: str) -> None:
        """Store value under key, replacing any existing value."""
        ...

    def put_if_absent(self, key: str, value: str) -> bool:
        """
        Atomically store value under key only if the key is absent.

        Returns:
            True if the value was written, False if the key already existed
        """
        ...

    def ping(self) -> None:
        """Raise if the store is unreachable."""
        ...


class DnsProvider(Protocol):
    """Port interface for the DNS provider's record API."""

    def create_record(self, credentials: DnsCredentials, record: DnsRecord) -> DnsRecordResult:
        """
        Create one DNS record in the configured zone.

        Provider and transport failures are reported through the result,
        never raised.

        Args:
            credentials: API token and zone identifier
            record: Record type, name, content and TTL

        Returns:
            DnsRecordResult with success flag and provider error message
        """
        ...
