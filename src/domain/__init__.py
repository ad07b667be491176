"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for subdomain registration
and availability checks. It defines its own port interfaces for the
key-value store and the DNS provider, ensuring true hexagonal
architecture decoupling.
"""

from .availability import AvailabilityResult, AvailabilityService
from .exceptions import (
    ConfigurationError,
    ConflictError,
    ExternalServiceError,
    RegistrationError,
    ValidationError,
)
from .ports import (
    DnsCredentials,
    DnsProvider,
    DnsRecord,
    DnsRecordResult,
    DomainStore,
    RegistrationStatus,
)
from .registration import RegistrationRecord, RegistrationResult, RegistrationService

__all__ = [
    "AvailabilityResult",
    "AvailabilityService",
    "ConfigurationError",
    "ConflictError",
    "DnsCredentials",
    "DnsProvider",
    "DnsRecord",
    "DnsRecordResult",
    "DomainStore",
    "ExternalServiceError",
    "RegistrationError",
    "RegistrationRecord",
    "RegistrationResult",
    "RegistrationService",
    "RegistrationStatus",
    "ValidationError",
]
