"""
Availability domain service - Reports whether a full domain is taken.
"""

from dataclasses import dataclass

from .exceptions import ValidationError
from .ports import DomainStore

MSG_MISSING_DOMAIN = "Please enter a domain."


@dataclass(frozen=True)
class AvailabilityResult:
    """Availability of a single domain."""

    available: bool
    domain: str


@dataclass
class AvailabilityService:
    """Read-only lookup against the registration store."""

    store: DomainStore

    def check(self, domain: str | None) -> AvailabilityResult:
        """
        Check whether domain is free to register.

        The domain is looked up verbatim; no normalization is applied.

        Raises:
            ValidationError: domain is missing or empty
        """
        if not domain:
            raise ValidationError(MSG_MISSING_DOMAIN)
        return AvailabilityResult(available=self.store.get(domain) is None, domain=domain)
