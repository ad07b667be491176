"""
Registration domain service - Subdomain registration and NS delegation.

This module contains the core business logic for registering a subdomain
under a shared extension and delegating it to caller-supplied nameservers.

Registration Flow
=================

1. Validate input (fail-fast, first violation wins):
   missing fields -> nameserver count -> characters -> length
2. Derive full_domain = subdomain + extension (raw concatenation)
3. Reject duplicates by store lookup (no DNS calls, no write)
4. Require DNS provider credentials
5. Create one NS record per nameserver, sequentially; abort on first failure
6. Persist the registration record with put_if_absent

Known inconsistency windows
===========================

- NS records created before a provider failure are not rolled back.
- Two concurrent registrations can both pass the lookup in step 3. The
  atomic put_if_absent in step 6 lets only one record be written, but the
  loser's NS records stay at the provider.

Both cases are logged at WARNING with the records left behind so an
operator can clean them up.
"""

import json
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .exceptions import ConfigurationError, ConflictError, ExternalServiceError, ValidationError
from .ports import DnsCredentials, DnsProvider, DnsRecord, DomainStore, RegistrationStatus

logger = logging.getLogger(__name__)

SUBDOMAIN_PATTERN = re.compile(r"^[a-z0-9-]+$")
SUBDOMAIN_MIN_LENGTH = 3
SUBDOMAIN_MAX_LENGTH = 63
NAMESERVERS_MIN = 2
NAMESERVERS_MAX = 4
NS_RECORD_TTL = 3600

MSG_MISSING_FIELDS = "Required information is missing."
MSG_NAMESERVER_COUNT = "Please provide between 2 and 4 nameservers."
MSG_INVALID_CHARACTERS = "Domain may only contain lowercase letters, numbers, and hyphens."
MSG_INVALID_LENGTH = "Domain must be between 3 and 63 characters."
MSG_ALREADY_REGISTERED = "Domain is already registered."
MSG_MISSING_CONFIGURATION = "Cloudflare API configuration is required. Check environment variables."
MSG_DNS_FAILURE = "DNS record creation failed: {error}"
MSG_DNS_UNKNOWN_ERROR = "unknown error"
MSG_REGISTERED = "Domain registered successfully."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Render an aware datetime as ISO-8601 UTC with millisecond precision."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class RegistrationRecord:
    """The persisted registration; serialized as JSON under full_domain."""

    subdomain: str
    extension: str
    full_domain: str
    nameservers: list[str]
    email: str
    registered_at: str
    status: RegistrationStatus = RegistrationStatus.ACTIVE

    def to_json(self) -> str:
        return json.dumps(
            {
                "subdomain": self.subdomain,
                "extension": self.extension,
                "fullDomain": self.full_domain,
                "nameservers": list(self.nameservers),
                "email": self.email,
                "registeredAt": self.registered_at,
                "status": self.status.value,
            }
        )

    @classmethod
    def from_json(cls, raw: str) -> "RegistrationRecord":
        """
        Parse a stored value back into a record.

        Public reader for the store's value format, the inverse of to_json.
        The service itself only writes records.
        """
        data = json.loads(raw)
        return cls(
            subdomain=data["subdomain"],
            extension=data["extension"],
            full_domain=data["fullDomain"],
            nameservers=list(data["nameservers"]),
            email=data["email"],
            registered_at=data["registeredAt"],
            status=RegistrationStatus(data["status"]),
        )


@dataclass(frozen=True)
class RegistrationResult:
    """Successful registration outcome returned to the API layer."""

    domain: str
    nameservers: list[str]
    message: str = MSG_REGISTERED


@dataclass
class RegistrationService:
    """
    Domain service for subdomain registration.

    Orchestrates validation, duplicate detection, NS record creation
    and record persistence. Credentials are injected once at startup.
    """

    store: DomainStore
    dns_provider: DnsProvider
    credentials: DnsCredentials
    clock: Callable[[], datetime] = field(default=_utcnow)

    def register(
        self,
        subdomain: str | None,
        extension: str | None,
        nameservers: list[str] | None,
        email: str | None,
    ) -> RegistrationResult:
        """
        Register subdomain + extension and delegate it to the nameservers.

        Args:
            subdomain: Caller-chosen label (lowercase letters, digits, hyphens)
            extension: Suffix appended verbatim to the subdomain
            nameservers: 2-4 nameserver hostnames, in record creation order
            email: Contact email (not format-checked)

        Returns:
            RegistrationResult echoing the full domain and nameservers

        Raises:
            ValidationError: Input is missing or malformed
            ConflictError: Full domain is already registered
            ConfigurationError: DNS provider credentials are not configured
            ExternalServiceError: DNS provider or store call failed
        """
        self.validate(subdomain, extension, nameservers, email)

        full_domain = subdomain + extension

        if self.store.get(full_domain) is not None:
            logger.info("Registration rejected, already registered: %s", full_domain)
            raise ConflictError(MSG_ALREADY_REGISTERED)

        if not self.credentials.is_complete:
            logger.error("DNS provider credentials are not configured")
            raise ConfigurationError(MSG_MISSING_CONFIGURATION)

        self._create_ns_records(full_domain, nameservers)

        record = RegistrationRecord(
            subdomain=subdomain,
            extension=extension,
            full_domain=full_domain,
            nameservers=list(nameservers),
            email=email,
            registered_at=format_timestamp(self.clock()),
        )
        if not self.store.put_if_absent(full_domain, record.to_json()):
            logger.warning(
                "Concurrent registration won for %s; NS records left at provider: %s",
                full_domain,
                ", ".join(nameservers),
            )
            raise ConflictError(MSG_ALREADY_REGISTERED)

        logger.info("Registered %s with %d nameserver(s)", full_domain, len(nameservers))
        return RegistrationResult(domain=full_domain, nameservers=list(nameservers))

    def validate(
        self,
        subdomain: str | None,
        extension: str | None,
        nameservers: list[str] | None,
        email: str | None,
    ) -> None:
        """
        Validate registration input in fixed order; first violation wins.

        An empty nameserver list counts as present and fails the count
        check rather than the missing-fields check.
        """
        if not subdomain or not extension or nameservers is None or not email:
            raise ValidationError(MSG_MISSING_FIELDS)

        if not NAMESERVERS_MIN <= len(nameservers) <= NAMESERVERS_MAX:
            raise ValidationError(MSG_NAMESERVER_COUNT)

        if not SUBDOMAIN_PATTERN.fullmatch(subdomain):
            raise ValidationError(MSG_INVALID_CHARACTERS)

        if not SUBDOMAIN_MIN_LENGTH <= len(subdomain) <= SUBDOMAIN_MAX_LENGTH:
            raise ValidationError(MSG_INVALID_LENGTH)

    def _create_ns_records(self, full_domain: str, nameservers: list[str]) -> None:
        """Create NS records one at a time; stop at the first failure."""
        created: list[str] = []
        for nameserver in nameservers:
            record = DnsRecord(type="NS", name=full_domain, content=nameserver, ttl=NS_RECORD_TTL)
            result = self.dns_provider.create_record(self.credentials, record)
            if not result.success:
                if created:
                    # No compensating delete; leave a trail for the operator
                    logger.warning(
                        "Partial NS delegation for %s; records not rolled back: %s",
                        full_domain,
                        ", ".join(created),
                    )
                raise ExternalServiceError(
                    MSG_DNS_FAILURE.format(error=result.error or MSG_DNS_UNKNOWN_ERROR)
                )
            created.append(nameserver)
            logger.info("Created NS record %s -> %s", full_domain, nameserver)
