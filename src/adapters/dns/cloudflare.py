"""
Cloudflare DNS provider adapter - Implements DnsProvider protocol.

Creates records through the Cloudflare v4 REST API. Every failure mode
(API-reported error, transport error, undecodable or non-object body) is
turned into a DnsRecordResult so the domain decides how to react.
"""

import logging
from typing import Any

import requests

from src.domain.ports import DnsCredentials, DnsRecord, DnsRecordResult

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.cloudflare.com/client/v4"


class CloudflareDnsProvider:
    """
    Implements DnsProvider protocol via the Cloudflare API.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 10.0) -> None:
        """
        Initialize Cloudflare DNS provider.

        Args:
            base_url: Cloudflare API root
            timeout: Seconds to wait for each API call
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def create_record(self, credentials: DnsCredentials, record: DnsRecord) -> DnsRecordResult:
        """
        Create a DNS record in the credentials' zone.

        Args:
            credentials: API token and zone identifier
            record: Record to create

        Returns:
            DnsRecordResult; on failure error carries the first API error message
        """
        url = f"{self.base_url}/zones/{credentials.zone_id}/dns_records"
        headers = {
            "Authorization": f"Bearer {credentials.api_token}",
            "Content-Type": "application/json",
        }
        payload = {
            "type": record.type,
            "name": record.name,
            "content": record.content,
            "ttl": record.ttl,
        }

        try:
            response = requests.post(url, headers=headers, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("Request Error: %s", e)
            return DnsRecordResult(success=False, error=str(e))

        try:
            result = response.json()
        except requests.exceptions.JSONDecodeError:
            logger.error(
                "JSON Decode Error: Could not parse response (HTTP %s)", response.status_code
            )
            return DnsRecordResult(
                success=False, error=f"Could not parse response (HTTP {response.status_code})"
            )

        if not isinstance(result, dict):
            logger.error(
                "Unexpected response body (HTTP %s): %r", response.status_code, result
            )
            return DnsRecordResult(
                success=False, error=f"Unexpected response (HTTP {response.status_code})"
            )

        if not result.get("success", False):
            errors = result.get("errors")
            if not isinstance(errors, list):
                errors = []
            message = _error_message(errors[0]) if errors else None
            error_msg = "; ".join(_describe_error(e) for e in errors)
            logger.error(
                "API Error creating %s %s: %s", record.type, record.name, error_msg or "no details"
            )
            return DnsRecordResult(success=False, error=message)

        logger.debug("Created %s record %s -> %s", record.type, record.name, record.content)
        return DnsRecordResult(success=True)


def _error_message(entry: Any) -> str | None:
    """Message of one API error entry; entries are normally {"code", "message"} objects."""
    if isinstance(entry, dict):
        message = entry.get("message")
        return str(message) if message is not None else None
    if isinstance(entry, str):
        return entry
    return None


def _describe_error(entry: Any) -> str:
    if isinstance(entry, dict):
        return f"Code: {entry.get('code')}, Message: {entry.get('message')}"
    return repr(entry)
