"""DNS adapters - DNS provider implementations."""

from .cloudflare import CloudflareDnsProvider

__all__ = ["CloudflareDnsProvider"]
