"""Store adapters - Key-value store implementations."""

from .memory import InMemoryDomainStore
from .postgres import PostgresDomainStore, run_migrations

__all__ = ["InMemoryDomainStore", "PostgresDomainStore", "run_migrations"]
