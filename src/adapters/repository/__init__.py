"""Repository adapters - Storage implementations."""

from .memory import InMemoryRegistrationRepository
from .postgres import PostgresRegistrationRepository, ensure_schema

__all__ = ["InMemoryRegistrationRepository", "PostgresRegistrationRepository", "ensure_schema"]
