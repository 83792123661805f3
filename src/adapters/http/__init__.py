"""HTTP adapters - Remote registry implementations."""

from .remote import RemoteRegistrationRepository

__all__ = ["RemoteRegistrationRepository"]
