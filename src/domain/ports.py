"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .registration import Registration


class RegistrationRepository(Protocol):
    """Port interface for registration persistence."""

    def list_registrations(self) -> list["Registration"]:
        """
        Return every stored registration, oldest first.

        Raises:
            RegistryUnavailable: If the backend cannot be reached
        """
        ...

    def add_registration(self, registration: "Registration") -> bool:
        """
        Persist an accepted registration.

        Email uniqueness is case- and whitespace-insensitive. Backends that
        cannot enforce it (remote API) always return True.

        Args:
            registration: Validated registration record

        Returns:
            True if stored, False if the email is already registered

        Raises:
            RegistryUnavailable: If the backend cannot be reached
            RegistrationRejected: If a remote registry refuses the record
        """
        ...

    def count_registrations(self) -> int:
        """Return the number of stored registrations."""
        ...
