"""
In-memory repository adapter - Implements RegistrationRepository protocol.

Process-local storage, the server-side analogue of browser local storage.
Used by default and in tests; contents are lost on restart.
"""

import threading

from src.domain.registration import Registration
from src.domain.validation import normalize_email


class InMemoryRegistrationRepository:
    """
    Implements RegistrationRepository protocol with a list and a lock.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, registrations: list[Registration] | None = None) -> None:
        self._registrations = list(registrations or [])
        self._lock = threading.Lock()

    def list_registrations(self) -> list[Registration]:
        with self._lock:
            return list(self._registrations)

    def add_registration(self, registration: Registration) -> bool:
        """Store the registration unless its normalized email is already present."""
        email = normalize_email(registration.email)
        with self._lock:
            if any(normalize_email(r.email) == email for r in self._registrations):
                return False
            self._registrations.append(registration)
            return True

    def count_registrations(self) -> int:
        with self._lock:
            return len(self._registrations)
