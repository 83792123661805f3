"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A valid registration candidate
- In-memory repository and registration service
"""

from datetime import date

import pytest

from src.adapters.repository.memory import InMemoryRegistrationRepository
from src.domain.registration import RegistrationService

TODAY = date(2026, 10, 19)


@pytest.fixture
def candidate() -> dict[str, str]:
    """A candidate that passes every validator on TODAY."""
    return {
        "nom": "Dupont",
        "prenom": "Jean-Pierre",
        "email": "jean.dupont@example.com",
        "date_naissance": "1990-05-17",
        "cp": "75001",
        "ville": "Paris",
    }


@pytest.fixture
def repository() -> InMemoryRegistrationRepository:
    """Empty in-memory repository."""
    return InMemoryRegistrationRepository()


@pytest.fixture
def service(repository: InMemoryRegistrationRepository) -> RegistrationService:
    """Registration service pinned to TODAY."""
    return RegistrationService(repository=repository, today=lambda: TODAY)
