"""
Unit tests for InMemoryRegistrationRepository.

Tests verify protocol compliance, ordering and email uniqueness.
"""

from concurrent.futures import ThreadPoolExecutor

from src.adapters.repository.memory import InMemoryRegistrationRepository
from src.domain.ports import RegistrationRepository
from src.domain.registration import Registration


def make_registration(email: str, nom: str = "Dupont") -> Registration:
    return Registration(
        nom=nom,
        prenom="Jean",
        email=email,
        date_naissance="1990-01-01",
        cp="75001",
        ville="Paris",
    )


class TestInMemoryRepository:
    """Tests for the in-memory adapter."""

    def test_satisfies_protocol(self) -> None:
        """Structural subtyping against RegistrationRepository."""

        def accepts_repository(r: RegistrationRepository) -> None:
            pass

        accepts_repository(InMemoryRegistrationRepository())
        assert InMemoryRegistrationRepository.__bases__ == (object,)

    def test_add_and_list_in_order(self) -> None:
        """Registrations are listed in insertion order."""
        repo = InMemoryRegistrationRepository()
        first = make_registration("a@x.com")
        second = make_registration("b@x.com")

        assert repo.add_registration(first) is True
        assert repo.add_registration(second) is True
        assert repo.list_registrations() == [first, second]
        assert repo.count_registrations() == 2

    def test_duplicate_email_refused(self) -> None:
        """Same email with different case/whitespace is refused."""
        repo = InMemoryRegistrationRepository([make_registration("a@x.com")])
        assert repo.add_registration(make_registration(" A@X.COM ")) is False
        assert repo.count_registrations() == 1

    def test_list_returns_copy(self) -> None:
        """Mutating the returned list does not affect storage."""
        repo = InMemoryRegistrationRepository()
        repo.add_registration(make_registration("a@x.com"))
        repo.list_registrations().clear()
        assert repo.count_registrations() == 1

    def test_concurrent_duplicates_store_once(self) -> None:
        """Only one of many concurrent inserts of one email succeeds."""
        repo = InMemoryRegistrationRepository()

        with ThreadPoolExecutor(max_workers=10) as executor:
            results = list(executor.map(lambda _: repo.add_registration(make_registration("a@x.com")), range(20)))

        assert results.count(True) == 1
        assert repo.count_registrations() == 1
