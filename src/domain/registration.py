"""
Registration domain service - Form validation and submission.

This module plays the form controller: it runs each field validator,
collects failures keyed by field, gates submission on the absence of
errors and hands accepted records to the repository.

Field -> validator mapping
==========================

    nom, prenom, ville -> validate_identity
    email              -> validate_email, then validate_unique_email
    cp                 -> validate_postal_code
    date_naissance     -> validate_age (ISO YYYY-MM-DD string or date)

Uniqueness is only checked once the email format is valid, so a field
never reports more than one error.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Any

from .exceptions import (
    ERROR_MESSAGES,
    INTERNAL_VALIDATION_MESSAGE,
    ErrorCode,
    FieldError,
    RegistrationRejected,
    ValidationError,
)
from .ports import RegistrationRepository
from .validation import (
    validate_age,
    validate_email,
    validate_identity,
    validate_postal_code,
    validate_unique_email,
)

logger = logging.getLogger(__name__)

FIELDS = ("nom", "prenom", "email", "date_naissance", "cp", "ville")


@dataclass(frozen=True)
class Registration:
    """An accepted registration record."""

    nom: str
    prenom: str
    email: str
    date_naissance: str
    cp: str
    ville: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def _clean(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def parse_birth_date(value: Any) -> date | None:
    """
    Parse a form birth date.

    Dates pass through; ISO strings are parsed; anything else yields None
    so that validate_age reports INVALID_DATE.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates the registration flow: field validation, uniqueness
    against stored registrations and persistence.
    """

    repository: RegistrationRepository
    today: Callable[[], date] = field(default=date.today)

    def validate(
        self, candidate: Mapping[str, Any], existing: Iterable[Any] = ()
    ) -> dict[str, FieldError]:
        """
        Run every field validator on a candidate.

        Args:
            candidate: Raw field values; missing fields count as ""
            existing: Registrations the email must not collide with

        Returns:
            Errors keyed by field name; empty when the candidate is valid
        """
        errors: dict[str, FieldError] = {}
        values = {name: _clean(candidate.get(name, "")) for name in FIELDS}
        reference_date = self.today()

        def run(field_name: str, check: Callable[[], Any]) -> None:
            try:
                check()
            except ValidationError as e:
                errors[field_name] = FieldError(e.code, e.message)
            except Exception:
                logger.exception("Unexpected failure while validating field %s", field_name)
                errors[field_name] = FieldError(None, INTERNAL_VALIDATION_MESSAGE)

        run("nom", lambda: validate_identity(values["nom"]))
        run("prenom", lambda: validate_identity(values["prenom"]))
        run("ville", lambda: validate_identity(values["ville"]))
        run("email", lambda: validate_email(values["email"]))
        if "email" not in errors:
            run("email", lambda: validate_unique_email(values["email"], existing))
        run("cp", lambda: validate_postal_code(values["cp"]))
        run(
            "date_naissance",
            lambda: validate_age(parse_birth_date(values["date_naissance"]), reference_date),
        )

        return errors

    def register(self, candidate: Mapping[str, Any]) -> Registration:
        """
        Validate a candidate and store it.

        Args:
            candidate: Raw field values

        Returns:
            The stored registration (values trimmed)

        Raises:
            RegistrationRejected: If any field is invalid or the email is taken
            RegistryUnavailable: If the repository cannot be reached
        """
        existing = self.repository.list_registrations()
        errors = self.validate(candidate, existing)
        if errors:
            logger.warning("Registration rejected: %s", ", ".join(sorted(errors)))
            raise RegistrationRejected(errors)

        values = {name: _clean(candidate.get(name, "")) for name in FIELDS}
        values["date_naissance"] = parse_birth_date(values["date_naissance"]).isoformat()
        registration = Registration(**values)

        if not self.repository.add_registration(registration):
            # Lost a race against a concurrent submit with the same email
            logger.warning("Registration rejected: email stored concurrently")
            raise RegistrationRejected(
                {"email": FieldError(ErrorCode.DUPLICATE_EMAIL, ERROR_MESSAGES["DUPLICATE_EMAIL"])}
            )

        logger.info("Registration stored for %s", registration.email)
        return registration

    def list_registrations(self) -> list[Registration]:
        """Return stored registrations, oldest first."""
        return self.repository.list_registrations()

    def count_registrations(self) -> int:
        """Return the number of stored registrations."""
        return self.repository.count_registrations()
