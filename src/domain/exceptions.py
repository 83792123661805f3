"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.

ValidationError is the single failure channel of the validators: it
carries a stable machine-readable ErrorCode plus a display message.
"""

from enum import Enum
from typing import NamedTuple


class ErrorCode(str, Enum):
    """Stable validation error codes (contract for callers and tests)."""

    INVALID_DATE = "INVALID_DATE"
    UNDERAGE = "UNDERAGE"
    INVALID_TYPE = "INVALID_TYPE"
    INVALID_POSTAL_CODE = "INVALID_POSTAL_CODE"
    XSS_DETECTED = "XSS_DETECTED"
    INVALID_NAME = "INVALID_NAME"
    INVALID_EMAIL = "INVALID_EMAIL"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"


# Display text. INVALID_TYPE has one message per validator.
ERROR_MESSAGES = {
    "INVALID_DATE": "Date de naissance invalide",
    "UNDERAGE": "L'utilisateur doit avoir au moins 18 ans",
    "INVALID_POSTAL_TYPE": "Le code postal doit être une chaîne de caractères",
    "INVALID_POSTAL_CODE": "Code postal français invalide",
    "INVALID_IDENTITY_TYPE": "Le nom ou le prénom doit être une chaîne de caractères",
    "XSS_DETECTED": "Contenu HTML détecté",
    "INVALID_NAME": "Caractères invalides dans le nom",
    "INVALID_EMAIL_TYPE": "L'email doit être une chaîne de caractères",
    "INVALID_EMAIL": "Format d'email invalide",
    "DUPLICATE_EMAIL": "Cet email est déjà utilisé",
}

INTERNAL_VALIDATION_MESSAGE = "Erreur de validation"


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class ValidationError(RegistrationError):
    """A single business rule violation, identified by its code."""

    def __init__(self, code: ErrorCode | str, message: str) -> None:
        super().__init__(message)
        self.code = ErrorCode(code)
        self.message = message

    def __repr__(self) -> str:
        return f"ValidationError({self.code.value!r}, {self.message!r})"


class FieldError(NamedTuple):
    """
    Outcome recorded for one form field.

    code is None for an unexpected (non-validation) failure.
    """

    code: ErrorCode | None
    message: str


class RegistrationRejected(RegistrationError):
    """Candidate refused, either by local validation or by the remote registry."""

    def __init__(
        self,
        errors: dict[str, FieldError] | None = None,
        message: str = "Inscription refusée",
    ) -> None:
        super().__init__(message)
        self.errors = dict(errors or {})
        self.message = message


class RegistryUnavailable(RegistrationError):
    """Persistence backend could not be reached or failed server-side."""

    pass
