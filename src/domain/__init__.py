"""
Domain layer - Pure business logic with zero framework imports.

This package contains the registration form validators and the
registration service. It defines its own port interface for persistence,
keeping the rules independent of storage and transport.
"""

from .exceptions import (
    ErrorCode,
    FieldError,
    RegistrationError,
    RegistrationRejected,
    RegistryUnavailable,
    ValidationError,
)
from .ports import RegistrationRepository
from .registration import Registration, RegistrationService
from .validation import (
    validate_age,
    validate_email,
    validate_identity,
    validate_postal_code,
    validate_unique_email,
)

__all__ = [
    "ErrorCode",
    "FieldError",
    "Registration",
    "RegistrationError",
    "RegistrationRejected",
    "RegistrationRepository",
    "RegistrationService",
    "RegistryUnavailable",
    "ValidationError",
    "validate_age",
    "validate_email",
    "validate_identity",
    "validate_postal_code",
    "validate_unique_email",
]
