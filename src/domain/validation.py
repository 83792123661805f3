"""
Registration validators - Pure business rules for the registration form.

Every validator either returns normally (input accepted) or raises exactly
one ValidationError. No state, no I/O; the only ambient input is the
current date used by validate_age, which callers may pass explicitly.

Check order inside a validator goes from the most specific failure to the
most general one (markup is reported as XSS_DETECTED, not INVALID_NAME).
"""

import re
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from .exceptions import ERROR_MESSAGES, ErrorCode, ValidationError

LEGAL_AGE = 18
MAX_AGE = 120
POSTAL_CODE_LENGTH = 5
MAX_EMAIL_LOCAL_LENGTH = 64

_POSTAL_CODE_RE = re.compile(rf"[0-9]{{{POSTAL_CODE_LENGTH}}}")
_MARKUP_RE = re.compile(r"<[^>]*>")
# ASCII letters, Latin-1 Supplement letters (minus × and ÷), hyphen, space
_IDENTITY_RE = re.compile(r"[A-Za-zÀ-ÖØ-öø-ÿ\- ]+")
_EMAIL_RE = re.compile(
    r"[A-Za-z0-9]"
    rf"(?:[A-Za-z0-9._%+-]{{0,{MAX_EMAIL_LOCAL_LENGTH - 2}}}[A-Za-z0-9])?"
    r"@[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)+"
)


def calculate_age(birth_date: date, today: date) -> int:
    """
    Age in whole years on `today`.

    The birthday counts as reached on the day itself. Compares
    (month, day) tuples, so a February 29 birth date needs no special case.
    """
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def validate_age(birth_date: Any, today: date | None = None) -> int:
    """
    Validate a birth date and return the age in years.

    Args:
        birth_date: Claimed birth date (date or datetime)
        today: Reference date, defaults to the current local date

    Returns:
        Age in whole years

    Raises:
        ValidationError: INVALID_DATE for non-dates, future dates and ages
            above MAX_AGE; UNDERAGE below LEGAL_AGE
    """
    if not isinstance(birth_date, date):
        raise ValidationError(ErrorCode.INVALID_DATE, ERROR_MESSAGES["INVALID_DATE"])
    if isinstance(birth_date, datetime):
        birth_date = birth_date.date()

    if today is None:
        today = date.today()
    elif isinstance(today, datetime):
        today = today.date()

    if birth_date > today:
        raise ValidationError(ErrorCode.INVALID_DATE, ERROR_MESSAGES["INVALID_DATE"])

    age = calculate_age(birth_date, today)
    if age > MAX_AGE:
        raise ValidationError(ErrorCode.INVALID_DATE, ERROR_MESSAGES["INVALID_DATE"])

    if age < LEGAL_AGE:
        raise ValidationError(ErrorCode.UNDERAGE, ERROR_MESSAGES["UNDERAGE"])

    return age


def validate_postal_code(code: Any) -> None:
    """Validate a French postal code: exactly five ASCII digits."""
    if not isinstance(code, str):
        raise ValidationError(ErrorCode.INVALID_TYPE, ERROR_MESSAGES["INVALID_POSTAL_TYPE"])

    if not _POSTAL_CODE_RE.fullmatch(code):
        raise ValidationError(ErrorCode.INVALID_POSTAL_CODE, ERROR_MESSAGES["INVALID_POSTAL_CODE"])


def validate_identity(value: Any) -> None:
    """
    Validate an identity-like field (surname, given name, city).

    Letters (accented Latin included), spaces and hyphens only.
    HTML-like tags are rejected first as XSS_DETECTED.
    """
    if not isinstance(value, str):
        raise ValidationError(ErrorCode.INVALID_TYPE, ERROR_MESSAGES["INVALID_IDENTITY_TYPE"])

    if _MARKUP_RE.search(value):
        raise ValidationError(ErrorCode.XSS_DETECTED, ERROR_MESSAGES["XSS_DETECTED"])

    if not _IDENTITY_RE.fullmatch(value):
        raise ValidationError(ErrorCode.INVALID_NAME, ERROR_MESSAGES["INVALID_NAME"])


def validate_email(email: Any) -> None:
    """Validate email address format with strict ASCII rules."""
    if not isinstance(email, str):
        raise ValidationError(ErrorCode.INVALID_TYPE, ERROR_MESSAGES["INVALID_EMAIL_TYPE"])

    if not _EMAIL_RE.fullmatch(email) or ".." in email:
        raise ValidationError(ErrorCode.INVALID_EMAIL, ERROR_MESSAGES["INVALID_EMAIL"])


def normalize_email(email: str) -> str:
    """Applies: strip whitespace + lowercase."""
    return email.strip().lower()


def _record_email(record: Any) -> Any:
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get("email")
    return getattr(record, "email", None)


def validate_unique_email(email: str, registrations: Iterable[Any]) -> None:
    """
    Ensure an email is not already registered.

    The candidate must already have passed validate_email; a non-string
    candidate raises AttributeError, not a ValidationError. Records without
    a string email (including None entries) never match.

    Args:
        email: Candidate email address
        registrations: Existing records, mappings or objects with `email`

    Raises:
        ValidationError: DUPLICATE_EMAIL if a normalized match exists
    """
    normalized = normalize_email(email)
    for record in registrations:
        existing = _record_email(record)
        if not isinstance(existing, str):
            continue
        if normalize_email(existing) == normalized:
            raise ValidationError(ErrorCode.DUPLICATE_EMAIL, ERROR_MESSAGES["DUPLICATE_EMAIL"])
