"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Field content is checked by the domain validators, not here.
"""

from pydantic import BaseModel, ConfigDict, Field


class RegistrationRequest(BaseModel):
    """Request model for a registration submission."""

    model_config = ConfigDict(populate_by_name=True)

    nom: str = ""
    prenom: str = ""
    email: str = ""
    date_naissance: str = Field("", alias="dateNaissance", description="Birth date, YYYY-MM-DD")
    cp: str = Field("", description="French postal code (5 digits)")
    ville: str = ""


class RegistrationResponse(BaseModel):
    """A stored registration."""

    nom: str
    prenom: str
    email: str
    date_naissance: str
    cp: str
    ville: str


class RegistrationListResponse(BaseModel):
    """Response model for the registration list."""

    registrations: list[RegistrationResponse]
    count: int


class CountResponse(BaseModel):
    """Response model for the registration count."""

    count: int


class FieldErrorResponse(BaseModel):
    """One field failure. code is null for an internal validation failure."""

    code: str | None
    message: str


class RejectionResponse(BaseModel):
    """Response model for a rejected registration."""

    message: str
    errors: dict[str, FieldErrorResponse] = {}


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
