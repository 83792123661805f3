"""
API v1 routes.

Defines REST endpoints for the registration API:
- GET  /v1/registrations        - List registrants
- POST /v1/registrations        - Submit a registration
- GET  /v1/registrations/count  - Count registrants
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_registration_service
from src.api.models import (
    CountResponse,
    ErrorResponse,
    RegistrationListResponse,
    RegistrationRequest,
    RegistrationResponse,
    RejectionResponse,
)
from src.domain.exceptions import RegistrationError, RegistrationRejected, RegistryUnavailable
from src.domain.registration import RegistrationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["v1"])

UNAVAILABLE_DETAIL = "Serveur indisponible, veuillez réessayer plus tard."


@router.get(
    "/registrations",
    response_model=RegistrationListResponse,
    summary="List registrations",
)
async def list_registrations(
    service: RegistrationService = Depends(get_registration_service),
) -> RegistrationListResponse:
    """
    List registered users.

    Any backend failure yields an empty list rather than an error.
    """
    try:
        registrations = service.list_registrations()
    except RegistrationError as e:
        logger.warning("Registry failed (%s), returning empty registration list", e)
        registrations = []

    return RegistrationListResponse(
        registrations=[RegistrationResponse(**r.to_dict()) for r in registrations],
        count=len(registrations),
    )


@router.post(
    "/registrations",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": RejectionResponse, "description": "Invalid or duplicate registration"},
        502: {"model": ErrorResponse, "description": "Registry refused the registration"},
        503: {"model": ErrorResponse, "description": "Registry unavailable"},
    },
    summary="Submit a registration",
    description="Validate the six registration fields and store the registrant.",
)
async def create_registration(
    request_data: RegistrationRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> RegistrationResponse | JSONResponse:
    """
    Register a user.

    - **nom**, **prenom**, **ville**: letters, accents, spaces and hyphens
    - **email**: unique email address
    - **dateNaissance**: YYYY-MM-DD, at least 18 years ago
    - **cp**: 5-digit French postal code
    """
    try:
        registration = service.register(request_data.model_dump())
    except RegistrationRejected as e:
        body = RejectionResponse(
            message=e.message,
            errors={
                name: {"code": error.code.value if error.code else None, "message": error.message}
                for name, error in e.errors.items()
            },
        )
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())
    except RegistryUnavailable:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=UNAVAILABLE_DETAIL,
        ) from None
    except RegistrationError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from None

    return RegistrationResponse(**registration.to_dict())


@router.get(
    "/registrations/count",
    response_model=CountResponse,
    responses={
        502: {"model": ErrorResponse, "description": "Registry error"},
        503: {"model": ErrorResponse, "description": "Registry unavailable"},
    },
    summary="Count registrations",
)
async def count_registrations(
    service: RegistrationService = Depends(get_registration_service),
) -> CountResponse:
    """Return the number of registered users."""
    try:
        return CountResponse(count=service.count_registrations())
    except RegistryUnavailable:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=UNAVAILABLE_DETAIL,
        ) from None
    except RegistrationError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from None
