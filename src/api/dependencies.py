"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Request

from src.domain.ports import RegistrationRepository
from src.domain.registration import RegistrationService


def get_repository(request: Request) -> RegistrationRepository:
    """
    Get the registration repository from app state.

    The repository is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.repository


def get_registration_service(request: Request) -> RegistrationService:
    """Create registration service bound to the app's repository."""
    return RegistrationService(repository=get_repository(request))
