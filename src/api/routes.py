"""
API routes - Availability and registration endpoints.

This module defines the HTTP endpoints:
- GET /api/check - Report whether a domain is available
- POST /api/register - Register a subdomain and delegate it to nameservers
- OPTIONS on both paths - CORS preflight

Domain errors are not caught here; the exception handlers in
src.api.main turn them into {"error": ...} responses.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.dependencies import get_availability_service, get_registration_service
from src.api.models import CheckResponse, ErrorResponse, RegisterRequest, RegisterResponse
from src.domain.availability import AvailabilityService
from src.domain.registration import RegistrationService

router = APIRouter(tags=["domains"])

CHECK_METHODS = "GET, OPTIONS"
REGISTER_METHODS = "POST, OPTIONS"


def cors_preflight(methods: str) -> Response:
    """Empty preflight response advertising the endpoint's methods."""
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": methods,
            "Access-Control-Allow-Headers": "Content-Type",
        },
    )


@router.get(
    "/check",
    response_model=CheckResponse,
    responses={400: {"model": ErrorResponse, "description": "Domain missing"}},
    summary="Check domain availability",
    description="Report whether the full domain is free to register.",
)
def check(
    domain: str | None = Query(default=None, description="Full domain to look up"),
    service: AvailabilityService = Depends(get_availability_service),
) -> CheckResponse:
    """
    Check whether a domain is already registered.

    - **domain**: full domain, e.g. `test.example.com`
    """
    result = service.check(domain)
    return CheckResponse(available=result.available, domain=result.domain)


@router.options("/check", include_in_schema=False)
async def check_preflight() -> Response:
    return cors_preflight(CHECK_METHODS)


@router.post(
    "/register",
    response_model=RegisterResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        409: {"model": ErrorResponse, "description": "Domain already registered"},
        500: {"model": ErrorResponse, "description": "Configuration or DNS provider failure"},
    },
    summary="Register a subdomain",
    description="Validate the request, create one NS record per nameserver "
    "and store the registration.",
)
def register(
    request_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> RegisterResponse:
    """
    Register a subdomain under an extension.

    - **subdomain**: lowercase letters, digits and hyphens (3-63 characters)
    - **extension**: suffix appended verbatim
    - **nameservers**: 2-4 nameserver hostnames
    - **email**: contact email
    """
    result = service.register(
        request_data.subdomain,
        request_data.extension,
        request_data.nameservers,
        request_data.email,
    )
    return RegisterResponse(
        success=True,
        domain=result.domain,
        nameservers=result.nameservers,
        message=result.message,
    )


@router.options("/register", include_in_schema=False)
async def register_preflight() -> Response:
    return cors_preflight(REGISTER_METHODS)
