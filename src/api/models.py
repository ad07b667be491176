"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Request fields are optional at the schema level: presence and shape rules
live in the domain service so that their order and messages are fixed.
"""

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Request model for subdomain registration."""

    subdomain: str | None = Field(
        default=None, description="Lowercase letters, digits and hyphens; 3-63 characters"
    )
    extension: str | None = Field(
        default=None, description="Suffix appended verbatim, e.g. '.example.com'"
    )
    nameservers: list[str] | None = Field(default=None, description="2-4 nameserver hostnames")
    email: str | None = Field(default=None, description="Contact email")


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    success: bool
    domain: str
    nameservers: list[str]
    message: str


class CheckResponse(BaseModel):
    """Response model for availability check."""

    available: bool
    domain: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
