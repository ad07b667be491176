"""
Domain exceptions - Semantic error types for domain registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Each error carries the HTTP status code the API layer maps it to.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(RegistrationError):
    """Caller input is malformed or incomplete."""

    status_code = 400


class ConflictError(RegistrationError):
    """Domain is already registered."""

    status_code = 409


class ConfigurationError(RegistrationError):
    """Deployment is missing required DNS provider credentials."""

    status_code = 500


class ExternalServiceError(RegistrationError):
    """Store or DNS provider call failed."""

    status_code = 500
