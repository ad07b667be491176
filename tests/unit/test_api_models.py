"""
Unit tests for API request/response models.

Tests Pydantic model validation for the check and register endpoints.
"""

import pytest
from pydantic import ValidationError

from src.api.models import CheckResponse, ErrorResponse, RegisterRequest, RegisterResponse


class TestRegisterRequest:
    """Tests for RegisterRequest model."""

    def test_valid_register_request(self) -> None:
        request = RegisterRequest(
            subdomain="test",
            extension=".example.com",
            nameservers=["ns1.x.com", "ns2.x.com"],
            email="a@b.com",
        )
        assert request.subdomain == "test"
        assert request.nameservers == ["ns1.x.com", "ns2.x.com"]

    def test_all_fields_optional(self) -> None:
        """Presence is enforced by the domain service, not the schema."""
        request = RegisterRequest()
        assert request.subdomain is None
        assert request.extension is None
        assert request.nameservers is None
        assert request.email is None

    def test_values_not_normalized(self) -> None:
        """Subdomain case and email format are left for the domain to judge."""
        request = RegisterRequest(subdomain="UPPER", email="not-an-email")
        assert request.subdomain == "UPPER"
        assert request.email == "not-an-email"

    def test_nameservers_must_be_list(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(nameservers="ns1.x.com")
        assert "nameservers" in str(exc_info.value)

    def test_nameserver_entries_must_be_strings(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(nameservers=[1, 2])

    def test_empty_nameserver_list_accepted(self) -> None:
        assert RegisterRequest(nameservers=[]).nameservers == []


class TestResponses:
    """Tests for response models."""

    def test_register_response(self) -> None:
        response = RegisterResponse(
            success=True,
            domain="test.example.com",
            nameservers=["ns1.x.com", "ns2.x.com"],
            message="Domain registered successfully.",
        )
        assert response.model_dump() == {
            "success": True,
            "domain": "test.example.com",
            "nameservers": ["ns1.x.com", "ns2.x.com"],
            "message": "Domain registered successfully.",
        }

    def test_check_response(self) -> None:
        assert CheckResponse(available=True, domain="a.example.com").model_dump() == {
            "available": True,
            "domain": "a.example.com",
        }

    def test_error_response(self) -> None:
        assert ErrorResponse(error="Domain is already registered.").error == (
            "Domain is already registered."
        )

    def test_error_response_requires_error(self) -> None:
        with pytest.raises(ValidationError):
            ErrorResponse()  # type: ignore[call-arg]
