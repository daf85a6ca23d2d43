"""Unit tests for the exception hierarchy."""

import pytest

from resource_gateway.exceptions import (
    AccessDenied,
    ConfigurationError,
    DuplicateRouteError,
    GatewayError,
    InternalStoreError,
    InvalidCredential,
    InvalidInput,
    NotFound,
    RouteValidationError,
    Unauthenticated,
)


class TestGatewayError:
    """Tests for the base exception class."""

    def test_inherits_from_exception(self) -> None:
        """GatewayError inherits from Exception."""
        assert issubclass(GatewayError, Exception)

    def test_default_message_and_status(self) -> None:
        """A bare GatewayError is a generic 500."""
        error = GatewayError()
        assert error.status_code == 500
        assert error.message == "Internal server error"
        assert str(error) == "Internal server error"

    def test_message_is_preserved(self) -> None:
        """Exception message is accessible as message and str()."""
        error = GatewayError("specific error details")
        assert error.message == "specific error details"
        assert str(error) == "specific error details"


class TestRequestErrors:
    """Each request error maps to exactly one HTTP status."""

    @pytest.mark.parametrize(
        ("error_class", "status_code"),
        [
            (Unauthenticated, 401),
            (InvalidCredential, 401),
            (AccessDenied, 403),
            (NotFound, 404),
            (InvalidInput, 400),
            (InternalStoreError, 500),
        ],
    )
    def test_status_codes(self, error_class: type[GatewayError], status_code: int) -> None:
        """Status code is a class attribute, independent of the message."""
        assert error_class.status_code == status_code
        assert error_class("custom").status_code == status_code

    @pytest.mark.parametrize(
        "error_class",
        [Unauthenticated, InvalidCredential, AccessDenied, NotFound, InvalidInput],
    )
    def test_can_be_caught_with_base_class(self, error_class: type[GatewayError]) -> None:
        """Every request error is a GatewayError."""
        with pytest.raises(GatewayError):
            raise error_class("boom")

    def test_store_error_message_is_generic(self) -> None:
        """InternalStoreError never carries driver details by default."""
        assert InternalStoreError().message == "Database error"


class TestConfigurationErrors:
    """Tests for startup-time errors."""

    def test_route_validation_error_is_configuration_error(self) -> None:
        """RouteValidationError inherits from ConfigurationError."""
        assert issubclass(RouteValidationError, ConfigurationError)

    def test_duplicate_route_error_is_configuration_error(self) -> None:
        """DuplicateRouteError inherits from ConfigurationError."""
        assert issubclass(DuplicateRouteError, ConfigurationError)

    def test_configuration_error_is_gateway_error(self) -> None:
        """ConfigurationError can be caught as GatewayError."""
        with pytest.raises(GatewayError, match="AUTH_MODE"):
            raise ConfigurationError("AUTH_MODE must be one of ['header', 'session']")
