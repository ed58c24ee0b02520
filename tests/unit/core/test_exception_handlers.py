"""
Tests for the domain exception to HTTP status mapping.
"""

from uuid import uuid4

import pytest

from fieldfeed.api.exception_handlers import _field_errors, status_code_for
from fieldfeed.core.domain import (
    AccountLockedException,
    AuthenticationException,
    AuthorizationException,
    ConcurrencyException,
    EntityNotFoundException,
    InvalidOperationException,
    NotificationException,
    ValidationException,
)


class TestStatusMapping:
    @pytest.mark.parametrize(
        "exc,expected",
        [
            (ValidationException("bad"), 400),
            (InvalidOperationException("confirm", "pending"), 400),
            (EntityNotFoundException("Order", uuid4()), 404),
            (AuthenticationException(), 401),
            (AuthorizationException("delete", "order"), 403),
            (AccountLockedException(), 423),
            (ConcurrencyException("Order", uuid4(), 1, 2), 409),
        ],
    )
    def test_status_codes(self, exc, expected):
        assert status_code_for(exc) == expected

    def test_unmapped_domain_errors_are_bad_requests(self):
        assert status_code_for(NotificationException("smtp down")) == 400


class TestFieldErrors:
    def test_invalid_operation_echoes_current_status(self):
        exc = InvalidOperationException("confirm", "pending", "Order cannot be confirmed. Current status: pending")

        assert _field_errors(exc) == [
            {"field": "status", "message": "Order cannot be confirmed. Current status: pending", "value": "pending"}
        ]

    def test_validation_error_with_field(self):
        assert _field_errors(ValidationException("required", field="products")) == [
            {"field": "products", "message": "required"}
        ]

    def test_validation_error_without_field(self):
        assert _field_errors(ValidationException("Customer information and products are required")) is None
