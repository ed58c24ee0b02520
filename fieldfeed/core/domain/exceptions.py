"""
Domain exceptions.

Raised by entities, use cases and repositories; translated into the HTTP
response envelope only by ``fieldfeed.api.exception_handlers``.
"""

from typing import Any


class DomainException(Exception):
    """
    Base for every business-rule failure.

    ``code`` is a stable machine-readable tag for logs; ``details`` carries
    whatever context identifies the record involved.
    """

    default_code = "DOMAIN_ERROR"

    def __init__(self, message: str, code: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}


class ValidationException(DomainException):
    """Input rejected before anything was persisted."""

    default_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


class EntityNotFoundException(DomainException):
    default_code = "ENTITY_NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: Any, message: str | None = None):
        super().__init__(
            message or f"{entity_type} not found",
            details={"entity_type": entity_type, "entity_id": str(entity_id)},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class InvalidOperationException(DomainException):
    """The record exists but its current status forbids the operation."""

    default_code = "INVALID_OPERATION"

    def __init__(self, operation: str, current_state: str, message: str | None = None):
        super().__init__(
            message or f"Cannot {operation} while {current_state}",
            details={"operation": operation, "current_state": current_state},
        )
        self.operation = operation
        self.current_state = current_state


class ConcurrencyException(DomainException):
    """A save lost the race against another write to the same aggregate."""

    default_code = "CONCURRENCY_CONFLICT"

    def __init__(self, entity_type: str, entity_id: Any, expected_version: int, actual_version: int | None = None):
        super().__init__(
            f"{entity_type} was modified by another request, reload it and try again",
            details={
                "entity_type": entity_type,
                "entity_id": str(entity_id),
                "expected_version": expected_version,
                "actual_version": actual_version,
            },
        )
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.expected_version = expected_version
        self.actual_version = actual_version


class AuthenticationException(DomainException):
    """Missing, invalid or expired admin credentials."""

    default_code = "AUTHENTICATION_ERROR"

    def __init__(self, message: str = "Access denied. No token provided."):
        super().__init__(message)


class AuthorizationException(DomainException):
    default_code = "AUTHORIZATION_ERROR"

    def __init__(self, operation: str, resource: str | None = None):
        target = f" on '{resource}'" if resource else ""
        super().__init__(
            f"Not authorized to perform '{operation}'{target}",
            details={"operation": operation, "resource": resource},
        )
        self.operation = operation
        self.resource = resource


class AccountLockedException(DomainException):
    default_code = "ACCOUNT_LOCKED"

    def __init__(self, message: str = "Account is temporarily locked due to multiple failed login attempts."):
        super().__init__(message)


class NotificationException(DomainException):
    """
    A message or its invoice attachment could not be rendered or delivered.

    The notification dispatcher catches these; they never reach a caller.
    """

    default_code = "NOTIFICATION_ERROR"

    def __init__(
        self,
        message: str,
        order_number: str | None = None,
        recipient: str | None = None,
        template: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(
            message,
            details={
                "order_number": order_number,
                "recipient": recipient,
                "template": template,
                "original_error": str(original_error) if original_error else None,
            },
        )
        self.order_number = order_number
        self.recipient = recipient
        self.template = template
        self.original_error = original_error
