"""
Domain Layer - Core DDD building blocks

This module provides base classes for Domain-Driven Design:
- Entities: Objects with identity and lifecycle
- Value Objects: Immutable objects compared by value
- Exceptions: Domain-specific error handling
"""

from fieldfeed.core.domain.entities import AggregateRoot, Entity
from fieldfeed.core.domain.exceptions import (
    AccountLockedException,
    AuthenticationException,
    AuthorizationException,
    ConcurrencyException,
    DomainException,
    EntityNotFoundException,
    InvalidOperationException,
    NotificationException,
    ValidationException,
)
from fieldfeed.core.domain.value_objects import (
    Address,
    Email,
    StatusEnum,
    ValueObject,
)

__all__ = [
    # Entities
    "Entity",
    "AggregateRoot",
    # Value Objects
    "ValueObject",
    "Email",
    "Address",
    "StatusEnum",
    # Exceptions
    "DomainException",
    "ValidationException",
    "EntityNotFoundException",
    "InvalidOperationException",
    "ConcurrencyException",
    "AuthenticationException",
    "AuthorizationException",
    "AccountLockedException",
    "NotificationException",
]
