"""
Immutable domain primitives compared by value.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

# Smallest currency unit amounts are rounded to
CENTS = Decimal("0.01")


@dataclass(frozen=True)
class ValueObject:
    """Frozen dataclass that runs ``_validate`` right after construction."""

    def __post_init__(self):
        self._validate()

    def _validate(self) -> None:
        return None


@dataclass(frozen=True)
class Email(ValueObject):
    """Address stored trimmed and lowercased; lookups compare this form."""

    address: str

    def _validate(self) -> None:
        normalized = (self.address or "").strip().lower()
        if "@" not in normalized:
            raise ValueError(f"Invalid email address: {self.address}")
        object.__setattr__(self, "address", normalized)

    def __str__(self) -> str:
        return self.address


@dataclass(frozen=True)
class Address(ValueObject):
    """
    Delivery address snapshot taken when the order is placed.

    Every part is optional; orders may be quoted before an address is known.
    """

    street: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""

    def get_full_address(self) -> str:
        parts = (self.street, self.city, self.state, self.postal_code, self.country)
        return ", ".join(part for part in parts if part)

    def is_empty(self) -> bool:
        return not self.get_full_address()

    def __str__(self) -> str:
        return self.get_full_address()


class StatusEnum(str, Enum):
    """String enum whose members serialize as their plain value."""

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]
