"""
Identity-bearing domain objects.

Rows are keyed by UUID; an entity without one has not been persisted yet.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class Entity:
    """Compared by id once it has one, by object identity before that."""

    id: UUID | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self) or self.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id) if self.id is not None else id(self)

    def touch(self) -> None:
        self.updated_at = _utcnow()


@dataclass
class AggregateRoot(Entity):
    """
    Unit of consistency that repositories load and save as a whole.

    ``version`` is the value the row held when it was loaded. A save only
    succeeds while the stored row still carries that value, and bumps it.
    """

    version: int = 0

    def increment_version(self) -> None:
        self.version += 1
