"""UUID-backed identifier value objects.

Identifiers keep the text they were created from, so
``EnrollmentId.from_string(s)`` always renders back as ``s``.  Equality and
hashing ignore the case of the hex digits: two spellings of the same UUID
identify the same entity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

from tournament_core.core.errors import InvalidIdentifierError
from tournament_core.core.ids import is_uuid, new_id

_IdT = TypeVar("_IdT", bound="EntityId")


@dataclass(frozen=True, eq=False)
class EntityId:
    """Base identifier.  Subclasses are distinct, mutually unequal types."""

    value: str

    def __post_init__(self) -> None:
        label = type(self).__name__
        if not isinstance(self.value, str) or not self.value:
            raise InvalidIdentifierError(f"{label} must be a non-empty string")
        if not is_uuid(self.value):
            raise InvalidIdentifierError(f"Invalid UUID format: {self.value}")

    @classmethod
    def create(cls: type[_IdT]) -> _IdT:
        """Generate a fresh identifier."""
        return cls(new_id())

    @classmethod
    def from_string(cls: type[_IdT], text: Any) -> _IdT:
        """Parse and validate an existing identifier."""
        return cls(text)

    @classmethod
    def coerce(cls: type[_IdT], value: Any) -> _IdT:
        """Accept either an instance of this type or its text form."""
        if isinstance(value, cls):
            return value
        return cls.from_string(value)

    def __str__(self) -> str:
        return self.value

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False
        return self.value.lower() == other.value.lower()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.value.lower()))


class EnrollmentId(EntityId):
    """Identity of an Enrollment aggregate."""


class CompetitionId(EntityId):
    """Identity of a competition."""
