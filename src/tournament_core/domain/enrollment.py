"""Enrollment aggregate: one player's participation in one competition.

Instances never change after construction.  Every command validates the
move against ``EnrollmentStatus`` and returns a new ``Enrollment``; on
failure the error propagates and the receiver is untouched.

Lifecycle
---------
- ``request``       -> REQUESTED  (player asks to join)
- ``invite``        -> INVITED    (organiser invites the player)
- ``direct_enroll`` -> APPROVED   (organiser enrols without a request)
- ``from_persistence`` rehydrates a record with its stored status as-is.

Invariants
----------
- ``enrollment_id``, ``competition_id`` and ``user_id`` are always present.
- ``custom_handicap`` is finite and within [-10.0, 54.0] when set.
- ``team_id`` is non-blank when set and only assignable while APPROVED.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from tournament_core.core.enums import TeeCategory
from tournament_core.core.errors import EnrollmentStateError, InvalidValueError
from tournament_core.core.ids import parse_timestamp, to_iso, utc_now
from tournament_core.domain.identifiers import EnrollmentId
from tournament_core.domain.status import EnrollmentStatus
from tournament_core.domain.value_objects import (
    optional_tee_category,
    require_text,
    validate_custom_handicap,
)

_UNSET: Any = object()


class Enrollment:
    """Aggregate root for a competition enrollment."""

    __slots__ = (
        "_enrollment_id",
        "_competition_id",
        "_user_id",
        "_status",
        "_team_id",
        "_custom_handicap",
        "_tee_category",
        "_created_at",
        "_updated_at",
    )

    def __init__(
        self,
        *,
        enrollment_id: EnrollmentId | str,
        competition_id: str,
        user_id: str,
        status: EnrollmentStatus | str,
        team_id: str | None = None,
        custom_handicap: float | None = None,
        tee_category: TeeCategory | str | None = None,
        created_at: datetime | str | None = None,
        updated_at: datetime | str | None = None,
    ) -> None:
        if enrollment_id is None:
            raise InvalidValueError("enrollment_id is required")
        self._enrollment_id = EnrollmentId.coerce(enrollment_id)
        self._competition_id = require_text(competition_id, "competition_id")
        self._user_id = require_text(user_id, "user_id")
        if status is None:
            raise InvalidValueError("status is required")
        self._status = EnrollmentStatus.from_label(status)
        if team_id is not None:
            require_text(team_id, "team_id")
        self._team_id = team_id
        self._custom_handicap = (
            validate_custom_handicap(custom_handicap)
            if custom_handicap is not None
            else None
        )
        self._tee_category = optional_tee_category(tee_category)
        try:
            self._created_at = parse_timestamp(created_at)
            self._updated_at = parse_timestamp(updated_at)
        except ValueError as exc:
            raise InvalidValueError(f"Invalid enrollment timestamp: {exc}") from exc

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def request(
        cls,
        *,
        enrollment_id: EnrollmentId | str,
        competition_id: str,
        user_id: str,
        tee_category: TeeCategory | str | None = None,
    ) -> Enrollment:
        """Player asks to join a competition."""
        return cls(
            enrollment_id=enrollment_id,
            competition_id=competition_id,
            user_id=user_id,
            status=EnrollmentStatus.REQUESTED,
            tee_category=tee_category,
        )

    @classmethod
    def invite(
        cls,
        *,
        enrollment_id: EnrollmentId | str,
        competition_id: str,
        user_id: str,
        tee_category: TeeCategory | str | None = None,
    ) -> Enrollment:
        """Organiser invites a player."""
        return cls(
            enrollment_id=enrollment_id,
            competition_id=competition_id,
            user_id=user_id,
            status=EnrollmentStatus.INVITED,
            tee_category=tee_category,
        )

    @classmethod
    def direct_enroll(
        cls,
        *,
        enrollment_id: EnrollmentId | str,
        competition_id: str,
        user_id: str,
        custom_handicap: float | None = None,
        tee_category: TeeCategory | str | None = None,
    ) -> Enrollment:
        """Organiser enrols a player directly, skipping the request step."""
        return cls(
            enrollment_id=enrollment_id,
            competition_id=competition_id,
            user_id=user_id,
            status=EnrollmentStatus.APPROVED,
            custom_handicap=custom_handicap,
            tee_category=tee_category,
        )

    @classmethod
    def from_persistence(cls, **props: Any) -> Enrollment:
        """Rehydrate a stored record.  The status is taken as given."""
        return cls(**props)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def enrollment_id(self) -> EnrollmentId:
        return self._enrollment_id

    @property
    def competition_id(self) -> str:
        return self._competition_id

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def status(self) -> EnrollmentStatus:
        return self._status

    @property
    def team_id(self) -> str | None:
        return self._team_id

    @property
    def custom_handicap(self) -> float | None:
        return self._custom_handicap

    @property
    def tee_category(self) -> TeeCategory | None:
        return self._tee_category

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_pending(self) -> bool:
        return self._status.is_pending

    @property
    def is_approved(self) -> bool:
        return self._status.is_active

    @property
    def is_rejected(self) -> bool:
        return self._status.is_rejected

    @property
    def is_cancelled(self) -> bool:
        return self._status.is_cancelled

    @property
    def is_withdrawn(self) -> bool:
        return self._status.is_withdrawn

    @property
    def is_final(self) -> bool:
        return self._status.is_final

    @property
    def has_team_assigned(self) -> bool:
        return self._team_id is not None

    @property
    def has_custom_handicap(self) -> bool:
        return self._custom_handicap is not None

    def can_transition_to(self, status: EnrollmentStatus | str) -> bool:
        return self._status.can_transition_to(status)

    # ------------------------------------------------------------------
    # Status transitions
    # ------------------------------------------------------------------

    def approve(self) -> Enrollment:
        """REQUESTED/INVITED -> APPROVED."""
        return self._transition(EnrollmentStatus.APPROVED)

    def reject(self) -> Enrollment:
        """REQUESTED/INVITED -> REJECTED."""
        return self._transition(EnrollmentStatus.REJECTED)

    def cancel(self) -> Enrollment:
        """REQUESTED/INVITED -> CANCELLED (player backs out before approval)."""
        return self._transition(EnrollmentStatus.CANCELLED)

    def withdraw(self) -> Enrollment:
        """APPROVED -> WITHDRAWN."""
        return self._transition(EnrollmentStatus.WITHDRAWN)

    def _transition(self, target: EnrollmentStatus) -> Enrollment:
        self._status.validate_transition(target)
        return self._evolve(status=target)

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def assign_to_team(self, team_id: str) -> Enrollment:
        """Place an approved player on a team.

        Raises ``EnrollmentStateError`` unless APPROVED, and
        ``InvalidValueError`` for a blank team id.
        """
        if not self._status.is_active:
            raise EnrollmentStateError(
                "Teams can only be assigned to approved enrollments. "
                f"Current status: {self._status}"
            )
        if not isinstance(team_id, str) or not team_id.strip():
            raise InvalidValueError("Team id must not be empty")
        return self._evolve(team_id=team_id.strip())

    def set_custom_handicap(self, handicap: float) -> Enrollment:
        return self._evolve(custom_handicap=validate_custom_handicap(handicap))

    def remove_custom_handicap(self) -> Enrollment:
        return self._evolve(custom_handicap=None)

    def _evolve(
        self,
        *,
        status: EnrollmentStatus = _UNSET,
        team_id: str | None = _UNSET,
        custom_handicap: float | None = _UNSET,
    ) -> Enrollment:
        return Enrollment(
            enrollment_id=self._enrollment_id,
            competition_id=self._competition_id,
            user_id=self._user_id,
            status=self._status if status is _UNSET else status,
            team_id=self._team_id if team_id is _UNSET else team_id,
            custom_handicap=(
                self._custom_handicap if custom_handicap is _UNSET else custom_handicap
            ),
            tee_category=self._tee_category,
            created_at=self._created_at,
            updated_at=utc_now(),
        )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_persistence(self) -> dict[str, Any]:
        """Flatten to primitives for the mapping boundary."""
        return {
            "enrollment_id": str(self._enrollment_id),
            "competition_id": self._competition_id,
            "user_id": self._user_id,
            "status": str(self._status),
            "team_id": self._team_id,
            "custom_handicap": self._custom_handicap,
            "tee_category": self._tee_category.value if self._tee_category else None,
            "created_at": to_iso(self._created_at),
            "updated_at": to_iso(self._updated_at),
        }

    # Identity equality: same id means same aggregate, whatever the fields.
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Enrollment):
            return NotImplemented
        return self._enrollment_id == other._enrollment_id

    def __hash__(self) -> int:
        return hash(self._enrollment_id)

    def __repr__(self) -> str:
        return (
            f"Enrollment({self._enrollment_id}, user={self._user_id}, "
            f"competition={self._competition_id}, status={self._status})"
        )
