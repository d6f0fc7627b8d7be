"""Lifecycle status enums and their transition tables.

Each status is a closed ``str`` enum.  Legal moves live in exactly one
module-level table per enum, keyed by member; every query and validation
goes through ``_TransitionRules`` so no caller compares raw labels.

Enrollment::

    REQUESTED ─┬─> APPROVED ──> WITHDRAWN
    INVITED  ──┤
               ├─> REJECTED
               └─> CANCELLED

Match::

    SCHEDULED ──> IN_PROGRESS ──> COMPLETED
        └──────────────┴────────> WALKOVER

Round::

    PENDING_TEAMS ──> PENDING_MATCHES ──> SCHEDULED ──> IN_PROGRESS ──> COMPLETED
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, TypeVar

from tournament_core.core.errors import InvalidStatusError, InvalidTransitionError

_StatusT = TypeVar("_StatusT", bound="_TransitionRules")


class _TransitionRules:
    """Query and validation surface shared by every lifecycle enum."""

    @classmethod
    def transition_table(cls) -> Mapping[Any, frozenset]:
        return _TABLES[cls]

    @classmethod
    def from_label(cls: type[_StatusT], label: Any) -> _StatusT:
        """Build a status from its canonical label.

        Raises ``InvalidStatusError`` for anything outside the enumeration.
        """
        if isinstance(label, cls):
            return label
        return cls(label)  # type: ignore[call-arg]

    @classmethod
    def labels(cls) -> list[str]:
        return [member.value for member in cls]  # type: ignore[attr-defined]

    @classmethod
    def _missing_(cls, value: object) -> Any:
        raise InvalidStatusError(
            f"Invalid {cls.__name__}: {value!r}. "
            f"Valid values: {', '.join(cls.labels())}"
        )

    @property
    def allowed_transitions(self) -> frozenset:
        return self.transition_table()[self]

    def can_transition_to(self, target: Any) -> bool:
        """Pure query; unknown labels are simply not reachable."""
        try:
            status = type(self).from_label(target)
        except InvalidStatusError:
            return False
        return status in self.allowed_transitions

    def validate_transition(self, target: Any) -> None:
        """Raise ``InvalidTransitionError`` unless *target* is adjacent."""
        status = type(self).from_label(target)
        if status not in self.allowed_transitions:
            raise InvalidTransitionError(
                str(self),
                str(status),
                sorted(s.value for s in self.allowed_transitions),
            )

    @property
    def is_final(self) -> bool:
        """Terminal states have no outgoing transitions."""
        return not self.allowed_transitions

    def __str__(self) -> str:
        return self.value  # type: ignore[attr-defined]


# ---------------------------------------------------------------------------
# Enrollment
# ---------------------------------------------------------------------------

class EnrollmentStatus(_TransitionRules, str, Enum):
    REQUESTED = "REQUESTED"  # Player asked to join
    INVITED = "INVITED"  # Organiser invited the player
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"  # Withdrawn before approval
    WITHDRAWN = "WITHDRAWN"  # Left after approval

    @property
    def is_pending(self) -> bool:
        return self in (EnrollmentStatus.REQUESTED, EnrollmentStatus.INVITED)

    @property
    def is_active(self) -> bool:
        return self is EnrollmentStatus.APPROVED

    @property
    def is_open(self) -> bool:
        """Pending or approved: the player still holds a place."""
        return self.is_pending or self.is_active

    @property
    def is_requested(self) -> bool:
        return self is EnrollmentStatus.REQUESTED

    @property
    def is_invited(self) -> bool:
        return self is EnrollmentStatus.INVITED

    @property
    def is_approved(self) -> bool:
        return self is EnrollmentStatus.APPROVED

    @property
    def is_rejected(self) -> bool:
        return self is EnrollmentStatus.REJECTED

    @property
    def is_cancelled(self) -> bool:
        return self is EnrollmentStatus.CANCELLED

    @property
    def is_withdrawn(self) -> bool:
        return self is EnrollmentStatus.WITHDRAWN


_ENROLLMENT_TRANSITIONS: dict[EnrollmentStatus, frozenset[EnrollmentStatus]] = {
    EnrollmentStatus.REQUESTED: frozenset(
        {
            EnrollmentStatus.APPROVED,
            EnrollmentStatus.REJECTED,
            EnrollmentStatus.CANCELLED,
        }
    ),
    EnrollmentStatus.INVITED: frozenset(
        {
            EnrollmentStatus.APPROVED,
            EnrollmentStatus.REJECTED,
            EnrollmentStatus.CANCELLED,
        }
    ),
    EnrollmentStatus.APPROVED: frozenset({EnrollmentStatus.WITHDRAWN}),
    # Terminal states -- no further transitions allowed.
    EnrollmentStatus.REJECTED: frozenset(),
    EnrollmentStatus.CANCELLED: frozenset(),
    EnrollmentStatus.WITHDRAWN: frozenset(),
}


# ---------------------------------------------------------------------------
# Match
# ---------------------------------------------------------------------------

class MatchStatus(_TransitionRules, str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    WALKOVER = "WALKOVER"

    @property
    def is_playable(self) -> bool:
        return self in (MatchStatus.SCHEDULED, MatchStatus.IN_PROGRESS)

    @property
    def is_scheduled(self) -> bool:
        return self is MatchStatus.SCHEDULED

    @property
    def is_in_progress(self) -> bool:
        return self is MatchStatus.IN_PROGRESS

    @property
    def is_completed(self) -> bool:
        return self is MatchStatus.COMPLETED

    @property
    def is_walkover(self) -> bool:
        return self is MatchStatus.WALKOVER


_MATCH_TRANSITIONS: dict[MatchStatus, frozenset[MatchStatus]] = {
    MatchStatus.SCHEDULED: frozenset({MatchStatus.IN_PROGRESS, MatchStatus.WALKOVER}),
    MatchStatus.IN_PROGRESS: frozenset({MatchStatus.COMPLETED, MatchStatus.WALKOVER}),
    MatchStatus.COMPLETED: frozenset(),
    MatchStatus.WALKOVER: frozenset(),
}


# ---------------------------------------------------------------------------
# Round
# ---------------------------------------------------------------------------

class RoundStatus(_TransitionRules, str, Enum):
    PENDING_TEAMS = "PENDING_TEAMS"
    PENDING_MATCHES = "PENDING_MATCHES"
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"

    @property
    def is_editable(self) -> bool:
        """Teams and pairings can still change."""
        return self in (RoundStatus.PENDING_TEAMS, RoundStatus.PENDING_MATCHES)


_ROUND_TRANSITIONS: dict[RoundStatus, frozenset[RoundStatus]] = {
    RoundStatus.PENDING_TEAMS: frozenset({RoundStatus.PENDING_MATCHES}),
    RoundStatus.PENDING_MATCHES: frozenset({RoundStatus.SCHEDULED}),
    RoundStatus.SCHEDULED: frozenset({RoundStatus.IN_PROGRESS}),
    RoundStatus.IN_PROGRESS: frozenset({RoundStatus.COMPLETED}),
    RoundStatus.COMPLETED: frozenset(),
}


_TABLES: dict[type, Mapping[Any, frozenset]] = {
    EnrollmentStatus: _ENROLLMENT_TRANSITIONS,
    MatchStatus: _MATCH_TRANSITIONS,
    RoundStatus: _ROUND_TRANSITIONS,
}
