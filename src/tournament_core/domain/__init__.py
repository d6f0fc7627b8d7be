"""Domain layer: identifiers, lifecycle statuses, value objects and aggregates.

This package defines the primitives every other layer depends on but never
modifies.  Everything here is immutable and synchronous.

Public API
----------
::

    from tournament_core.domain import (
        Enrollment,
        EnrollmentId,
        EnrollmentStatus,
        Match,
        MatchStatus,
        Tee,
        Hole,
    )
"""

from __future__ import annotations

from tournament_core.domain.enrollment import Enrollment
from tournament_core.domain.identifiers import CompetitionId, EnrollmentId, EntityId
from tournament_core.domain.match import Match
from tournament_core.domain.status import EnrollmentStatus, MatchStatus, RoundStatus
from tournament_core.domain.value_objects import (
    Hole,
    HoleScore,
    MatchPlayer,
    Tee,
    validate_custom_handicap,
)

__all__ = [
    "CompetitionId",
    "Enrollment",
    "EnrollmentId",
    "EnrollmentStatus",
    "EntityId",
    "Hole",
    "HoleScore",
    "Match",
    "MatchPlayer",
    "MatchStatus",
    "RoundStatus",
    "Tee",
    "validate_custom_handicap",
]
