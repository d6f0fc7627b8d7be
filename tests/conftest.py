"""Shared fixtures for the tournament-core test suite."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from tournament_core.domain.enrollment import Enrollment
from tournament_core.domain.identifiers import EnrollmentId
from tournament_core.domain.match import Match
from tournament_core.domain.value_objects import MatchPlayer
from tournament_core.infrastructure.memory_repository import (
    InMemoryEnrollmentRepository,
    InMemoryMatchRepository,
)

ENROLLMENT_UUID = "3f2b8c1e-9a4d-4e6f-8b2a-1c3d5e7f9a0b"
COMPETITION_ID = "c1"
USER_ID = "u1"


# ---------------------------------------------------------------------------
# Enrollment
# ---------------------------------------------------------------------------

@pytest.fixture
def enrollment_id() -> EnrollmentId:
    return EnrollmentId.from_string(ENROLLMENT_UUID)


@pytest.fixture
def requested(enrollment_id: EnrollmentId) -> Enrollment:
    return Enrollment.request(
        enrollment_id=enrollment_id,
        competition_id=COMPETITION_ID,
        user_id=USER_ID,
    )


@pytest.fixture
def approved(enrollment_id: EnrollmentId) -> Enrollment:
    return Enrollment.direct_enroll(
        enrollment_id=enrollment_id,
        competition_id=COMPETITION_ID,
        user_id=USER_ID,
    )


@pytest.fixture
def enrollment_record() -> dict:
    """Raw API record as returned by the backend."""
    return {
        "id": ENROLLMENT_UUID,
        "competition_id": COMPETITION_ID,
        "user_id": USER_ID,
        "status": "REQUESTED",
        "team_id": None,
        "custom_handicap": None,
        "tee_category": "AMATEUR",
        "created_at": "2025-11-24T10:30:00Z",
        "updated_at": "2025-11-24T10:30:00Z",
    }


# ---------------------------------------------------------------------------
# Match
# ---------------------------------------------------------------------------

@pytest.fixture
def players_a() -> list[MatchPlayer]:
    return [
        MatchPlayer(user_id="p1", playing_handicap=12, tee_category="AMATEUR",
                    strokes_received=(1, 5, 9)),
        MatchPlayer(user_id="p2", playing_handicap=4, tee_category="CHAMPIONSHIP"),
    ]


@pytest.fixture
def players_b() -> list[MatchPlayer]:
    return [MatchPlayer(user_id="p3", playing_handicap=8, tee_category="SENIOR",
                        tee_gender="FEMALE")]


@pytest.fixture
def scheduled_match(players_a, players_b) -> Match:
    return Match(
        id="m1",
        round_id="r1",
        match_number=1,
        team_a_players=players_a,
        team_b_players=players_b,
        handicap_strokes_given=4,
        strokes_given_to_team="B",
        created_at=datetime(2025, 6, 1, 8, 0, tzinfo=timezone.utc),
        updated_at=datetime(2025, 6, 1, 8, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def match_record() -> dict:
    return {
        "id": "m1",
        "round_id": "r1",
        "match_number": 1,
        "team_a_players": [
            {"user_id": "p1", "playing_handicap": 12, "tee_category": "AMATEUR",
             "tee_gender": None, "strokes_received": [1, 5, 9]},
        ],
        "team_b_players": [
            {"user_id": "p3", "playing_handicap": 8, "tee_category": "SENIOR",
             "tee_gender": "FEMALE", "strokes_received": []},
        ],
        "status": "SCHEDULED",
        "handicap_strokes_given": 4,
        "strokes_given_to_team": "B",
        "result": None,
        "created_at": "2025-06-01T08:00:00Z",
        "updated_at": "2025-06-01T08:00:00Z",
    }


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------

@pytest.fixture
def enrollment_repo() -> InMemoryEnrollmentRepository:
    return InMemoryEnrollmentRepository()


@pytest.fixture
def match_repo() -> InMemoryMatchRepository:
    return InMemoryMatchRepository()
