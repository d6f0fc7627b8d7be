"""In-memory repositories standing in for the remote tournament API.

Good for: unit tests, local development, offline demos.

The repositories behave like the server: each action rehydrates the stored
record into an aggregate, runs the domain command, and stores the
flattened result.  Domain errors (illegal transitions, bad handicaps)
propagate unchanged, exactly as a rejected remote call would.  Records are
copied in and out so callers never share state with the store.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from tournament_core.core.enums import MatchAction, TeamSide
from tournament_core.core.errors import NotFoundError, RepositoryError
from tournament_core.core.interfaces import RawRecord
from tournament_core.domain.enrollment import Enrollment
from tournament_core.domain.identifiers import EnrollmentId
from tournament_core.domain.match import Match
from tournament_core.domain.status import EnrollmentStatus
from tournament_core.infrastructure.mappers import EnrollmentMapper, MatchMapper

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Enrollments
# ---------------------------------------------------------------------------

class InMemoryEnrollmentRepository:
    """Dict-backed ``IEnrollmentRepository``.  No persistence across restarts."""

    def __init__(self) -> None:
        self._records: dict[str, RawRecord] = {}

    # -- Persistence -------------------------------------------------------

    async def save(self, record: RawRecord) -> RawRecord:
        enrollment = EnrollmentMapper.to_domain(record)
        return self._store(enrollment)

    async def find_by_id(self, enrollment_id: str) -> RawRecord | None:
        record = self._records.get(self._key(enrollment_id))
        return copy.deepcopy(record) if record is not None else None

    async def find_by_competition(
        self,
        competition_id: str,
        status: str | None = None,
        team_id: str | None = None,
    ) -> list[RawRecord]:
        out: list[RawRecord] = []
        for record in self._records.values():
            if record["competition_id"] != competition_id:
                continue
            if status is not None and record["status"] != status:
                continue
            if team_id is not None and record["team_id"] != team_id:
                continue
            out.append(copy.deepcopy(record))
        return out

    async def find_by_competition_and_user(
        self, competition_id: str, user_id: str
    ) -> RawRecord | None:
        """The player's open enrollment, else their most recent one."""
        latest: RawRecord | None = None
        for record in self._records.values():
            if record["competition_id"] != competition_id or record["user_id"] != user_id:
                continue
            if EnrollmentStatus(record["status"]).is_open:
                return copy.deepcopy(record)
            latest = record
        return copy.deepcopy(latest) if latest is not None else None

    async def find_by_user(
        self, user_id: str, status: str | None = None
    ) -> list[RawRecord]:
        return [
            copy.deepcopy(r)
            for r in self._records.values()
            if r["user_id"] == user_id and (status is None or r["status"] == status)
        ]

    async def delete(self, enrollment_id: str) -> None:
        key = self._key(enrollment_id)
        if key not in self._records:
            raise NotFoundError(f"Enrollment not found: {enrollment_id}")
        del self._records[key]
        logger.info("Deleted enrollment %s", enrollment_id)

    # -- Creation ----------------------------------------------------------

    async def request_enrollment(
        self,
        competition_id: str,
        user_id: str,
        tee_category: str | None = None,
    ) -> RawRecord:
        self._ensure_not_enrolled(competition_id, user_id)
        enrollment = Enrollment.request(
            enrollment_id=EnrollmentId.create(),
            competition_id=competition_id,
            user_id=user_id,
            tee_category=tee_category,
        )
        logger.info("User %s requested enrollment in %s", user_id, competition_id)
        return self._store(enrollment)

    async def direct_enroll(
        self,
        competition_id: str,
        user_id: str,
        custom_handicap: float | None = None,
        tee_category: str | None = None,
    ) -> RawRecord:
        self._ensure_not_enrolled(competition_id, user_id)
        enrollment = Enrollment.direct_enroll(
            enrollment_id=EnrollmentId.create(),
            competition_id=competition_id,
            user_id=user_id,
            custom_handicap=custom_handicap,
            tee_category=tee_category,
        )
        logger.info("User %s directly enrolled in %s", user_id, competition_id)
        return self._store(enrollment)

    # -- Actions -----------------------------------------------------------

    async def approve(
        self,
        competition_id: str,
        enrollment_id: str,
        team_id: str | None = None,
    ) -> RawRecord:
        enrollment = self._load(competition_id, enrollment_id).approve()
        if team_id is not None:
            enrollment = enrollment.assign_to_team(team_id)
        return self._store(enrollment)

    async def reject(self, competition_id: str, enrollment_id: str) -> RawRecord:
        return self._store(self._load(competition_id, enrollment_id).reject())

    async def cancel(self, competition_id: str, enrollment_id: str) -> RawRecord:
        return self._store(self._load(competition_id, enrollment_id).cancel())

    async def withdraw(self, competition_id: str, enrollment_id: str) -> RawRecord:
        return self._store(self._load(competition_id, enrollment_id).withdraw())

    async def set_custom_handicap(
        self,
        competition_id: str,
        enrollment_id: str,
        custom_handicap: float | None,
    ) -> RawRecord:
        enrollment = self._load(competition_id, enrollment_id)
        if custom_handicap is None:
            enrollment = enrollment.remove_custom_handicap()
        else:
            enrollment = enrollment.set_custom_handicap(custom_handicap)
        return self._store(enrollment)

    # -- Internals ---------------------------------------------------------

    @staticmethod
    def _key(enrollment_id: str) -> str:
        return str(enrollment_id).lower()

    def _load(self, competition_id: str, enrollment_id: str) -> Enrollment:
        record = self._records.get(self._key(enrollment_id))
        if record is None or record["competition_id"] != competition_id:
            raise NotFoundError(
                f"Enrollment {enrollment_id} not found in competition {competition_id}"
            )
        return EnrollmentMapper.to_domain(record)

    def _ensure_not_enrolled(self, competition_id: str, user_id: str) -> None:
        for record in self._records.values():
            if (
                record["competition_id"] == competition_id
                and record["user_id"] == user_id
                and EnrollmentStatus(record["status"]).is_open
            ):
                raise RepositoryError(
                    f"User {user_id} already has an open enrollment in {competition_id}"
                )

    def _store(self, enrollment: Enrollment) -> RawRecord:
        record = EnrollmentMapper.to_dto(enrollment)
        self._records[self._key(record["id"])] = record
        logger.debug("Stored enrollment %s (%s)", record["id"], record["status"])
        return copy.deepcopy(record)

    # -- Testing helpers ---------------------------------------------------

    def clear(self) -> None:
        """Remove all records.  Testing only."""
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)


# ---------------------------------------------------------------------------
# Matches
# ---------------------------------------------------------------------------

class InMemoryMatchRepository:
    """Dict-backed ``IMatchRepository``.  No persistence across restarts."""

    def __init__(self) -> None:
        self._records: dict[str, RawRecord] = {}

    async def save(self, record: RawRecord) -> RawRecord:
        return self._store(MatchMapper.to_domain(record))

    async def find_by_id(self, match_id: str) -> RawRecord | None:
        record = self._records.get(match_id)
        return copy.deepcopy(record) if record is not None else None

    async def find_by_round(self, round_id: str) -> list[RawRecord]:
        matches = [r for r in self._records.values() if r["round_id"] == round_id]
        return [copy.deepcopy(r) for r in sorted(matches, key=lambda r: r["match_number"])]

    async def update_status(
        self,
        match_id: str,
        action: MatchAction | str,
        result: Any = None,
    ) -> RawRecord:
        try:
            action = MatchAction(action)
        except ValueError:
            raise RepositoryError(f"Unknown match action: {action!r}") from None
        match = self._load(match_id)
        if action is MatchAction.START:
            match = match.start()
        else:
            match = match.complete(result)
        logger.info("Match %s: %s -> %s", match_id, action.value, match.status)
        return self._store(match)

    async def declare_walkover(
        self,
        match_id: str,
        winning_team: TeamSide | str,
        reason: str | None = None,
    ) -> RawRecord:
        try:
            winner = TeamSide(winning_team)
        except ValueError:
            raise RepositoryError(f"Unknown winning team: {winning_team!r}") from None
        match = self._load(match_id).declare_walkover(
            {"winner": winner.value, "reason": reason}
        )
        logger.info("Match %s: walkover to team %s", match_id, winner.value)
        return self._store(match)

    def _load(self, match_id: str) -> Match:
        record = self._records.get(match_id)
        if record is None:
            raise NotFoundError(f"Match not found: {match_id}")
        return MatchMapper.to_domain(record)

    def _store(self, match: Match) -> RawRecord:
        record = MatchMapper.to_dto(match)
        self._records[record["id"]] = record
        return copy.deepcopy(record)

    def clear(self) -> None:
        """Remove all records.  Testing only."""
        self._records.clear()
