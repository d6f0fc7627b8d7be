"""Protocol interfaces for the repository boundary.

Repositories perform the remote action and return raw, persisted-shape
records (snake_case dicts).  Callers rebuild aggregates from those records
with the mappers in ``tournament_core.infrastructure.mappers``.
Implementations can be swapped (HTTP/in-memory) without changing callers.

Errors raised by an implementation propagate to the caller unmodified.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .enums import MatchAction, TeamSide

RawRecord = dict[str, Any]


# ---------------------------------------------------------------------------
# Enrollments
# ---------------------------------------------------------------------------

@runtime_checkable
class IEnrollmentRepository(Protocol):
    """Persistence and remote actions for enrollments."""

    async def save(self, record: RawRecord) -> RawRecord: ...

    async def find_by_id(self, enrollment_id: str) -> RawRecord | None: ...

    async def find_by_competition(
        self,
        competition_id: str,
        status: str | None = None,
        team_id: str | None = None,
    ) -> list[RawRecord]: ...

    async def find_by_competition_and_user(
        self, competition_id: str, user_id: str
    ) -> RawRecord | None: ...

    async def find_by_user(
        self, user_id: str, status: str | None = None
    ) -> list[RawRecord]: ...

    async def request_enrollment(
        self,
        competition_id: str,
        user_id: str,
        tee_category: str | None = None,
    ) -> RawRecord: ...

    async def direct_enroll(
        self,
        competition_id: str,
        user_id: str,
        custom_handicap: float | None = None,
        tee_category: str | None = None,
    ) -> RawRecord: ...

    async def approve(
        self,
        competition_id: str,
        enrollment_id: str,
        team_id: str | None = None,
    ) -> RawRecord: ...

    async def reject(self, competition_id: str, enrollment_id: str) -> RawRecord: ...

    async def cancel(self, competition_id: str, enrollment_id: str) -> RawRecord: ...

    async def withdraw(self, competition_id: str, enrollment_id: str) -> RawRecord: ...

    async def set_custom_handicap(
        self,
        competition_id: str,
        enrollment_id: str,
        custom_handicap: float | None,
    ) -> RawRecord: ...

    async def delete(self, enrollment_id: str) -> None: ...


# ---------------------------------------------------------------------------
# Matches
# ---------------------------------------------------------------------------

@runtime_checkable
class IMatchRepository(Protocol):
    """Persistence and remote actions for matches."""

    async def save(self, record: RawRecord) -> RawRecord: ...

    async def find_by_id(self, match_id: str) -> RawRecord | None: ...

    async def find_by_round(self, round_id: str) -> list[RawRecord]: ...

    async def update_status(
        self,
        match_id: str,
        action: MatchAction,
        result: Any = None,
    ) -> RawRecord: ...

    async def declare_walkover(
        self,
        match_id: str,
        winning_team: TeamSide,
        reason: str | None = None,
    ) -> RawRecord: ...
