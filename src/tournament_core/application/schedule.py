"""Match use cases.

``start`` and ``complete`` read the current match first and fail fast when
the local state machine already rules the action out; the repository then
performs the authoritative transition and a fresh ``Match`` is rebuilt from
its response.
"""

from __future__ import annotations

import logging
from typing import Any

from tournament_core.core.enums import MatchAction, TeamSide
from tournament_core.core.errors import InvalidValueError, NotFoundError
from tournament_core.core.interfaces import IMatchRepository
from tournament_core.domain.match import Match
from tournament_core.domain.status import MatchStatus
from tournament_core.infrastructure.mappers import MatchMapper
from tournament_core.observability.logger import action_context

logger = logging.getLogger(__name__)


class MatchService:
    def __init__(self, repository: IMatchRepository) -> None:
        if repository is None:
            raise ValueError("MatchService requires a repository")
        self._repository = repository

    async def get(self, match_id: str) -> Match:
        if not match_id:
            raise InvalidValueError("match_id is required")
        raw = await self._repository.find_by_id(match_id)
        if raw is None:
            raise NotFoundError(f"Match not found: {match_id}")
        return MatchMapper.to_domain(raw)

    async def list_for_round(self, round_id: str) -> list[Match]:
        if not round_id:
            raise InvalidValueError("round_id is required")
        return MatchMapper.to_domain_many(await self._repository.find_by_round(round_id))

    async def start(self, match_id: str) -> Match:
        with action_context("start_match", match_id=match_id):
            current = await self.get(match_id)
            current.status.validate_transition(MatchStatus.IN_PROGRESS)
            raw = await self._repository.update_status(match_id, MatchAction.START)
            logger.info("Started match %s", match_id)
        return MatchMapper.to_domain(raw)

    async def complete(self, match_id: str, result: Any = None) -> Match:
        with action_context("complete_match", match_id=match_id):
            current = await self.get(match_id)
            current.status.validate_transition(MatchStatus.COMPLETED)
            raw = await self._repository.update_status(match_id, MatchAction.COMPLETE, result)
            logger.info("Completed match %s", match_id)
        return MatchMapper.to_domain(raw)

    async def declare_walkover(
        self,
        match_id: str,
        winning_team: TeamSide | str,
        reason: str | None = None,
    ) -> Match:
        try:
            winner = TeamSide(winning_team)
        except ValueError:
            raise InvalidValueError(
                f"winning_team must be 'A' or 'B', got {winning_team!r}"
            ) from None
        with action_context("declare_walkover", match_id=match_id):
            current = await self.get(match_id)
            current.status.validate_transition(MatchStatus.WALKOVER)
            raw = await self._repository.declare_walkover(match_id, winner, reason)
            logger.info("Walkover declared for match %s (team %s)", match_id, winner.value)
        return MatchMapper.to_domain(raw)
