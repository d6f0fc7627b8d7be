"""Match aggregate: one pairing within a round.

Follows the same copy-on-write discipline as ``Enrollment``: status moves
are validated against ``MatchStatus`` and produce a new ``Match``.  The
remote system still performs the authoritative transition; callers use
``can_start``/``can_complete`` to gate actions locally and rebuild a fresh
``Match`` from the server's response.

Rosters are snapshots.  They are copied on the way in, and every read of
``team_a_players``/``team_b_players`` returns a new list.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from tournament_core.core.enums import TeamSide
from tournament_core.core.errors import InvalidValueError
from tournament_core.core.ids import parse_timestamp, to_iso, utc_now
from tournament_core.domain.status import MatchStatus
from tournament_core.domain.value_objects import MatchPlayer, coerce_players, require_text

_UNSET: Any = object()

PlayerInput = MatchPlayer | Mapping[str, Any]


class Match:
    """A scheduled contest between team A and team B."""

    __slots__ = (
        "_id",
        "_round_id",
        "_match_number",
        "_team_a_players",
        "_team_b_players",
        "_status",
        "_handicap_strokes_given",
        "_strokes_given_to_team",
        "_result",
        "_created_at",
        "_updated_at",
    )

    def __init__(
        self,
        *,
        id: str,
        round_id: str,
        match_number: int,
        team_a_players: Iterable[PlayerInput] | None = None,
        team_b_players: Iterable[PlayerInput] | None = None,
        status: MatchStatus | str = MatchStatus.SCHEDULED,
        handicap_strokes_given: int | None = None,
        strokes_given_to_team: TeamSide | str | None = None,
        result: Any = None,
        created_at: datetime | str | None = None,
        updated_at: datetime | str | None = None,
    ) -> None:
        self._id = require_text(id, "Match id")
        self._round_id = require_text(round_id, "round_id")
        if isinstance(match_number, bool) or not isinstance(match_number, int) or match_number < 1:
            raise InvalidValueError(
                f"match_number must be a positive integer, got {match_number!r}"
            )
        self._match_number = match_number
        self._team_a_players = coerce_players(team_a_players)
        self._team_b_players = coerce_players(team_b_players)
        self._status = MatchStatus.from_label(status)

        if handicap_strokes_given is not None and (
            isinstance(handicap_strokes_given, bool)
            or not isinstance(handicap_strokes_given, int)
            or handicap_strokes_given < 0
        ):
            raise InvalidValueError(
                "handicap_strokes_given must be a non-negative integer, "
                f"got {handicap_strokes_given!r}"
            )
        self._handicap_strokes_given = handicap_strokes_given

        if strokes_given_to_team is not None:
            try:
                strokes_given_to_team = TeamSide(strokes_given_to_team)
            except ValueError:
                raise InvalidValueError(
                    f"strokes_given_to_team must be 'A' or 'B', got {strokes_given_to_team!r}"
                ) from None
        self._strokes_given_to_team = strokes_given_to_team

        self._result = copy.deepcopy(result)
        try:
            self._created_at = parse_timestamp(created_at)
            self._updated_at = parse_timestamp(updated_at)
        except ValueError as exc:
            raise InvalidValueError(f"Invalid match timestamp: {exc}") from exc

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def round_id(self) -> str:
        return self._round_id

    @property
    def match_number(self) -> int:
        return self._match_number

    @property
    def team_a_players(self) -> list[MatchPlayer]:
        return list(self._team_a_players)

    @property
    def team_b_players(self) -> list[MatchPlayer]:
        return list(self._team_b_players)

    @property
    def status(self) -> MatchStatus:
        return self._status

    @property
    def handicap_strokes_given(self) -> int | None:
        return self._handicap_strokes_given

    @property
    def strokes_given_to_team(self) -> TeamSide | None:
        return self._strokes_given_to_team

    @property
    def result(self) -> Any:
        return copy.deepcopy(self._result)

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
    def is_scheduled(self) -> bool:
        return self._status.is_scheduled

    @property
    def is_in_progress(self) -> bool:
        return self._status.is_in_progress

    @property
    def is_completed(self) -> bool:
        return self._status.is_completed

    @property
    def is_walkover(self) -> bool:
        return self._status.is_walkover

    @property
    def is_playable(self) -> bool:
        return self._status.is_playable

    @property
    def is_final(self) -> bool:
        return self._status.is_final

    def can_start(self) -> bool:
        return self._status.can_transition_to(MatchStatus.IN_PROGRESS)

    def can_complete(self) -> bool:
        return self._status.can_transition_to(MatchStatus.COMPLETED)

    def can_declare_walkover(self) -> bool:
        return self._status.can_transition_to(MatchStatus.WALKOVER)

    def player_ids(self) -> set[str]:
        return {p.user_id for p in self._team_a_players + self._team_b_players}

    # ------------------------------------------------------------------
    # Status transitions
    # ------------------------------------------------------------------

    def start(self) -> Match:
        """SCHEDULED -> IN_PROGRESS."""
        return self.transition_to(MatchStatus.IN_PROGRESS)

    def complete(self, result: Any = None) -> Match:
        """IN_PROGRESS -> COMPLETED, recording *result* when given."""
        return self.transition_to(MatchStatus.COMPLETED, result=result)

    def declare_walkover(self, result: Any = None) -> Match:
        """SCHEDULED/IN_PROGRESS -> WALKOVER."""
        return self.transition_to(MatchStatus.WALKOVER, result=result)

    def transition_to(self, status: MatchStatus | str, result: Any = None) -> Match:
        """Validated move to *status*; keeps the current result unless given."""
        target = MatchStatus.from_label(status)
        self._status.validate_transition(target)
        return self._evolve(
            status=target,
            result=self._result if result is None else result,
        )

    def _evolve(self, *, status: MatchStatus = _UNSET, result: Any = _UNSET) -> Match:
        return Match(
            id=self._id,
            round_id=self._round_id,
            match_number=self._match_number,
            team_a_players=self._team_a_players,
            team_b_players=self._team_b_players,
            status=self._status if status is _UNSET else status,
            handicap_strokes_given=self._handicap_strokes_given,
            strokes_given_to_team=self._strokes_given_to_team,
            result=self._result if result is _UNSET else result,
            created_at=self._created_at,
            updated_at=utc_now(),
        )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_persistence(self) -> dict[str, Any]:
        return {
            "id": self._id,
            "round_id": self._round_id,
            "match_number": self._match_number,
            "team_a_players": [p.to_dto() for p in self._team_a_players],
            "team_b_players": [p.to_dto() for p in self._team_b_players],
            "status": str(self._status),
            "handicap_strokes_given": self._handicap_strokes_given,
            "strokes_given_to_team": (
                self._strokes_given_to_team.value if self._strokes_given_to_team else None
            ),
            "result": copy.deepcopy(self._result),
            "created_at": to_iso(self._created_at),
            "updated_at": to_iso(self._updated_at),
        }

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Match):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Match #{self._match_number} ({self._status})"
