"""Mappers between raw API records and domain aggregates.

``to_domain`` decodes through the wire schemas in ``schemas.py`` first, so
a malformed payload fails with a ``MappingError`` naming the offending
fields before any aggregate is constructed.  ``to_dto`` is the inverse and
emits snake_case records with ISO-8601 timestamps.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from tournament_core.core.errors import MappingError
from tournament_core.core.ids import to_iso
from tournament_core.domain.enrollment import Enrollment
from tournament_core.domain.match import Match
from tournament_core.domain.value_objects import MatchPlayer
from tournament_core.infrastructure.schemas import (
    EnrollmentRecord,
    MatchPlayerRecord,
    MatchRecord,
)

logger = logging.getLogger(__name__)

_RecordT = TypeVar("_RecordT", bound=BaseModel)


def decode(schema: type[_RecordT], raw: Any, where: str) -> _RecordT:
    """Validate *raw* against *schema*, translating failures to MappingError."""
    if raw is None:
        raise MappingError(f"{where}: payload is required")
    if not isinstance(raw, Mapping):
        raise MappingError(f"{where}: payload must be a mapping, got {type(raw).__name__}")
    try:
        return schema.model_validate(dict(raw))
    except ValidationError as exc:
        missing = [
            ".".join(str(p) for p in err["loc"])
            for err in exc.errors()
            if err["type"] == "missing"
        ]
        logger.warning("%s: rejected payload (%d errors)", where, exc.error_count())
        if missing:
            raise MappingError(
                f"{where}: Missing required fields ({', '.join(missing)})"
            ) from exc
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise MappingError(f"{where}: Invalid payload ({problems})") from exc


# ---------------------------------------------------------------------------
# Enrollment
# ---------------------------------------------------------------------------

class EnrollmentMapper:
    """Anti-corruption layer for enrollment records."""

    @staticmethod
    def decode(raw: Any) -> EnrollmentRecord:
        return decode(EnrollmentRecord, raw, "EnrollmentMapper.to_domain")

    @staticmethod
    def to_domain(raw: Any) -> Enrollment:
        record = EnrollmentMapper.decode(raw)
        return EnrollmentMapper.from_record(record)

    @staticmethod
    def from_record(record: EnrollmentRecord) -> Enrollment:
        return Enrollment.from_persistence(
            enrollment_id=record.id,
            competition_id=record.competition_id,
            user_id=record.user_id,
            status=record.status,
            team_id=record.team_id,
            custom_handicap=record.custom_handicap,
            tee_category=record.tee_category,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    @staticmethod
    def to_domain_many(raws: Any) -> list[Enrollment]:
        if not isinstance(raws, list):
            raise MappingError("EnrollmentMapper.to_domain_many: payload must be a list")
        return [EnrollmentMapper.to_domain(raw) for raw in raws]

    @staticmethod
    def to_dto(enrollment: Enrollment) -> dict[str, Any]:
        if not isinstance(enrollment, Enrollment):
            raise MappingError("EnrollmentMapper.to_dto: expected an Enrollment")
        return {
            "id": str(enrollment.enrollment_id),
            "competition_id": enrollment.competition_id,
            "user_id": enrollment.user_id,
            "status": str(enrollment.status),
            "team_id": enrollment.team_id,
            "custom_handicap": enrollment.custom_handicap,
            "tee_category": enrollment.tee_category.value if enrollment.tee_category else None,
            "created_at": to_iso(enrollment.created_at),
            "updated_at": to_iso(enrollment.updated_at),
        }


# ---------------------------------------------------------------------------
# Match
# ---------------------------------------------------------------------------

def _player_from_record(record: MatchPlayerRecord) -> MatchPlayer:
    return MatchPlayer(
        user_id=record.user_id,
        playing_handicap=record.playing_handicap,
        tee_category=record.tee_category,
        tee_gender=record.tee_gender,
        strokes_received=tuple(record.strokes_received),
    )


class MatchMapper:
    """Anti-corruption layer for match records."""

    @staticmethod
    def decode(raw: Any) -> MatchRecord:
        return decode(MatchRecord, raw, "MatchMapper.to_domain")

    @staticmethod
    def to_domain(raw: Any) -> Match:
        record = MatchMapper.decode(raw)
        return Match(
            id=record.id,
            round_id=record.round_id,
            match_number=record.match_number,
            team_a_players=[_player_from_record(p) for p in record.team_a_players],
            team_b_players=[_player_from_record(p) for p in record.team_b_players],
            status=record.status,
            handicap_strokes_given=record.handicap_strokes_given,
            strokes_given_to_team=record.strokes_given_to_team,
            result=record.result,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    @staticmethod
    def to_domain_many(raws: Any) -> list[Match]:
        if not isinstance(raws, list):
            raise MappingError("MatchMapper.to_domain_many: payload must be a list")
        return [MatchMapper.to_domain(raw) for raw in raws]

    @staticmethod
    def to_dto(match: Match) -> dict[str, Any]:
        if not isinstance(match, Match):
            raise MappingError("MatchMapper.to_dto: expected a Match")
        return match.to_persistence()
