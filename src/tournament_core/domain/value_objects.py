"""Bounded and structural value objects.

Every value object validates in its constructor and is immutable
afterwards.  Range checks never clamp: out-of-range input raises
``OutOfRangeError``.  ``to_dto``/``from_dto`` use snake_case keys and
``from_dto`` re-runs validation.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from tournament_core.core.enums import TeeCategory, TeeGender
from tournament_core.core.errors import InvalidValueError, OutOfRangeError

MIN_CUSTOM_HANDICAP = -10.0
MAX_CUSTOM_HANDICAP = 54.0

MIN_COURSE_RATING = 50.0
MAX_COURSE_RATING = 90.0

MIN_SLOPE_RATING = 55
MAX_SLOPE_RATING = 155

HOLES_PER_ROUND = 18
MIN_PAR = 3
MAX_PAR = 5

MIN_HOLE_SCORE = 1
MAX_HOLE_SCORE = 9


# ---------------------------------------------------------------------------
# Shared checks
# ---------------------------------------------------------------------------

def require_number(value: Any, name: str) -> float:
    """Return *value* as a finite float or raise ``InvalidValueError``."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidValueError(f"{name} must be a valid number, got {value!r}")
    try:
        number = float(value)
    except (OverflowError, ValueError):
        raise InvalidValueError(f"{name} must be a valid number, got {value!r}") from None
    if not math.isfinite(number):
        raise InvalidValueError(f"{name} must be a finite number, got {value!r}")
    return number


def require_in_range(value: Any, name: str, low: float, high: float) -> float:
    number = require_number(value, name)
    if number < low or number > high:
        raise OutOfRangeError(f"{name} must be between {low} and {high}, got {value}")
    return number


def require_int_in_range(value: Any, name: str, low: int, high: int) -> int:
    if value is None:
        raise InvalidValueError(f"{name} is required")
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidValueError(f"{name} must be an integer, got {value!r}")
    if value < low or value > high:
        raise OutOfRangeError(f"{name} must be between {low} and {high}, got {value}")
    return value


def require_text(value: Any, name: str) -> str:
    """Return *value* unchanged if it is a non-blank string."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidValueError(f"{name} must be a non-empty string")
    return value


def validate_custom_handicap(value: Any) -> float:
    """Validate an organiser-assigned handicap override."""
    return require_in_range(
        value, "Custom handicap", MIN_CUSTOM_HANDICAP, MAX_CUSTOM_HANDICAP
    )


def _coerce_enum(enum_cls: type, value: Any, name: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(m.value for m in enum_cls)
        raise InvalidValueError(
            f"Invalid {name}: {value!r}. Valid values: {valid}"
        ) from None


def optional_tee_category(value: Any) -> TeeCategory | None:
    if value is None:
        return None
    return _coerce_enum(TeeCategory, value, "tee category")


def optional_tee_gender(value: Any) -> TeeGender | None:
    if value is None:
        return None
    return _coerce_enum(TeeGender, value, "tee gender")


# ---------------------------------------------------------------------------
# Golf course
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Tee:
    """A set of tee markers on a course with its official ratings."""

    tee_category: TeeCategory
    identifier: str
    course_rating: float
    slope_rating: float
    gender: TeeGender | None = None  # None = unisex

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "tee_category", _coerce_enum(TeeCategory, self.tee_category, "tee category")
        )
        if not isinstance(self.identifier, str) or not self.identifier.strip():
            raise InvalidValueError("Tee identifier is required")
        object.__setattr__(self, "course_rating", require_in_range(
            self.course_rating, "Course rating", MIN_COURSE_RATING, MAX_COURSE_RATING
        ))
        object.__setattr__(self, "slope_rating", require_in_range(
            self.slope_rating, "Slope rating", MIN_SLOPE_RATING, MAX_SLOPE_RATING
        ))
        object.__setattr__(self, "gender", optional_tee_gender(self.gender))

    def to_dto(self) -> dict[str, Any]:
        return {
            "tee_category": self.tee_category.value,
            "identifier": self.identifier,
            "course_rating": self.course_rating,
            "slope_rating": self.slope_rating,
            "gender": self.gender.value if self.gender else None,
        }

    @classmethod
    def from_dto(cls, dto: Mapping[str, Any]) -> Tee:
        return cls(
            tee_category=dto.get("tee_category"),
            identifier=dto.get("identifier"),
            course_rating=dto.get("course_rating"),
            slope_rating=dto.get("slope_rating"),
            gender=dto.get("gender"),
        )


@dataclass(frozen=True)
class Hole:
    hole_number: int
    par: int
    stroke_index: int

    def __post_init__(self) -> None:
        require_int_in_range(self.hole_number, "Hole number", 1, HOLES_PER_ROUND)
        require_int_in_range(self.par, "Par", MIN_PAR, MAX_PAR)
        require_int_in_range(self.stroke_index, "Stroke index", 1, HOLES_PER_ROUND)

    def to_dto(self) -> dict[str, Any]:
        return {
            "hole_number": self.hole_number,
            "par": self.par,
            "stroke_index": self.stroke_index,
        }

    @classmethod
    def from_dto(cls, dto: Mapping[str, Any]) -> Hole:
        return cls(
            hole_number=dto.get("hole_number"),
            par=dto.get("par"),
            stroke_index=dto.get("stroke_index"),
        )


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HoleScore:
    """Strokes entered for one hole; ``None`` means the ball was picked up."""

    value: int | None = None

    def __post_init__(self) -> None:
        if self.value is not None:
            require_int_in_range(self.value, "Hole score", MIN_HOLE_SCORE, MAX_HOLE_SCORE)

    @classmethod
    def of(cls, value: int | None) -> HoleScore:
        return cls(value)

    @classmethod
    def picked_up(cls) -> HoleScore:
        return cls(None)

    @property
    def is_picked_up(self) -> bool:
        return self.value is None

    def __str__(self) -> str:
        return "-" if self.value is None else str(self.value)


# ---------------------------------------------------------------------------
# Match roster
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MatchPlayer:
    """Snapshot of one player as paired into a match."""

    user_id: str
    playing_handicap: float | None = None
    tee_category: TeeCategory | None = None
    tee_gender: TeeGender | None = None
    strokes_received: tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        require_text(self.user_id, "Player user_id")
        if self.playing_handicap is not None:
            object.__setattr__(
                self, "playing_handicap", require_number(self.playing_handicap, "Playing handicap")
            )
        object.__setattr__(self, "tee_category", optional_tee_category(self.tee_category))
        object.__setattr__(self, "tee_gender", optional_tee_gender(self.tee_gender))
        holes = tuple(self.strokes_received or ())
        for hole in holes:
            require_int_in_range(hole, "Stroke hole", 1, HOLES_PER_ROUND)
        object.__setattr__(self, "strokes_received", holes)

    @classmethod
    def coerce(cls, value: MatchPlayer | Mapping[str, Any]) -> MatchPlayer:
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls.from_dto(value)
        raise InvalidValueError(f"Cannot build a MatchPlayer from {value!r}")

    def to_dto(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "playing_handicap": self.playing_handicap,
            "tee_category": self.tee_category.value if self.tee_category else None,
            "tee_gender": self.tee_gender.value if self.tee_gender else None,
            "strokes_received": list(self.strokes_received),
        }

    @classmethod
    def from_dto(cls, dto: Mapping[str, Any]) -> MatchPlayer:
        return cls(
            user_id=dto.get("user_id"),
            playing_handicap=dto.get("playing_handicap"),
            tee_category=dto.get("tee_category"),
            tee_gender=dto.get("tee_gender"),
            strokes_received=tuple(dto.get("strokes_received") or ()),
        )


def coerce_players(players: Iterable[MatchPlayer | Mapping[str, Any]] | None) -> tuple[MatchPlayer, ...]:
    return tuple(MatchPlayer.coerce(p) for p in players or ())
