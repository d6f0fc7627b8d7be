"""Pydantic wire schemas for raw API records.

These models are the decode step between untyped payloads and the domain.
They fail closed: unknown keys, missing required keys and mistyped
handicaps are rejected before any domain object is built.  Semantic
checks (UUID shape, status labels, handicap bounds) stay in the domain
types.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, field_validator


# Handicaps are not coerced: booleans and numeric strings are rejected.
Handicap = StrictFloat | StrictInt


class _WireRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Enrollment
# ---------------------------------------------------------------------------

class EnrollmentUserRecord(BaseModel):
    """User joined onto an enrollment by the backend (display only)."""

    model_config = ConfigDict(extra="ignore")

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    handicap: Handicap | None = None
    country_code: str | None = None
    gender: str | None = None


class EnrollmentRecord(_WireRecord):
    id: str
    competition_id: str
    user_id: str
    status: str
    team_id: str | None = None
    custom_handicap: Handicap | None = None
    tee_category: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # Joined display fields (legacy flat form and nested form)
    user_name: str | None = None
    user_email: str | None = None
    user_handicap: Handicap | None = None
    user: EnrollmentUserRecord | None = None

    @field_validator("team_id", "tee_category", mode="before")
    @classmethod
    def blank_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


# ---------------------------------------------------------------------------
# Match
# ---------------------------------------------------------------------------

class MatchPlayerRecord(_WireRecord):
    user_id: str
    playing_handicap: Handicap | None = None
    tee_category: str | None = None
    tee_gender: str | None = None
    strokes_received: list[int] = Field(default_factory=list)

    @field_validator("tee_category", "tee_gender", mode="before")
    @classmethod
    def blank_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("strokes_received", mode="before")
    @classmethod
    def null_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class MatchRecord(_WireRecord):
    id: str
    round_id: str
    match_number: int
    status: str
    team_a_players: list[MatchPlayerRecord] = Field(default_factory=list)
    team_b_players: list[MatchPlayerRecord] = Field(default_factory=list)
    handicap_strokes_given: int | None = None
    strokes_given_to_team: str | None = None
    result: Any = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("team_a_players", "team_b_players", mode="before")
    @classmethod
    def null_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("strokes_given_to_team", mode="before")
    @classmethod
    def blank_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v
