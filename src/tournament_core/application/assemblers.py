"""Assemblers: aggregates -> flat, UI-facing records.

These serve the use cases, not persistence, so they sit in the application
layer.  Derived booleans let views enable actions without re-deriving the
state machine.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from tournament_core.core.ids import to_iso
from tournament_core.domain.enrollment import Enrollment
from tournament_core.domain.match import Match


class EnrollmentAssembler:
    @staticmethod
    def to_simple_view(
        enrollment: Enrollment,
        raw: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Flatten *enrollment*; merge joined user fields from *raw* if given.

        A nested ``user`` object in *raw* takes precedence over the legacy
        flat ``user_name``/``user_email``/``user_handicap`` fields.
        """
        if not isinstance(enrollment, Enrollment):
            raise TypeError("EnrollmentAssembler.to_simple_view: expected an Enrollment")

        view: dict[str, Any] = {
            "id": str(enrollment.enrollment_id),
            "competition_id": enrollment.competition_id,
            "user_id": enrollment.user_id,
            "status": str(enrollment.status),
            "team_id": enrollment.team_id,
            "custom_handicap": enrollment.custom_handicap,
            "tee_category": enrollment.tee_category.value if enrollment.tee_category else None,
            "created_at": to_iso(enrollment.created_at),
            "updated_at": to_iso(enrollment.updated_at),
            "is_pending": enrollment.is_pending,
            "is_approved": enrollment.is_approved,
            "is_rejected": enrollment.is_rejected,
            "is_cancelled": enrollment.is_cancelled,
            "is_withdrawn": enrollment.is_withdrawn,
            "has_team_assigned": enrollment.has_team_assigned,
            "has_custom_handicap": enrollment.has_custom_handicap,
        }

        if not raw:
            return view

        user = raw.get("user")
        if user:
            full_name = " ".join(
                part for part in (user.get("first_name"), user.get("last_name")) if part
            )
            view["user_name"] = full_name or None
            view["user_email"] = user.get("email") or None
            view["user_handicap"] = user.get("handicap")
            view["user_country_code"] = user.get("country_code")
            view["user_gender"] = user.get("gender") or None
        else:
            if raw.get("user_name"):
                view["user_name"] = raw["user_name"]
            if raw.get("user_email"):
                view["user_email"] = raw["user_email"]
            if "user_handicap" in raw:
                view["user_handicap"] = raw["user_handicap"]
        return view

    @staticmethod
    def to_simple_view_many(
        enrollments: Sequence[Enrollment],
        raws: Sequence[Mapping[str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        if raws is not None and len(raws) != len(enrollments):
            raise ValueError("enrollments and raw records must have the same length")
        return [
            EnrollmentAssembler.to_simple_view(e, raws[i] if raws is not None else None)
            for i, e in enumerate(enrollments)
        ]


class MatchAssembler:
    @staticmethod
    def to_simple_view(match: Match) -> dict[str, Any]:
        if not isinstance(match, Match):
            raise TypeError("MatchAssembler.to_simple_view: expected a Match")
        view = match.to_persistence()
        view.update(
            {
                "is_scheduled": match.is_scheduled,
                "is_in_progress": match.is_in_progress,
                "is_completed": match.is_completed,
                "is_walkover": match.is_walkover,
                "can_start": match.can_start(),
                "can_complete": match.can_complete(),
            }
        )
        return view
