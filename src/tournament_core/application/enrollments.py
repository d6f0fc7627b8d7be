"""Enrollment use cases.

Each method checks its arguments, asks the repository to perform the
remote action, and rebuilds the aggregate from the returned record.  The
remote system is the source of truth for concurrent changes.  Two rules
are checked locally before the call: the handicap bound, and that the
player holds no open enrollment in the competition.
"""

from __future__ import annotations

import logging
from typing import Any

from tournament_core.application.assemblers import EnrollmentAssembler
from tournament_core.core.errors import AlreadyEnrolledError, InvalidValueError
from tournament_core.core.interfaces import IEnrollmentRepository
from tournament_core.domain.status import EnrollmentStatus
from tournament_core.domain.value_objects import optional_tee_category, validate_custom_handicap
from tournament_core.infrastructure.mappers import EnrollmentMapper
from tournament_core.observability.logger import action_context

logger = logging.getLogger(__name__)


def _require(value: Any, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidValueError(f"{name} is required and must be a string")
    return value


class EnrollmentService:
    """Thin orchestration over ``IEnrollmentRepository``.

    Returns simple views (see ``EnrollmentAssembler``) ready for display.
    """

    def __init__(self, repository: IEnrollmentRepository) -> None:
        if repository is None:
            raise ValueError("EnrollmentService requires a repository")
        self._repository = repository

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    async def request(
        self,
        competition_id: str,
        user_id: str,
        tee_category: str | None = None,
    ) -> dict[str, Any]:
        _require(competition_id, "competition_id")
        _require(user_id, "user_id")
        category = optional_tee_category(tee_category)
        with action_context("request_enrollment", competition_id=competition_id):
            await self._ensure_not_enrolled(competition_id, user_id)
            raw = await self._repository.request_enrollment(
                competition_id, user_id, category.value if category else None
            )
            logger.info("User %s requested to join %s", user_id, competition_id)
        return self._view(raw)

    async def direct_enroll(
        self,
        competition_id: str,
        user_id: str,
        custom_handicap: float | None = None,
        tee_category: str | None = None,
    ) -> dict[str, Any]:
        _require(competition_id, "competition_id")
        _require(user_id, "user_id")
        if custom_handicap is not None:
            custom_handicap = validate_custom_handicap(custom_handicap)
        category = optional_tee_category(tee_category)
        with action_context("direct_enroll", competition_id=competition_id):
            await self._ensure_not_enrolled(competition_id, user_id)
            raw = await self._repository.direct_enroll(
                competition_id,
                user_id,
                custom_handicap,
                category.value if category else None,
            )
            logger.info("Enrolled user %s directly in %s", user_id, competition_id)
        return self._view(raw)

    # ------------------------------------------------------------------
    # Status actions
    # ------------------------------------------------------------------

    async def approve(
        self,
        competition_id: str,
        enrollment_id: str,
        team_id: str | None = None,
    ) -> dict[str, Any]:
        _require(competition_id, "competition_id")
        _require(enrollment_id, "enrollment_id")
        with action_context(
            "approve_enrollment", competition_id=competition_id, enrollment_id=enrollment_id
        ):
            raw = await self._repository.approve(competition_id, enrollment_id, team_id)
            logger.info("Approved enrollment %s in %s", enrollment_id, competition_id)
        return self._view(raw)

    async def reject(self, competition_id: str, enrollment_id: str) -> dict[str, Any]:
        _require(competition_id, "competition_id")
        _require(enrollment_id, "enrollment_id")
        with action_context(
            "reject_enrollment", competition_id=competition_id, enrollment_id=enrollment_id
        ):
            raw = await self._repository.reject(competition_id, enrollment_id)
            logger.info("Rejected enrollment %s in %s", enrollment_id, competition_id)
        return self._view(raw)

    async def cancel(self, competition_id: str, enrollment_id: str) -> dict[str, Any]:
        _require(competition_id, "competition_id")
        _require(enrollment_id, "enrollment_id")
        with action_context(
            "cancel_enrollment", competition_id=competition_id, enrollment_id=enrollment_id
        ):
            raw = await self._repository.cancel(competition_id, enrollment_id)
            logger.info("Cancelled enrollment %s in %s", enrollment_id, competition_id)
        return self._view(raw)

    async def withdraw(self, competition_id: str, enrollment_id: str) -> dict[str, Any]:
        _require(competition_id, "competition_id")
        _require(enrollment_id, "enrollment_id")
        with action_context(
            "withdraw_enrollment", competition_id=competition_id, enrollment_id=enrollment_id
        ):
            raw = await self._repository.withdraw(competition_id, enrollment_id)
            logger.info("Withdrew enrollment %s from %s", enrollment_id, competition_id)
        return self._view(raw)

    async def set_custom_handicap(
        self,
        competition_id: str,
        enrollment_id: str,
        custom_handicap: float | None,
    ) -> dict[str, Any]:
        """Set the override, or clear it when *custom_handicap* is ``None``."""
        _require(competition_id, "competition_id")
        _require(enrollment_id, "enrollment_id")
        if custom_handicap is not None:
            custom_handicap = validate_custom_handicap(custom_handicap)
        with action_context(
            "set_custom_handicap", competition_id=competition_id, enrollment_id=enrollment_id
        ):
            raw = await self._repository.set_custom_handicap(
                competition_id, enrollment_id, custom_handicap
            )
        return self._view(raw)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_for_competition(
        self,
        competition_id: str,
        status: EnrollmentStatus | str | None = None,
        team_id: str | None = None,
    ) -> list[dict[str, Any]]:
        _require(competition_id, "competition_id")
        label = str(EnrollmentStatus.from_label(status)) if status is not None else None
        raws = await self._repository.find_by_competition(competition_id, label, team_id)
        return [self._view(raw) for raw in raws]

    async def find_for_user(
        self, competition_id: str, user_id: str
    ) -> dict[str, Any] | None:
        _require(competition_id, "competition_id")
        _require(user_id, "user_id")
        raw = await self._repository.find_by_competition_and_user(competition_id, user_id)
        if raw is None:
            return None
        return self._view(raw)

    async def _ensure_not_enrolled(self, competition_id: str, user_id: str) -> None:
        raw = await self._repository.find_by_competition_and_user(competition_id, user_id)
        if raw is not None and EnrollmentMapper.to_domain(raw).status.is_open:
            raise AlreadyEnrolledError(
                f"User {user_id} is already enrolled in competition {competition_id}"
            )

    @staticmethod
    def _view(raw: dict[str, Any]) -> dict[str, Any]:
        enrollment = EnrollmentMapper.to_domain(raw)
        return EnrollmentAssembler.to_simple_view(enrollment, raw)
