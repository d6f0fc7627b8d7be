"""Custom exception hierarchy for the tournament core."""

from __future__ import annotations

from collections.abc import Iterable


class TournamentError(Exception):
    """Base exception for all tournament-core errors."""


# --- Configuration ---
class ConfigError(TournamentError):
    """Invalid or missing configuration."""


# --- Domain ---
class DomainError(TournamentError):
    """A domain rule rejected the operation.  Source state is unchanged."""


class InvalidValueError(DomainError, ValueError):
    """Raw input does not satisfy a value type's invariant."""


class InvalidIdentifierError(InvalidValueError):
    """Identifier text is not a canonical UUID."""


class InvalidStatusError(InvalidValueError):
    """Label is not a member of the status enumeration."""


class OutOfRangeError(InvalidValueError):
    """Numeric value lies outside its allowed bounds."""


class InvalidTransitionError(DomainError):
    """Requested status is not adjacent to the current status."""

    def __init__(
        self,
        from_status: str,
        to_status: str,
        allowed: Iterable[str] = (),
    ) -> None:
        self.from_status = from_status
        self.to_status = to_status
        self.allowed = tuple(allowed)
        allowed_text = ", ".join(self.allowed) or "none"
        super().__init__(
            f"Invalid transition: {from_status} → {to_status}. "
            f"Allowed transitions: {allowed_text}"
        )


class PreconditionError(DomainError):
    """A business precondition outside the state machine is not met."""


class EnrollmentStateError(PreconditionError):
    """Enrollment is not in a state that permits the operation."""


class AlreadyEnrolledError(PreconditionError):
    """The player already holds an open enrollment in the competition."""


# --- Mapping boundary ---
class MappingError(TournamentError):
    """A wire payload could not be decoded into a domain object."""


# --- Repository boundary ---
class RepositoryError(TournamentError):
    """The persistence collaborator failed to complete an action."""


class NotFoundError(RepositoryError):
    """No record exists for the requested identifier."""
