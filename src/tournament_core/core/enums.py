"""Enumerations used across the tournament core.

Lifecycle statuses with transition tables live in ``domain/status.py``;
the enums here are plain labels with no state-machine behaviour.
"""

from enum import Enum


class TeeCategory(str, Enum):
    CHAMPIONSHIP = "CHAMPIONSHIP"
    AMATEUR = "AMATEUR"
    SENIOR = "SENIOR"
    FORWARD = "FORWARD"
    JUNIOR = "JUNIOR"


class TeeGender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


class TeamSide(str, Enum):
    """Side of a match; also the team receiving handicap strokes."""

    A = "A"
    B = "B"


class MatchAction(str, Enum):
    """Status actions accepted by the match repository."""

    START = "START"
    COMPLETE = "COMPLETE"


class LogFormat(str, Enum):
    JSON = "json"
    CONSOLE = "console"
