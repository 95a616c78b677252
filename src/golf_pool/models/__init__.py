"""
Service Models Package

This package contains all Pydantic models used throughout the service,
including input validation models, output response models, and domain models.
"""

from .input import DraftPickRequest, JoinRequest, ParticipateRequest, SubmitScoreRequest, WeekSelectionRequest
from .output import (
    AwardWeekOutput,
    CurrentWeekOutput,
    EntryOutput,
    HealthOutput,
    JoinOutput,
    LeaderboardOutput,
    LeaderboardRow,
    ParticipationOutput,
    ProScoreOutput,
    RecalcOutput,
    ResetWeekOutput,
    ScheduleOutput,
    StandingsOutput,
)
from .player import Player, Pro, SeasonStanding
from .user import AuthenticatedUser
from .week import Identifier, Week
from .week_entry import WEEK_ENTRY_CONFLICT_KEY, WeekEntry

__all__ = [
    # Input models
    "DraftPickRequest",
    "JoinRequest",
    "ParticipateRequest",
    "SubmitScoreRequest",
    "WeekSelectionRequest",

    # Output models
    "AwardWeekOutput",
    "CurrentWeekOutput",
    "EntryOutput",
    "HealthOutput",
    "JoinOutput",
    "LeaderboardOutput",
    "LeaderboardRow",
    "ParticipationOutput",
    "ProScoreOutput",
    "RecalcOutput",
    "ResetWeekOutput",
    "ScheduleOutput",
    "StandingsOutput",

    # Domain models
    "AuthenticatedUser",
    "Identifier",
    "Player",
    "Pro",
    "SeasonStanding",
    "Week",
    "WeekEntry",
    "WEEK_ENTRY_CONFLICT_KEY",
]
