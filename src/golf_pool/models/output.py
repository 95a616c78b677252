"""
Output models for API responses using Pydantic.

Field names mirror the JSON contract the pool's web front end already consumes.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from golf_pool.models.player import Player, SeasonStanding
from golf_pool.models.week import Identifier, Week
from golf_pool.models.week_entry import WeekEntry


class LeaderboardRow(BaseModel):
    """One player's line on a weekly leaderboard."""

    model_config = ConfigDict(populate_by_name=True)

    player_id: Identifier
    player_name: Optional[str] = None

    player_score: Annotated[Optional[int], Field(
        default=None,
        alias='playerScore',
        description="Player's own score relative to par"
    )] = None

    pro_score: Annotated[Optional[int], Field(
        default=None,
        alias='proScore',
        description="Drafted professional's score relative to par"
    )] = None

    combined: Annotated[Optional[int], Field(
        default=None,
        description='Combined score, lower is better'
    )] = None

    pga_golfer: Annotated[Optional[str], Field(
        default=None,
        description='Drafted professional'
    )] = None


class LeaderboardOutput(BaseModel):
    """Response model for the weekly leaderboard."""

    week: Annotated[Optional[str], Field(
        default=None,
        description='Display label of the week shown, null when no week is scheduled'
    )] = None

    week_id: Optional[Identifier] = None

    rows: List[LeaderboardRow] = Field(default_factory=list)


class CurrentWeekOutput(BaseModel):
    """Response model for the current week lookup."""

    week: Optional[Week] = None


class ScheduleOutput(BaseModel):
    """Response model for the season schedule."""

    weeks: List[Week] = Field(default_factory=list)


class StandingsOutput(BaseModel):
    """Response model for season standings."""

    rows: List[SeasonStanding] = Field(default_factory=list)


class JoinOutput(BaseModel):
    """Response model for profile creation or update."""

    ok: bool = True
    mode: Literal['created', 'updated']
    player: Optional[Player] = None


class ParticipationOutput(BaseModel):
    """Response model for joining or leaving a week."""

    ok: bool = True
    mode: Literal['joined', 'left']
    row: Optional[Dict[str, Any]] = None


class EntryOutput(BaseModel):
    """Response model for score submissions and draft picks."""

    ok: bool = True
    entry: Optional[WeekEntry] = None


class ResetWeekOutput(BaseModel):
    """Response model for clearing a week's entries."""

    ok: bool = True
    week_id: Identifier


class RecalcOutput(BaseModel):
    """Response model for recomputing combined totals."""

    ok: bool = True
    week_id: Identifier
    updated: int = 0


class AwardWeekOutput(BaseModel):
    """Response model for recording a week's winner."""

    ok: bool = True
    week_id: Identifier
    winner: Optional[str] = None


class ProScoreOutput(BaseModel):
    """Response model for the pro score lookup."""

    ok: bool = True
    pro_id: Optional[str] = None
    pro_to_par: Optional[int] = None
    note: Optional[str] = None


class HealthOutput(BaseModel):
    """Response model for the public health check."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    route: str
    raw_path: Annotated[Optional[str], Field(default=None, alias='rawPath')] = None
