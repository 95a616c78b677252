"""
Input models for request validation using Pydantic.

Request bodies are decoded through these models before any work is done; a body
that does not fit is rejected with a 400 instead of being defaulted.
"""

from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from golf_pool.models.week import Identifier

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class JoinRequest(BaseModel):
    """Request model for creating or updating the caller's player profile."""

    name: Annotated[NonBlankStr, Field(
        max_length=80,
        description='Display name for the player',
        examples=['Amy Adams']
    )]

    handicap_index: Annotated[Optional[float], Field(
        default=None,
        allow_inf_nan=False,
        description='Optional handicap index; blank clears it',
        examples=[12.4]
    )] = None

    @field_validator('handicap_index', mode='before')
    @classmethod
    def blank_handicap_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ParticipateRequest(BaseModel):
    """Request model for opting in or out of a week."""

    week_id: Annotated[Identifier, Field(description='Week to join or leave')]

    participate: Annotated[Optional[bool], Field(
        default=None,
        description='False leaves the week; anything else joins it'
    )] = None

    @property
    def wants_in(self) -> bool:
        return True if self.participate is None else self.participate


class SubmitScoreRequest(BaseModel):
    """Request model for recording a player's score for a week."""

    model_config = ConfigDict(str_strip_whitespace=True)

    week_id: Annotated[Identifier, Field(description='Week being scored')]

    player_id: Annotated[Identifier, Field(description='Player being scored')]

    pro_id: Annotated[NonBlankStr, Field(
        description='Professional the player drafted',
        examples=['Rory McIlroy']
    )]

    player_to_par: Annotated[int, Field(
        description="Player's own score relative to par",
        examples=[3]
    )]

    pro_to_par: Annotated[Optional[int], Field(
        default=None,
        description="Professional's score relative to par, if known",
        examples=[-6]
    )] = None


class DraftPickRequest(BaseModel):
    """Request model for drafting a professional for a week."""

    week_id: Annotated[Identifier, Field(description='Week the pick is for')]

    pro_id: Annotated[NonBlankStr, Field(
        description='Professional being drafted',
        examples=['Jon Rahm']
    )]


class WeekSelectionRequest(BaseModel):
    """Request model for admin operations that default to the current week."""

    week_id: Annotated[Optional[Identifier], Field(
        default=None,
        description='Week to operate on; the current week when omitted'
    )] = None
