"""Player and season standing models."""

from typing import Annotated, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from golf_pool.models.week import Identifier


class Player(BaseModel):
    """A pool member eligible to submit scores and draft a professional."""

    model_config = ConfigDict(extra='ignore')

    id: Annotated[Identifier, Field(
        description='Unique identifier of the player',
        examples=[7]
    )]

    name: Annotated[Optional[str], Field(
        default=None,
        description='Display name',
        examples=['Amy Adams']
    )] = None

    handicap_index: Annotated[Optional[float], Field(
        default=None,
        description='Optional golf handicap index',
        examples=[12.4]
    )] = None

    user_id: Annotated[Optional[str], Field(
        default=None,
        description='Identity account linked to this player'
    )] = None


class SeasonStanding(BaseModel):
    """Season points for one player, as computed by the data store."""

    model_config = ConfigDict(extra='ignore')

    player_id: Identifier
    player_name: Optional[str] = None
    points: Optional[Union[int, float]] = None


class Pro(BaseModel):
    """Professional golfer available in the draft."""

    id: str
    name: str
