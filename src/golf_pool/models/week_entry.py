"""
Week entry domain model.

A week entry records one player's result for one week. At most one entry
exists per (week, player) pair; the data store enforces this through upserts
keyed on ``WEEK_ENTRY_CONFLICT_KEY``.
"""

from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from golf_pool.models.week import Identifier

WEEK_ENTRY_CONFLICT_KEY = ('week_id', 'player_id')


class WeekEntry(BaseModel):
    """One player's recorded result for one week."""

    model_config = ConfigDict(extra='ignore')

    week_id: Annotated[Optional[Identifier], Field(
        default=None,
        description='Week the entry belongs to'
    )] = None

    player_id: Annotated[Identifier, Field(
        description='Player the entry belongs to'
    )]

    your_score: Annotated[Optional[int], Field(
        default=None,
        description="Player's own score relative to par",
        examples=[-2, 4]
    )] = None

    pro_score: Annotated[Optional[int], Field(
        default=None,
        description="Drafted professional's score relative to par",
        examples=[-8]
    )] = None

    total: Annotated[Optional[int], Field(
        default=None,
        description='Combined score, lower is better',
        examples=[-10]
    )] = None

    pga_golfer: Annotated[Optional[str], Field(
        default=None,
        description='Identifier of the drafted professional',
        examples=['Scottie Scheffler']
    )] = None

    @staticmethod
    def compute_total(your_score: Optional[int], pro_score: Optional[int]) -> Optional[int]:
        """Combined score exists only once both halves are known."""
        if your_score is None or pro_score is None:
            return None
        return your_score + pro_score

    @property
    def expected_total(self) -> Optional[int]:
        return self.compute_total(self.your_score, self.pro_score)

    def to_row(self) -> Dict[str, Any]:
        """Serialize for an upsert into the week_entries table."""
        return self.model_dump(mode='json')
