"""
Week domain model.

A week is one scheduled scoring interval of the season. Only weeks carrying a
week number take part in current-week resolution; the dates are plain calendar
days interpreted on the pool's wall clock.
"""

from datetime import date, datetime, time
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

# Row identifiers are opaque: integer keys or uuid strings depending on the table
Identifier = Union[int, Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]]

START_OF_DAY = time(0, 0, 0)
END_OF_DAY = time(23, 59, 59)


class Week(BaseModel):
    """Scheduled scoring interval ("week") in the season."""

    model_config = ConfigDict(extra='ignore')

    id: Annotated[Identifier, Field(
        description='Unique identifier of the week',
        examples=[12, '3f0c1b9e-8c1d-4a55-9a38-2f7c6d5b1e40']
    )]

    week_number: Annotated[Optional[int], Field(
        default=None,
        description='Sequence number; only scheduled weeks have one',
        examples=[1, 2]
    )] = None

    label: Annotated[Optional[str], Field(
        default=None,
        description='Display label',
        examples=['Week 1 - Sony Open']
    )] = None

    tournament_name: Annotated[Optional[str], Field(
        default=None,
        description='Tournament played that week',
        examples=['Sony Open in Hawaii']
    )] = None

    start_date: Annotated[Optional[date], Field(
        default=None,
        description='First calendar day of the week'
    )] = None

    end_date: Annotated[Optional[date], Field(
        default=None,
        description='Last calendar day of the week'
    )] = None

    logo_url: Annotated[Optional[str], Field(
        default=None,
        description='Tournament logo for display'
    )] = None

    winner_player_name: Annotated[Optional[str], Field(
        default=None,
        description='Name of the pool winner once awarded'
    )] = None

    @field_validator('start_date', 'end_date', mode='before')
    @classmethod
    def parse_lenient_date(cls, v: Any) -> Optional[date]:
        """Unparsable dates make the week not date-bounded instead of failing."""
        if v is None:
            return None
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, date):
            return v
        if isinstance(v, str):
            try:
                return date.fromisoformat(v.strip()[:10])
            except ValueError:
                return None
        return None

    @property
    def is_scheduled(self) -> bool:
        return self.week_number is not None

    @property
    def starts_at(self) -> Optional[datetime]:
        if self.start_date is None:
            return None
        return datetime.combine(self.start_date, START_OF_DAY)

    @property
    def ends_at(self) -> Optional[datetime]:
        if self.end_date is None:
            return None
        return datetime.combine(self.end_date, END_OF_DAY)

    @property
    def display_label(self) -> str:
        if self.label:
            return self.label
        if self.week_number is not None:
            return f'Week {self.week_number}'
        return f'Week {self.id}'

    def contains(self, now: datetime) -> bool:
        """
        Check whether the given wall-clock instant falls inside the week.

        Weeks missing either date are never in range.
        """
        starts_at, ends_at = self.starts_at, self.ends_at
        if starts_at is None or ends_at is None:
            return False
        return starts_at <= now <= ends_at
