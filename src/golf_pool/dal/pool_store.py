"""
Table-level data access for the golf pool.

Maps the pool's tables (weeks, players, week_entries, week_participants and the
season_standings view) onto domain models. All reads and writes go through
PostgrestClient; errors from the store propagate unchanged and rows
that do not fit their model surface as upstream failures.
"""

from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from golf_pool.dal.postgrest_client import SERVICE_NAME, OrderBy, PostgrestClient, eq, is_not_null
from golf_pool.handlers.utils.errors import UpstreamServiceError
from golf_pool.handlers.utils.observability import logger, tracer
from golf_pool.models.player import Player, SeasonStanding
from golf_pool.models.week import Identifier, Week
from golf_pool.models.week_entry import WEEK_ENTRY_CONFLICT_KEY, WeekEntry

WEEKS_TABLE = 'weeks'
PLAYERS_TABLE = 'players'
WEEK_ENTRIES_TABLE = 'week_entries'
WEEK_PARTICIPANTS_TABLE = 'week_participants'
SEASON_STANDINGS_VIEW = 'season_standings'

SCHEDULE_COLUMNS = (
    'id', 'week_number', 'tournament_name', 'start_date', 'end_date', 'logo_url', 'label', 'winner_player_name',
)
PLAYER_COLUMNS = ('id', 'name')
PROFILE_COLUMNS = ('id', 'name', 'handicap_index', 'user_id')
ENTRY_COLUMNS = ('week_id', 'player_id', 'your_score', 'pro_score', 'total', 'pga_golfer')
STANDING_COLUMNS = ('player_id', 'player_name', 'points')

ModelT = TypeVar('ModelT', bound=BaseModel)


def parse_row(model: Type[ModelT], row: Mapping[str, Any]) -> ModelT:
    """Validate one store row; a row that does not fit ``model`` raises a 502 UpstreamServiceError."""
    try:
        return model.model_validate(row)
    except PydanticValidationError as e:
        logger.error('Unreadable row from data store', extra={'model': model.__name__, 'row': dict(row)})
        message = f'Unreadable {model.__name__} row: {e.error_count()} invalid field(s)'
        raise UpstreamServiceError(SERVICE_NAME, 502, message) from e


def parse_rows(model: Type[ModelT], rows: List[Mapping[str, Any]]) -> List[ModelT]:
    return [parse_row(model, row) for row in rows]


class PoolStore:
    """Data access for weeks, players and their entries."""

    def __init__(self, client: PostgrestClient) -> None:
        self.client = client

    # Weeks

    @tracer.capture_method
    def list_schedule(self) -> List[Week]:
        """All weeks for display, scheduled ones first in week order."""
        rows = self.client.select(
            WEEKS_TABLE,
            SCHEDULE_COLUMNS,
            order=[OrderBy('week_number', nulls_last=True)],
        )
        return parse_rows(Week, rows)

    @tracer.capture_method
    def list_scheduled_weeks(self) -> List[Week]:
        """Weeks with a week number, ascending."""
        rows = self.client.select(
            WEEKS_TABLE,
            SCHEDULE_COLUMNS,
            filters={'week_number': is_not_null()},
            order=[OrderBy('week_number')],
        )
        logger.debug('Scheduled weeks loaded', extra={'week_count': len(rows)})
        return parse_rows(Week, rows)

    @tracer.capture_method
    def get_week(self, week_id: Identifier) -> Optional[Week]:
        rows = self.client.select(
            WEEKS_TABLE,
            ('id', 'label', 'week_number'),
            filters={'id': eq(week_id)},
            limit=1,
        )
        return parse_row(Week, rows[0]) if rows else None

    @tracer.capture_method
    def set_week_winner(self, week_id: Identifier, winner_player_name: Optional[str]) -> Optional[Week]:
        rows = self.client.update(
            WEEKS_TABLE,
            {'winner_player_name': winner_player_name},
            filters={'id': eq(week_id)},
        )
        return parse_row(Week, rows[0]) if rows else None

    # Players

    @tracer.capture_method
    def list_players(self) -> List[Player]:
        rows = self.client.select(PLAYERS_TABLE, PLAYER_COLUMNS, order=[OrderBy('name')])
        return parse_rows(Player, rows)

    @tracer.capture_method
    def find_player_by_user(self, user_id: str) -> Optional[Player]:
        rows = self.client.select(
            PLAYERS_TABLE,
            PROFILE_COLUMNS,
            filters={'user_id': eq(user_id)},
            limit=1,
        )
        return parse_row(Player, rows[0]) if rows else None

    @tracer.capture_method
    def create_player(self, name: str, handicap_index: Optional[float], user_id: str) -> Optional[Player]:
        rows = self.client.insert(
            PLAYERS_TABLE,
            {'name': name, 'handicap_index': handicap_index, 'user_id': user_id},
        )
        logger.info('Player created', extra={'user_id': user_id})
        return parse_row(Player, rows[0]) if rows else None

    @tracer.capture_method
    def update_player(self, player_id: Identifier, name: str, handicap_index: Optional[float]) -> Optional[Player]:
        rows = self.client.update(
            PLAYERS_TABLE,
            {'name': name, 'handicap_index': handicap_index},
            filters={'id': eq(player_id)},
        )
        logger.info('Player updated', extra={'player_id': player_id})
        return parse_row(Player, rows[0]) if rows else None

    @tracer.capture_method
    def list_season_standings(self) -> List[SeasonStanding]:
        rows = self.client.select(
            SEASON_STANDINGS_VIEW,
            STANDING_COLUMNS,
            order=[OrderBy('points', descending=True), OrderBy('player_name')],
        )
        return parse_rows(SeasonStanding, rows)

    # Entries

    @tracer.capture_method
    def list_week_entries(self, week_id: Identifier) -> List[WeekEntry]:
        rows = self.client.select(WEEK_ENTRIES_TABLE, ENTRY_COLUMNS, filters={'week_id': eq(week_id)})
        return parse_rows(WeekEntry, rows)

    @tracer.capture_method
    def upsert_week_entry(self, values: Dict[str, Any]) -> Optional[WeekEntry]:
        """
        Create or merge into the (week, player) entry.

        Only the columns present in ``values`` are written on conflict, so a draft
        pick leaves previously submitted scores alone.
        """
        rows = self.client.insert(WEEK_ENTRIES_TABLE, values, on_conflict=WEEK_ENTRY_CONFLICT_KEY)
        return parse_row(WeekEntry, rows[0]) if rows else None

    @tracer.capture_method
    def delete_week_entries(self, week_id: Identifier) -> None:
        self.client.delete(WEEK_ENTRIES_TABLE, {'week_id': eq(week_id)})
        logger.info('Week entries deleted', extra={'week_id': week_id})

    # Participation

    @tracer.capture_method
    def upsert_week_participant(self, week_id: Identifier, player_id: Identifier) -> Optional[Dict[str, Any]]:
        rows = self.client.insert(
            WEEK_PARTICIPANTS_TABLE,
            {'week_id': week_id, 'player_id': player_id},
            on_conflict=WEEK_ENTRY_CONFLICT_KEY,
        )
        return rows[0] if rows else None

    @tracer.capture_method
    def delete_week_participant(self, week_id: Identifier, player_id: Identifier) -> None:
        self.client.delete(WEEK_PARTICIPANTS_TABLE, {'week_id': eq(week_id), 'player_id': eq(player_id)})
