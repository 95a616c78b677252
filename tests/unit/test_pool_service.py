"""
Unit tests for the pool business logic.

The data store and identity service are replaced with mocks; the clock is
fixed so current week resolution is deterministic.
"""

from datetime import datetime, timezone
from unittest.mock import Mock
from zoneinfo import ZoneInfo

import pytest

from golf_pool.dal.identity_client import IdentityClient
from golf_pool.dal.pool_store import PoolStore
from golf_pool.handlers.utils.errors import (
    ConfigurationError,
    NoScheduledWeeksError,
    PlayerNotLinkedError,
    ResourceNotFoundError,
)
from golf_pool.logic.pool_service import PoolService
from golf_pool.models.input import JoinRequest, ParticipateRequest, SubmitScoreRequest
from golf_pool.models.player import Player
from golf_pool.models.user import AuthenticatedUser
from golf_pool.models.week_entry import WeekEntry

# Wednesday of week 2 in the sample schedule
FIXED_NOW = datetime(2026, 1, 14, 15, 0, tzinfo=timezone.utc)

USER = AuthenticatedUser(id="user-1", email="amy@example.com")


@pytest.fixture
def store(sample_weeks, sample_players, sample_entries):
    store = Mock(spec=PoolStore)
    store.list_scheduled_weeks.return_value = [week for week in sample_weeks if week.is_scheduled]
    store.list_players.return_value = sample_players
    store.list_week_entries.return_value = sample_entries
    store.get_week.return_value = None
    store.find_player_by_user.return_value = None
    store.upsert_week_entry.return_value = None
    return store


@pytest.fixture
def identity():
    identity = Mock(spec=IdentityClient)
    identity.get_user.return_value = USER
    return identity


@pytest.fixture
def service(store, identity):
    return PoolService(store=store, identity=identity, clock=lambda: FIXED_NOW)


class TestCurrentWeek:
    """Test cases for current week lookups."""

    def test_resolves_from_scheduled_weeks(self, service):
        assert service.current_week().id == 2

    def test_no_scheduled_weeks(self, service, store):
        store.list_scheduled_weeks.return_value = []

        assert service.current_week() is None
        assert service.current_week_output().week is None

    def test_pool_timezone_decides_the_day(self, store):
        """Monday 02:00 UTC is still Sunday of the previous week in Los Angeles."""
        now = datetime(2026, 1, 12, 2, 0, tzinfo=timezone.utc)
        service = PoolService(store=store, zone=ZoneInfo("America/Los_Angeles"), clock=lambda: now)

        assert service.current_week().id == 1

    def test_explicit_now_overrides_clock(self, service):
        assert service.current_week(now=datetime(2026, 6, 1)).id == 3


class TestLeaderboard:
    """Test cases for the leaderboard operation."""

    def test_current_week_leaderboard(self, service, store):
        output = service.leaderboard()

        assert output.week == "Week 2 - American Express"
        assert output.week_id == 2
        assert [row.player_name for row in output.rows] == ["Amy", "Bob", "Cal"]
        store.list_week_entries.assert_called_once_with(2)

    def test_empty_when_nothing_scheduled(self, service, store):
        store.list_scheduled_weeks.return_value = []

        output = service.leaderboard()

        assert output.model_dump(mode="json") == {"week": None, "week_id": None, "rows": []}
        store.list_week_entries.assert_not_called()

    def test_explicit_week(self, service, store, sample_weeks):
        store.get_week.return_value = sample_weeks[0]

        output = service.leaderboard(week_id="1")

        assert output.week_id == 1
        store.get_week.assert_called_once_with("1")
        store.list_week_entries.assert_called_once_with(1)

    def test_unknown_week_is_empty(self, service, store):
        output = service.leaderboard(week_id="404")

        assert output.rows == []
        assert output.week is None


class TestAdminOperations:
    """Test cases for reset, recalculation and awards."""

    def test_reset_current_week(self, service, store):
        output = service.reset_current_week()

        store.delete_week_entries.assert_called_once_with(2)
        assert output.ok is True
        assert output.week_id == 2

    def test_reset_without_schedule(self, service, store):
        store.list_scheduled_weeks.return_value = []

        with pytest.raises(NoScheduledWeeksError):
            service.reset_current_week()

        store.delete_week_entries.assert_not_called()

    def test_recalculate_writes_only_drifted_totals(self, service, store):
        store.list_week_entries.return_value = [
            WeekEntry(week_id=2, player_id=1, your_score=2, pro_score=-6, total=-4),
            WeekEntry(week_id=2, player_id=2, your_score=5, pro_score=-3, total=9),
            WeekEntry(week_id=2, player_id=3, your_score=1, pro_score=None, total=1),
        ]

        output = service.recalculate_week()

        assert output.updated == 2
        store.upsert_week_entry.assert_any_call({"week_id": 2, "player_id": 2, "total": 2})
        store.upsert_week_entry.assert_any_call({"week_id": 2, "player_id": 3, "total": None})

    def test_recalculate_unknown_week(self, service):
        with pytest.raises(ResourceNotFoundError):
            service.recalculate_week(week_id=77)

    def test_award_single_winner(self, service, store):
        output = service.award_week()

        assert output.winner == "Amy"
        store.set_week_winner.assert_called_once_with(2, "Amy")

    def test_award_shared_win(self, service, store):
        store.list_week_entries.return_value = [
            WeekEntry(week_id=2, player_id=1, total=-1),
            WeekEntry(week_id=2, player_id=3, total=-1),
        ]

        output = service.award_week()

        assert output.winner == "Amy, Cal"

    def test_award_without_scores_clears_winner(self, service, store):
        store.list_week_entries.return_value = []

        output = service.award_week()

        assert output.winner is None
        store.set_week_winner.assert_called_once_with(2, None)


class TestMemberOperations:
    """Test cases for operations on the caller's own player."""

    def test_authenticate_delegates_to_identity(self, service, identity):
        assert service.authenticate("Bearer token") == USER
        identity.get_user.assert_called_once_with("Bearer token")

    def test_authenticate_without_identity_client(self, store):
        service = PoolService(store=store)

        with pytest.raises(ConfigurationError):
            service.authenticate("Bearer token")

    def test_join_creates_player(self, service, store):
        store.create_player.return_value = Player(id=9, name="Amy", user_id="user-1")

        output = service.join(USER, JoinRequest(name="Amy", handicap_index=12.4))

        assert output.mode == "created"
        store.create_player.assert_called_once_with("Amy", 12.4, "user-1")

    def test_join_updates_linked_player(self, service, store):
        store.find_player_by_user.return_value = Player(id=9, name="Amy", user_id="user-1")
        store.update_player.return_value = Player(id=9, name="Amy A.", user_id="user-1")

        output = service.join(USER, JoinRequest(name="Amy A."))

        assert output.mode == "updated"
        store.update_player.assert_called_once_with(9, "Amy A.", None)
        store.create_player.assert_not_called()

    def test_participation_requires_linked_player(self, service):
        with pytest.raises(PlayerNotLinkedError):
            service.set_participation(USER, ParticipateRequest(week_id=2))

    def test_join_week(self, service, store):
        store.find_player_by_user.return_value = Player(id=9, name="Amy")
        store.upsert_week_participant.return_value = {"week_id": 2, "player_id": 9}

        output = service.set_participation(USER, ParticipateRequest(week_id=2))

        assert output.mode == "joined"
        assert output.row == {"week_id": 2, "player_id": 9}
        store.upsert_week_participant.assert_called_once_with(2, 9)

    def test_leave_week(self, service, store):
        store.find_player_by_user.return_value = Player(id=9, name="Amy")

        output = service.set_participation(USER, ParticipateRequest(week_id=2, participate=False))

        assert output.mode == "left"
        store.delete_week_participant.assert_called_once_with(2, 9)

    def test_submit_score_computes_total(self, service, store):
        store.upsert_week_entry.side_effect = lambda values: WeekEntry.model_validate(values)
        request = SubmitScoreRequest(week_id=2, player_id=7, pro_id="Jon Rahm", player_to_par=3, pro_to_par=-6)

        output = service.submit_score(request)

        assert output.entry.total == -3
        store.upsert_week_entry.assert_called_once_with({
            "week_id": 2,
            "player_id": 7,
            "your_score": 3,
            "pro_score": -6,
            "total": -3,
            "pga_golfer": "Jon Rahm",
        })

    def test_submit_score_without_pro_score(self, service, store):
        request = SubmitScoreRequest(week_id=2, player_id=7, pro_id="Jon Rahm", player_to_par=3)

        service.submit_score(request)

        values = store.upsert_week_entry.call_args.args[0]
        assert values["total"] is None

    def test_draft_pick_keeps_scores(self, service, store):
        store.find_player_by_user.return_value = Player(id=9, name="Amy")

        service.draft_pick(USER, 2, "Scottie Scheffler")

        store.upsert_week_entry.assert_called_once_with({"week_id": 2, "player_id": 9, "pga_golfer": "Scottie Scheffler"})

    def test_draft_pick_requires_linked_player(self, service, store):
        with pytest.raises(PlayerNotLinkedError):
            service.draft_pick(USER, 2, "Jon Rahm")

        store.upsert_week_entry.assert_not_called()
