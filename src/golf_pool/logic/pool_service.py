"""
Business Logic Layer for the golf pool.

PoolService coordinates the data store with the two pure pool computations:
current week resolution and leaderboard aggregation. It holds no per-request
state, so one instance serves every invocation of an execution environment.
"""

from datetime import datetime, timezone, tzinfo
from typing import Callable, List, Optional

from aws_lambda_powertools.metrics import MetricUnit

from golf_pool.dal.identity_client import IdentityClient
from golf_pool.dal.pool_store import PoolStore
from golf_pool.handlers.utils.errors import (
    ConfigurationError,
    ErrorContext,
    NoScheduledWeeksError,
    PlayerNotLinkedError,
    ResourceNotFoundError,
)
from golf_pool.handlers.utils.observability import logger, metrics, tracer
from golf_pool.logic.current_week import resolve_current_week, to_wall_clock
from golf_pool.logic.leaderboard import build_leaderboard, leaders
from golf_pool.models.input import JoinRequest, ParticipateRequest, SubmitScoreRequest
from golf_pool.models.output import (
    AwardWeekOutput,
    CurrentWeekOutput,
    EntryOutput,
    JoinOutput,
    LeaderboardOutput,
    ParticipationOutput,
    RecalcOutput,
    ResetWeekOutput,
    ScheduleOutput,
    StandingsOutput,
)
from golf_pool.models.player import Player
from golf_pool.models.user import AuthenticatedUser
from golf_pool.models.week import Identifier, Week
from golf_pool.models.week_entry import WeekEntry

WINNER_SEPARATOR = ', '


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PoolService:
    """Business logic service for the golf pool."""

    def __init__(
        self,
        store: PoolStore,
        identity: Optional[IdentityClient] = None,
        zone: Optional[tzinfo] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize pool service.

        Args:
            store: Data access for the pool's tables
            identity: Identity service client, required by member operations
            zone: Time zone schedule dates are interpreted in
            clock: Source of the current instant
        """
        self.store = store
        self.identity = identity
        self.zone = zone or timezone.utc
        self.clock = clock

    def wall_clock(self, now: Optional[datetime] = None) -> datetime:
        """The pool's naive wall-clock time for ``now`` (default: the clock)."""
        return to_wall_clock(now or self.clock(), self.zone)

    # Reads

    @tracer.capture_method
    def current_week(self, now: Optional[datetime] = None) -> Optional[Week]:
        """Resolve the current week, None when nothing is scheduled."""
        weeks = self.store.list_scheduled_weeks()
        week = resolve_current_week(weeks, self.wall_clock(now))

        logger.debug("Current week resolved", extra={
            "scheduled_weeks": len(weeks),
            "week_id": week.id if week else None,
        })
        return week

    @tracer.capture_method
    def current_week_output(self, now: Optional[datetime] = None) -> CurrentWeekOutput:
        return CurrentWeekOutput(week=self.current_week(now))

    @tracer.capture_method
    def schedule(self) -> ScheduleOutput:
        return ScheduleOutput(weeks=self.store.list_schedule())

    @tracer.capture_method
    def players(self) -> List[Player]:
        return self.store.list_players()

    @tracer.capture_method
    def season_standings(self) -> StandingsOutput:
        return StandingsOutput(rows=self.store.list_season_standings())

    @tracer.capture_method
    def leaderboard(self, week_id: Optional[Identifier] = None, now: Optional[datetime] = None) -> LeaderboardOutput:
        """
        Build the leaderboard for a week.

        Args:
            week_id: Week to show; the current week when omitted
            now: Instant used to resolve the current week

        Returns:
            Leaderboard with an empty row list and null week when the requested
            week does not exist or no week is scheduled
        """
        week = self.store.get_week(week_id) if week_id is not None else self.current_week(now)
        if week is None:
            logger.info("No week to show on leaderboard", extra={"requested_week_id": week_id})
            return LeaderboardOutput()

        rows = build_leaderboard(self.store.list_players(), self.store.list_week_entries(week.id))

        tracer.put_annotation("week_id", str(week.id))
        logger.info("Leaderboard built", extra={"week_id": week.id, "row_count": len(rows)})

        return LeaderboardOutput(week=week.display_label, week_id=week.id, rows=rows)

    # Admin

    def _week_or_current(
        self,
        week_id: Optional[Identifier],
        now: Optional[datetime],
        context: Optional[ErrorContext],
    ) -> Week:
        if week_id is not None:
            week = self.store.get_week(week_id)
            if week is None:
                raise ResourceNotFoundError("Week", str(week_id), context=context)
            return week

        week = self.current_week(now)
        if week is None:
            raise NoScheduledWeeksError(context=context)
        return week

    @tracer.capture_method
    def reset_current_week(
        self,
        now: Optional[datetime] = None,
        context: Optional[ErrorContext] = None,
    ) -> ResetWeekOutput:
        """Delete every entry of the current week."""
        week = self._week_or_current(None, now, context)
        self.store.delete_week_entries(week.id)

        metrics.add_metric(name="WeekReset", unit=MetricUnit.Count, value=1)
        logger.info("Week reset", extra={"week_id": week.id})

        return ResetWeekOutput(week_id=week.id)

    @tracer.capture_method
    def recalculate_week(
        self,
        week_id: Optional[Identifier] = None,
        now: Optional[datetime] = None,
        context: Optional[ErrorContext] = None,
    ) -> RecalcOutput:
        """Recompute combined totals of a week's entries, writing back the ones that drifted."""
        week = self._week_or_current(week_id, now, context)

        updated = 0
        for entry in self.store.list_week_entries(week.id):
            expected = entry.expected_total
            if entry.total == expected:
                continue
            self.store.upsert_week_entry({"week_id": week.id, "player_id": entry.player_id, "total": expected})
            updated += 1

        metrics.add_metric(name="EntriesRecalculated", unit=MetricUnit.Count, value=updated)
        logger.info("Week totals recalculated", extra={"week_id": week.id, "updated": updated})

        return RecalcOutput(week_id=week.id, updated=updated)

    @tracer.capture_method
    def award_week(
        self,
        week_id: Optional[Identifier] = None,
        now: Optional[datetime] = None,
        context: Optional[ErrorContext] = None,
    ) -> AwardWeekOutput:
        """
        Record the week's winner on the week.

        Players tied for the best combined score share the win. With no scored
        entries the winner is cleared.
        """
        week = self._week_or_current(week_id, now, context)

        rows = build_leaderboard(self.store.list_players(), self.store.list_week_entries(week.id))
        names = [row.player_name or str(row.player_id) for row in leaders(rows)]
        winner = WINNER_SEPARATOR.join(names) if names else None

        self.store.set_week_winner(week.id, winner)

        logger.info("Week awarded", extra={"week_id": week.id, "winner": winner})
        return AwardWeekOutput(week_id=week.id, winner=winner)

    # Members

    def _require_identity(self) -> IdentityClient:
        if self.identity is None:
            raise ConfigurationError("Identity service is not configured for this function")
        return self.identity

    @tracer.capture_method
    def authenticate(self, authorization: Optional[str]) -> AuthenticatedUser:
        return self._require_identity().get_user(authorization)

    def _linked_player(self, user: AuthenticatedUser, context: Optional[ErrorContext]) -> Player:
        player = self.store.find_player_by_user(user.id)
        if player is None:
            raise PlayerNotLinkedError(user.id, context=context)
        return player

    @tracer.capture_method
    def join(self, user: AuthenticatedUser, request: JoinRequest) -> JoinOutput:
        """Create the caller's player profile, or update it when one is already linked."""
        existing = self.store.find_player_by_user(user.id)

        if existing is not None:
            player = self.store.update_player(existing.id, request.name, request.handicap_index)
            return JoinOutput(mode="updated", player=player)

        player = self.store.create_player(request.name, request.handicap_index, user.id)
        metrics.add_metric(name="PlayerJoined", unit=MetricUnit.Count, value=1)
        return JoinOutput(mode="created", player=player)

    @tracer.capture_method
    def set_participation(
        self,
        user: AuthenticatedUser,
        request: ParticipateRequest,
        context: Optional[ErrorContext] = None,
    ) -> ParticipationOutput:
        player = self._linked_player(user, context)

        if request.wants_in:
            row = self.store.upsert_week_participant(request.week_id, player.id)
            return ParticipationOutput(mode="joined", row=row)

        self.store.delete_week_participant(request.week_id, player.id)
        return ParticipationOutput(mode="left")

    @tracer.capture_method
    def submit_score(self, request: SubmitScoreRequest) -> EntryOutput:
        """Record a player's score for a week, replacing any earlier submission."""
        entry = WeekEntry(
            week_id=request.week_id,
            player_id=request.player_id,
            pga_golfer=request.pro_id,
            your_score=request.player_to_par,
            pro_score=request.pro_to_par,
            total=WeekEntry.compute_total(request.player_to_par, request.pro_to_par),
        )
        saved = self.store.upsert_week_entry(entry.to_row())

        metrics.add_metric(name="ScoreSubmitted", unit=MetricUnit.Count, value=1)
        logger.info("Score submitted", extra={
            "week_id": request.week_id,
            "player_id": request.player_id,
            "total": entry.total,
        })
        return EntryOutput(entry=saved)

    @tracer.capture_method
    def draft_pick(
        self,
        user: AuthenticatedUser,
        week_id: Identifier,
        pro_id: str,
        context: Optional[ErrorContext] = None,
    ) -> EntryOutput:
        """Set the caller's drafted professional for a week, keeping any submitted scores."""
        player = self._linked_player(user, context)
        saved = self.store.upsert_week_entry({"week_id": week_id, "player_id": player.id, "pga_golfer": pro_id})

        metrics.add_metric(name="DraftPick", unit=MetricUnit.Count, value=1)
        return EntryOutput(entry=saved)
