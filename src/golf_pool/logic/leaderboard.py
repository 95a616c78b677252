"""
Weekly leaderboard aggregation.

Every player on the roster gets a row, scored or not. Rows are ordered by
combined score ascending (to-par, lower is better), unscored rows last, ties
broken by player name.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from golf_pool.handlers.utils.observability import logger
from golf_pool.models.output import LeaderboardRow
from golf_pool.models.player import Player
from golf_pool.models.week import Identifier
from golf_pool.models.week_entry import WeekEntry


def index_entries(entries: Iterable[WeekEntry]) -> Dict[Identifier, WeekEntry]:
    """Map player id to entry. Duplicate entries for a player: the last one seen wins."""
    by_player: Dict[Identifier, WeekEntry] = {}
    for entry in entries:
        if entry.player_id in by_player:
            logger.debug("Duplicate week entry for player", extra={"player_id": entry.player_id})
        by_player[entry.player_id] = entry
    return by_player


def leaderboard_sort_key(row: LeaderboardRow) -> Tuple[bool, int, str]:
    return (row.combined is None, row.combined or 0, row.player_name or '')


def build_leaderboard(players: Iterable[Player], entries: Iterable[WeekEntry]) -> List[LeaderboardRow]:
    """
    Outer-join the roster against one week's entries and order the result.

    Args:
        players: Full roster
        entries: Entries for a single week

    Returns:
        One row per player, best combined score first
    """
    by_player = index_entries(entries)

    rows = []
    for player in players:
        entry: Optional[WeekEntry] = by_player.get(player.id)
        rows.append(LeaderboardRow(
            player_id=player.id,
            player_name=player.name,
            player_score=entry.your_score if entry else None,
            pro_score=entry.pro_score if entry else None,
            combined=entry.total if entry else None,
            pga_golfer=entry.pga_golfer if entry else None,
        ))

    rows.sort(key=leaderboard_sort_key)
    return rows


def leaders(rows: Iterable[LeaderboardRow]) -> List[LeaderboardRow]:
    """Rows sharing the best non-null combined score, in leaderboard order."""
    scored = [row for row in rows if row.combined is not None]
    if not scored:
        return []
    best = min(row.combined for row in scored)
    return sorted((row for row in scored if row.combined == best), key=leaderboard_sort_key)
