"""
Business Logic Layer Module.

The two pool computations are pure functions of their inputs:

- resolve_current_week: which scheduled week is "now"
- build_leaderboard: ranked rows for one week's entries

PoolService combines them with the data access layer for the handlers.
"""

from golf_pool.logic.current_week import resolve_current_week
from golf_pool.logic.leaderboard import build_leaderboard
from golf_pool.logic.pool_service import PoolService

__all__ = [
    "PoolService",
    "build_leaderboard",
    "resolve_current_week",
]
