"""
Golf Pool Service Package.

Serverless HTTP functions for a weekly fantasy golf pool, in three layers:

- handlers: API Gateway resolvers, one per deployed function
- logic: Current week resolution, leaderboard aggregation and pool operations
- dal: REST clients for the hosted data store and identity service
- models: Pydantic models for rows, requests and responses
"""

__version__ = "1.0.0"
__description__ = "Fantasy golf pool API"

from golf_pool.handlers.utils.observability import logger, metrics, tracer
from golf_pool.models.week import Week
from golf_pool.models.output import LeaderboardOutput, LeaderboardRow

__all__ = [
    "Week",
    "LeaderboardOutput",
    "LeaderboardRow",
    "logger",
    "tracer",
    "metrics",
]
