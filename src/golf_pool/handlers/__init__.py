"""
AWS Lambda Handlers Module.

Each handler module owns one API Gateway REST resolver and its route table:

- public_handler: Health, roster, pros, schedule, current week, standings, leaderboard
- admin_handler: Week reset and total recalculation behind the admin token
- auth_handler: Self-service signup behind a member bearer token
- mutate_handler: Participation, score submission, draft picks and week awards
- proscore_handler: Score lookup for a drafted professional

Handler modules are imported by their entry points, not from here, because the
logic and data access layers import the shared utilities in this package.
"""

from golf_pool.handlers.utils.observability import logger, metrics, tracer

__all__ = [
    "logger",
    "tracer",
    "metrics",
]
