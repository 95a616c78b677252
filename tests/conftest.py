"""
Pytest configuration and shared fixtures for the golf pool service.

This module provides the environment, Lambda context, API Gateway event factory
and sample pool data used across unit and integration tests.
"""

import json
import os
from datetime import date
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import Mock

import pytest

# Handler modules read Powertools settings at import time, before any fixture runs
os.environ.update({
    "SUPABASE_URL": "https://pool.example.test",
    "SUPABASE_ANON_KEY": "test-anon-key",
    "SUPABASE_SERVICE_ROLE_KEY": "test-service-role-key",
    "ADMIN_TOKEN": "test-admin-token",
    "POOL_TIMEZONE": "UTC",
    "POWERTOOLS_SERVICE_NAME": "test-golf-pool",
    "POWERTOOLS_METRICS_NAMESPACE": "TestGolfPool",
    "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
    "LOG_LEVEL": "DEBUG",
})

from golf_pool.models.player import Player  # noqa: E402
from golf_pool.models.week import Week  # noqa: E402
from golf_pool.models.week_entry import WeekEntry  # noqa: E402


# Sample data fixtures
@pytest.fixture
def sample_weeks() -> List[Week]:
    """Three consecutive scheduled weeks plus an unscheduled one."""
    return [
        Week(id=1, week_number=1, label="Week 1 - Sony Open",
             start_date=date(2026, 1, 5), end_date=date(2026, 1, 11)),
        Week(id=2, week_number=2, label="Week 2 - American Express",
             start_date=date(2026, 1, 12), end_date=date(2026, 1, 18)),
        Week(id=3, week_number=3, label="Week 3 - Farmers Insurance Open",
             start_date=date(2026, 1, 19), end_date=date(2026, 1, 25)),
        Week(id=99, week_number=None, label="Unscheduled exhibition",
             start_date=date(2026, 1, 12), end_date=date(2026, 1, 18)),
    ]


@pytest.fixture
def sample_players() -> List[Player]:
    """Roster of three players."""
    return [
        Player(id=1, name="Amy"),
        Player(id=2, name="Bob"),
        Player(id=3, name="Cal"),
    ]


@pytest.fixture
def sample_entries() -> List[WeekEntry]:
    """Entries for week 2: Amy and Bob scored, Cal has none."""
    return [
        WeekEntry(week_id=2, player_id=1, your_score=2, pro_score=-6, total=-4, pga_golfer="Jon Rahm"),
        WeekEntry(week_id=2, player_id=2, your_score=5, pro_score=-3, total=2, pga_golfer="Rory McIlroy"),
    ]


@pytest.fixture
def api_gateway_event() -> Callable[..., Dict[str, Any]]:
    """Factory for API Gateway REST proxy events."""

    def make_event(
        method: str,
        path: str,
        body: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
        query: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        if body is not None and not isinstance(body, str):
            body = json.dumps(body)

        return {
            "resource": "/{proxy+}",
            "httpMethod": method,
            "path": path,
            "headers": {
                "Content-Type": "application/json",
                "User-Agent": "test-agent/1.0",
                **(headers or {}),
            },
            "multiValueHeaders": {},
            "body": body,
            "requestContext": {
                "requestId": "test-request-id-123",
                "accountId": "123456789012",
                "stage": "test",
                "httpMethod": method,
                "path": path,
                "resourcePath": "/{proxy+}",
                "protocol": "HTTP/1.1",
                "requestTime": "05/Jan/2026:12:00:00 +0000",
                "requestTimeEpoch": 1767614400000,
                "identity": {
                    "sourceIp": "127.0.0.1",
                    "userAgent": "test-agent/1.0",
                },
            },
            "pathParameters": None,
            "queryStringParameters": query,
            "multiValueQueryStringParameters": {k: [v] for k, v in query.items()} if query else None,
            "stageVariables": None,
            "isBase64Encoded": False,
        }

    return make_event


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-golf-pool-function"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-golf-pool-function"
    context.memory_limit_in_mb = 256
    context.get_remaining_time_in_millis = lambda: 30000
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-golf-pool-function"
    context.log_stream_name = "2026/01/05/[$LATEST]test123"
    return context


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.path):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.path):
            item.add_marker(pytest.mark.integration)
