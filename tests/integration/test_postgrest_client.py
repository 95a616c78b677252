"""
Integration tests for the data store client and table-level store.

Requests are served by httpx.MockTransport so the exact wire format (paths,
query parameters, headers and bodies) can be asserted.
"""

import json
from typing import Callable, List

import httpx
import pytest

from golf_pool.dal import get_pool_store
from golf_pool.dal.postgrest_client import OrderBy, PostgrestClient, eq, is_not_null
from golf_pool.handlers.utils.errors import UpstreamServiceError

BASE_URL = "https://pool.example.test"


def recording_transport(handler: Callable[[httpx.Request], httpx.Response], seen: List[httpx.Request]):
    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    return httpx.MockTransport(record)


@pytest.fixture
def requests_seen() -> List[httpx.Request]:
    return []


class TestOrderBy:
    """Test cases for ordering terms."""

    @pytest.mark.parametrize("term,expected", [
        (OrderBy("name"), "name.asc"),
        (OrderBy("points", descending=True), "points.desc"),
        (OrderBy("week_number", nulls_last=True), "week_number.asc.nullslast"),
        (OrderBy("week_number", nulls_last=False), "week_number.asc.nullsfirst"),
    ])
    def test_render(self, term, expected):
        assert str(term) == expected


class TestPostgrestClient:
    """Integration tests for PostgrestClient."""

    def test_select_builds_query(self, requests_seen):
        transport = recording_transport(lambda request: httpx.Response(200, json=[{"id": 1}]), requests_seen)
        client = PostgrestClient(BASE_URL, "secret", transport=transport)

        rows = client.select(
            "weeks",
            ("id", "week_number"),
            filters={"week_number": is_not_null()},
            order=[OrderBy("week_number")],
            limit=5,
        )

        assert rows == [{"id": 1}]
        request = requests_seen[0]
        assert request.method == "GET"
        assert request.url.path == "/rest/v1/weeks"
        assert request.url.params["select"] == "id,week_number"
        assert request.url.params["week_number"] == "not.is.null"
        assert request.url.params["order"] == "week_number.asc"
        assert request.url.params["limit"] == "5"
        assert request.headers["apikey"] == "secret"
        assert request.headers["authorization"] == "Bearer secret"

    def test_upsert_sets_conflict_target(self, requests_seen):
        transport = recording_transport(
            lambda request: httpx.Response(201, json=[{"week_id": 2, "player_id": 7}]),
            requests_seen,
        )
        client = PostgrestClient(BASE_URL, "secret", transport=transport)

        rows = client.insert("week_entries", {"week_id": 2, "player_id": 7}, on_conflict=("week_id", "player_id"))

        request = requests_seen[0]
        assert rows == [{"week_id": 2, "player_id": 7}]
        assert request.method == "POST"
        assert request.url.params["on_conflict"] == "week_id,player_id"
        assert request.headers["prefer"] == "resolution=merge-duplicates,return=representation"
        assert json.loads(request.content) == {"week_id": 2, "player_id": 7}

    def test_plain_insert(self, requests_seen):
        transport = recording_transport(lambda request: httpx.Response(201, json=[{"id": 3}]), requests_seen)
        client = PostgrestClient(BASE_URL, "secret", transport=transport)

        client.insert("players", {"name": "Amy"})

        request = requests_seen[0]
        assert "on_conflict" not in request.url.params
        assert request.headers["prefer"] == "return=representation"

    def test_update(self, requests_seen):
        transport = recording_transport(lambda request: httpx.Response(200, json=[{"id": 3}]), requests_seen)
        client = PostgrestClient(BASE_URL, "secret", transport=transport)

        client.update("players", {"name": "Amy"}, filters={"id": eq(3)})

        request = requests_seen[0]
        assert request.method == "PATCH"
        assert request.url.params["id"] == "eq.3"

    def test_delete_without_content(self, requests_seen):
        transport = recording_transport(lambda request: httpx.Response(204), requests_seen)
        client = PostgrestClient(BASE_URL, "secret", transport=transport)

        assert client.delete("week_entries", {"week_id": eq(2)}) is None
        assert requests_seen[0].method == "DELETE"

    def test_delete_requires_filters(self, requests_seen):
        transport = recording_transport(lambda request: httpx.Response(204), requests_seen)
        client = PostgrestClient(BASE_URL, "secret", transport=transport)

        with pytest.raises(ValueError):
            client.delete("week_entries", {})

        assert requests_seen == []

    def test_error_status_is_surfaced(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(409, text='{"message":"duplicate key"}'))
        client = PostgrestClient(BASE_URL, "secret", transport=transport)

        with pytest.raises(UpstreamServiceError) as exc_info:
            client.select("players", ("id",))

        assert exc_info.value.status_code == 409
        assert "duplicate key" in exc_info.value.body

    def test_transport_failure_is_bad_gateway(self):
        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = PostgrestClient(BASE_URL, "secret", transport=httpx.MockTransport(fail))

        with pytest.raises(UpstreamServiceError) as exc_info:
            client.select("players", ("id",))

        assert exc_info.value.status_code == 502


class TestPoolStore:
    """Integration tests for PoolStore over a mocked data store."""

    def test_list_scheduled_weeks(self, requests_seen):
        payload = [
            {"id": 1, "week_number": 1, "start_date": "2026-01-05", "end_date": "2026-01-11", "label": None},
            {"id": 2, "week_number": 2, "start_date": "garbage", "end_date": None, "label": "Week 2"},
        ]
        transport = recording_transport(lambda request: httpx.Response(200, json=payload), requests_seen)
        store = get_pool_store(BASE_URL, "anon", transport=transport)

        weeks = store.list_scheduled_weeks()

        assert [week.id for week in weeks] == [1, 2]
        assert weeks[1].start_date is None
        assert requests_seen[0].url.params["week_number"] == "not.is.null"

    def test_list_schedule_puts_unnumbered_weeks_last(self, requests_seen):
        transport = recording_transport(lambda request: httpx.Response(200, json=[]), requests_seen)
        store = get_pool_store(BASE_URL, "anon", transport=transport)

        assert store.list_schedule() == []
        assert requests_seen[0].url.params["order"] == "week_number.asc.nullslast"

    def test_get_week_missing(self, requests_seen):
        transport = recording_transport(lambda request: httpx.Response(200, json=[]), requests_seen)
        store = get_pool_store(BASE_URL, "anon", transport=transport)

        assert store.get_week("12") is None
        assert requests_seen[0].url.params["id"] == "eq.12"
        assert requests_seen[0].url.params["limit"] == "1"

    def test_list_week_entries(self, requests_seen):
        payload = [{"week_id": 2, "player_id": 1, "your_score": 2, "pro_score": -6, "total": -4, "pga_golfer": "Jon Rahm"}]
        transport = recording_transport(lambda request: httpx.Response(200, json=payload), requests_seen)
        store = get_pool_store(BASE_URL, "anon", transport=transport)

        entries = store.list_week_entries(2)

        assert entries[0].total == -4
        assert requests_seen[0].url.path == "/rest/v1/week_entries"
        assert requests_seen[0].url.params["week_id"] == "eq.2"

    def test_season_standings_order(self, requests_seen):
        payload = [{"player_id": 1, "player_name": "Amy", "points": 12}]
        transport = recording_transport(lambda request: httpx.Response(200, json=payload), requests_seen)
        store = get_pool_store(BASE_URL, "anon", transport=transport)

        standings = store.list_season_standings()

        assert standings[0].points == 12
        assert requests_seen[0].url.path == "/rest/v1/season_standings"
        assert requests_seen[0].url.params["order"] == "points.desc,player_name.asc"

    def test_delete_week_participant(self, requests_seen):
        transport = recording_transport(lambda request: httpx.Response(204), requests_seen)
        store = get_pool_store(BASE_URL, "service", transport=transport)

        store.delete_week_participant(2, 9)

        params = requests_seen[0].url.params
        assert params["week_id"] == "eq.2"
        assert params["player_id"] == "eq.9"

    def test_unreadable_row_is_bad_gateway(self):
        payload = [{"week_id": 2, "player_id": 1, "your_score": 2, "pro_score": -1.5, "total": 0.5}]
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=payload))
        store = get_pool_store(BASE_URL, "anon", transport=transport)

        with pytest.raises(UpstreamServiceError) as exc_info:
            store.list_week_entries(2)

        assert exc_info.value.status_code == 502
        assert exc_info.value.service_name == "data-store"
        assert "WeekEntry" in exc_info.value.message
