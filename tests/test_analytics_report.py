import asyncio
from datetime import date, timedelta

import pytest

from portfolio.db.engine import async_session_factory
from portfolio.db.procedures import PERIOD_PROCEDURES
from portfolio.models.analytics import VisitEvent, utc_today
from portfolio.services.analytics_service import AnalyticsService, analytics_service


async def _seed(visits: list[tuple[str, str, date]]) -> None:
    async with async_session_factory() as session:
        for ip_address, page_path, visit_date in visits:
            session.add(VisitEvent(ip_address=ip_address, page_path=page_path, visit_date=visit_date))
        await session.commit()


def test_report_requires_owner(client):
    response = client.get("/api/analytics")

    assert response.status_code == 401
    assert response.json() == {"success": False, "data": None, "error": "Unauthorized"}


def test_weekly_report_covers_requested_days(owner_client):
    response = owner_client.get("/api/analytics", params={"period": "weekly", "days": "14"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["period"] == "weekly"
    start = date.fromisoformat(data["dateRange"]["start"])
    end = date.fromisoformat(data["dateRange"]["end"])
    assert end - start == timedelta(days=14)
    assert end == utc_today()


def test_empty_store_reports_zeros(owner_client):
    response = owner_client.get("/api/analytics")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalVisits"] == 0
    assert data["todayVisits"] == 0
    assert data["uniqueVisitors"] == 0
    assert data["topPages"] == []
    assert data["chartData"] == []
    assert data["period"] == "daily"


def test_unknown_period_and_bad_days_fall_back_to_defaults(owner_client):
    response = owner_client.get("/api/analytics", params={"period": "hourly", "days": "abc"})

    data = response.json()["data"]
    assert data["period"] == "daily"
    start = date.fromisoformat(data["dateRange"]["start"])
    end = date.fromisoformat(data["dateRange"]["end"])
    assert end - start == timedelta(days=30)

    response = owner_client.get("/api/analytics", params={"days": "-5"})
    data = response.json()["data"]
    assert date.fromisoformat(data["dateRange"]["end"]) - date.fromisoformat(
        data["dateRange"]["start"]
    ) == timedelta(days=30)


def test_report_counts_visits_in_window(owner_client):
    today = utc_today()
    asyncio.run(
        _seed(
            [
                ("1.1.1.1", "/projects", today),
                ("1.1.1.1", "/projects", today),
                ("2.2.2.2", "/", today),
                ("3.3.3.3", "/about", today - timedelta(days=3)),
                # outside a 7 day window, still part of the all-time total
                ("4.4.4.4", "/old", today - timedelta(days=40)),
            ]
        )
    )

    response = owner_client.get("/api/analytics", params={"period": "daily", "days": "7"})

    data = response.json()["data"]
    assert data["totalVisits"] == 5
    assert data["todayVisits"] == 3
    assert data["uniqueVisitors"] == 3
    assert data["topPages"] == [
        {"path": "/projects", "count": 2},
        {"path": "/", "count": 1},
        {"path": "/about", "count": 1},
    ]
    assert data["chartData"] == [
        {"visit_date": (today - timedelta(days=3)).isoformat(), "visit_count": 1},
        {"visit_date": today.isoformat(), "visit_count": 3},
    ]


def test_top_pages_limited_to_ten(owner_client):
    today = utc_today()
    visits = []
    for index in range(12):
        # /page-00 gets the most visits, /page-11 the fewest
        visits.extend(("5.5.5.5", f"/page-{index:02d}", today) for _ in range(12 - index))
    asyncio.run(_seed(visits))

    data = owner_client.get("/api/analytics").json()["data"]

    assert len(data["topPages"]) == 10
    assert data["topPages"][0] == {"path": "/page-00", "count": 12}
    assert data["topPages"][-1] == {"path": "/page-09", "count": 3}


def test_bucket_query_failure_fails_the_report(owner_client, monkeypatch: pytest.MonkeyPatch):
    async def _broken(*_args):
        raise RuntimeError('relation "analytics" does not exist')

    monkeypatch.setitem(PERIOD_PROCEDURES, "daily", _broken)

    response = owner_client.get("/api/analytics")

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "data": None,
        "error": 'relation "analytics" does not exist',
    }


def test_supplementary_query_failure_falls_back_to_zero(owner_client, monkeypatch: pytest.MonkeyPatch):
    today = utc_today()
    asyncio.run(_seed([("1.1.1.1", "/", today)]))

    async def _broken(*_args):
        raise RuntimeError("statement timeout")

    monkeypatch.setattr(analytics_service, "_count_total_visits", _broken)
    monkeypatch.setattr(analytics_service, "_top_pages", _broken)

    response = owner_client.get("/api/analytics")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalVisits"] == 0
    assert data["topPages"] == []
    assert data["todayVisits"] == 1
    assert data["chartData"] == [{"visit_date": today.isoformat(), "visit_count": 1}]


def test_resolve_helpers():
    service = AnalyticsService()

    assert service.resolve_period("monthly") == "monthly"
    assert service.resolve_period(None) == "daily"
    assert service.resolve_days("7") == 7
    assert service.resolve_days(0) == 30
    assert service.resolve_days(None) == 30
    assert service.resolve_date_range(14, today=date(2026, 3, 15)) == (date(2026, 3, 1), date(2026, 3, 15))


def test_unknown_ip_counts_as_one_visitor(owner_client):
    today = utc_today()
    asyncio.run(
        _seed(
            [
                ("unknown", "/", today),
                ("unknown", "/projects", today),
                ("unknown", "/about", today - timedelta(days=2)),
                ("9.9.9.9", "/", today),
            ]
        )
    )

    data = owner_client.get("/api/analytics", params={"days": "7"}).json()["data"]

    assert data["uniqueVisitors"] == 2
    visits_in_window = sum(row["visit_count"] for row in data["chartData"])
    assert visits_in_window == 4
    assert data["uniqueVisitors"] <= visits_in_window


def test_huge_lookback_starts_at_earliest_date(owner_client):
    response = owner_client.get("/api/analytics", params={"days": "100000000"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["dateRange"]["start"] == "0001-01-01"
    assert data["dateRange"]["end"] == utc_today().isoformat()


def test_days_parsing_reads_leading_integer():
    service = AnalyticsService()

    assert service.resolve_days("14abc") == 14
    assert service.resolve_days("1.5") == 1
    assert service.resolve_days(" 21") == 21
    assert service.resolve_days("-3") == 30
    assert service.resolve_days("") == 30
    assert service.resolve_date_range(10**12, today=date(2026, 3, 15)) == (date.min, date(2026, 3, 15))
