"""Visit bucket procedures.

Each procedure returns the visit counts for ``[start_date, end_date]`` as an
ascending list of ``{<bucket key>: "YYYY-MM-DD", "visit_count": n}`` rows.
Buckets without visits are not materialized.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Awaitable, Callable

from sqlmodel import and_, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from portfolio.models.analytics import VisitEvent

BucketRows = list[dict[str, Any]]


async def _daily_counts(session: AsyncSession, start_date: date, end_date: date) -> list[tuple[date, int]]:
    query = (
        select(VisitEvent.visit_date, func.count(VisitEvent.id))
        .where(
            and_(
                VisitEvent.visit_date >= start_date,
                VisitEvent.visit_date <= end_date,
            )
        )
        .group_by(VisitEvent.visit_date)
        .order_by(VisitEvent.visit_date)
    )
    rows = (await session.exec(query)).all()
    return [(day, int(count or 0)) for day, count in rows]


def week_start(day: date) -> date:
    # ISO weeks, Monday first (matches Postgres date_trunc('week', ...)).
    return day - timedelta(days=day.weekday())


def month_start(day: date) -> date:
    return day.replace(day=1)


async def _rolled_up(
    session: AsyncSession,
    start_date: date,
    end_date: date,
    key_name: str,
    bucket_of: Callable[[date], date],
) -> BucketRows:
    buckets: dict[date, int] = {}
    for day, count in await _daily_counts(session, start_date, end_date):
        bucket = bucket_of(day)
        buckets[bucket] = buckets.get(bucket, 0) + count
    return [
        {key_name: bucket.isoformat(), "visit_count": count}
        for bucket, count in sorted(buckets.items())
    ]


async def get_daily_visits(session: AsyncSession, start_date: date, end_date: date) -> BucketRows:
    return [
        {"visit_date": day.isoformat(), "visit_count": count}
        for day, count in await _daily_counts(session, start_date, end_date)
    ]


async def get_weekly_visits(session: AsyncSession, start_date: date, end_date: date) -> BucketRows:
    return await _rolled_up(session, start_date, end_date, "week_start", week_start)


async def get_monthly_visits(session: AsyncSession, start_date: date, end_date: date) -> BucketRows:
    return await _rolled_up(session, start_date, end_date, "month_start", month_start)


PERIOD_PROCEDURES: dict[str, Callable[[AsyncSession, date, date], Awaitable[BucketRows]]] = {
    "daily": get_daily_visits,
    "weekly": get_weekly_visits,
    "monthly": get_monthly_visits,
}
