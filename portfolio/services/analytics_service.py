from __future__ import annotations

import asyncio
import logging
import re
from datetime import date, timedelta
from typing import Any, Awaitable, Callable

from sqlalchemy import desc
from sqlmodel import and_, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from portfolio.core.clock import utc_today
from portfolio.core.config import settings
from portfolio.core.errors import StoreOperationFailed, store_error_message
from portfolio.db.engine import async_session_factory
from portfolio.db.procedures import PERIOD_PROCEDURES
from portfolio.models.analytics import VisitEvent

logger = logging.getLogger(__name__)

DEFAULT_PERIOD = "daily"
LEADING_INT = re.compile(r"\s*[+-]?\d+")


class AnalyticsService:
    """Builds the dashboard visit report.

    The bucket procedure is mandatory: if it fails the whole report fails.
    The supplementary figures (total, today, unique visitors, top pages) fall
    back to zero or an empty list when their query fails.
    """

    def __init__(self, session_factory=async_session_factory):
        self._session_factory = session_factory

    def resolve_period(self, raw_period: str | None) -> str:
        if raw_period in PERIOD_PROCEDURES:
            return raw_period
        return DEFAULT_PERIOD

    def resolve_days(self, raw_days: str | int | None) -> int:
        if isinstance(raw_days, int):
            days = raw_days
        else:
            # Leading integer only: "14abc" is 14, "1.5" is 1.
            match = LEADING_INT.match(raw_days or "")
            if match is None:
                return settings.ANALYTICS_DEFAULT_DAYS
            days = int(match.group(0))
        return days if days > 0 else settings.ANALYTICS_DEFAULT_DAYS

    def resolve_date_range(self, days: int, today: date | None = None) -> tuple[date, date]:
        end_date = today or utc_today()
        days = min(days, (end_date - date.min).days)
        return end_date - timedelta(days=days), end_date

    async def _run(self, reader: Callable[..., Awaitable[Any]], *args: Any) -> Any:
        # One session per read so the reads can run concurrently.
        async with self._session_factory() as session:
            return await reader(session, *args)

    async def _count_total_visits(self, session: AsyncSession) -> int:
        result = await session.exec(select(func.count()).select_from(VisitEvent))
        return int(result.one() or 0)

    async def _count_visits_on(self, session: AsyncSession, day: date) -> int:
        result = await session.exec(
            select(func.count()).select_from(VisitEvent).where(VisitEvent.visit_date == day)
        )
        return int(result.one() or 0)

    async def _count_unique_visitors(self, session: AsyncSession, start_date: date, end_date: date) -> int:
        result = await session.exec(
            select(func.count(func.distinct(VisitEvent.ip_address))).where(
                and_(
                    VisitEvent.visit_date >= start_date,
                    VisitEvent.visit_date <= end_date,
                )
            )
        )
        return int(result.one() or 0)

    async def _top_pages(self, session: AsyncSession, start_date: date, end_date: date) -> list[dict[str, Any]]:
        visits = func.count(VisitEvent.id).label("visits")
        result = await session.exec(
            select(VisitEvent.page_path, visits)
            .where(
                and_(
                    VisitEvent.visit_date >= start_date,
                    VisitEvent.visit_date <= end_date,
                )
            )
            .group_by(VisitEvent.page_path)
            .order_by(desc(visits), VisitEvent.page_path)
            .limit(settings.ANALYTICS_TOP_PAGES_LIMIT)
        )
        return [{"path": path, "count": int(count)} for path, count in result.all()]

    def _or_default(self, value: Any, default: Any, label: str) -> Any:
        if isinstance(value, BaseException):
            logger.warning("Analytics %s query failed, reporting %r: %s", label, default, value)
            return default
        return value

    async def get_report(self, period: str | None = None, days: str | int | None = None) -> dict[str, Any]:
        resolved_period = self.resolve_period(period)
        lookback_days = self.resolve_days(days)
        start_date, end_date = self.resolve_date_range(lookback_days)

        chart, total, today, unique, top_pages = await asyncio.gather(
            self._run(PERIOD_PROCEDURES[resolved_period], start_date, end_date),
            self._run(self._count_total_visits),
            self._run(self._count_visits_on, end_date),
            self._run(self._count_unique_visitors, start_date, end_date),
            self._run(self._top_pages, start_date, end_date),
            return_exceptions=True,
        )

        if isinstance(chart, BaseException):
            logger.error(f"Analytics {resolved_period} bucket query failed: {chart}")
            raise StoreOperationFailed(store_error_message(chart))

        return {
            "chartData": chart,
            "totalVisits": self._or_default(total, 0, "total visits"),
            "todayVisits": self._or_default(today, 0, "today visits"),
            "uniqueVisitors": self._or_default(unique, 0, "unique visitors"),
            "topPages": self._or_default(top_pages, [], "top pages"),
            "period": resolved_period,
            "dateRange": {
                "start": start_date.isoformat(),
                "end": end_date.isoformat(),
            },
        }


analytics_service = AnalyticsService()
