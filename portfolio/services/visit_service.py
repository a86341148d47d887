from typing import Any, Mapping, Optional

from portfolio.db.engine import async_session_factory
from portfolio.models.analytics import VisitEvent

UNKNOWN = "unknown"


def resolve_client_ip(headers: Mapping[str, str]) -> str:
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        # Left-most entry is the original client when several proxies appended.
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return headers.get("x-real-ip") or UNKNOWN


def resolve_page_path(body: Any) -> str:
    if isinstance(body, dict):
        path = body.get("path")
        if isinstance(path, str) and path:
            return path
    return "/"


class VisitService:
    def __init__(self, session_factory=async_session_factory):
        self._session_factory = session_factory

    async def record(
        self,
        path: str,
        client_ip: str,
        user_agent: Optional[str],
        referrer: Optional[str],
    ) -> VisitEvent:
        # Own session: a failed tracking write never touches the caller's transaction.
        async with self._session_factory() as session:
            visit = VisitEvent(
                ip_address=client_ip,
                user_agent=user_agent or UNKNOWN,
                referrer=referrer or None,
                page_path=path,
            )
            session.add(visit)
            await session.commit()
            await session.refresh(visit)
            return visit


visit_service = VisitService()
