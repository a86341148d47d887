from typing import Optional
from sqlmodel import Field, SQLModel
from datetime import date, datetime
from sqlalchemy import DateTime

from portfolio.core.clock import utc_now, utc_today


class VisitEvent(SQLModel, table=True):
    """One tracked page view. Rows are only ever inserted."""

    __tablename__ = "analytics"

    id: Optional[int] = Field(default=None, primary_key=True)
    ip_address: str = Field(default="unknown", index=True)  # "unknown" when no proxy header
    user_agent: str = Field(default="unknown")
    referrer: Optional[str] = Field(default=None)
    page_path: str = Field(default="/", index=True)
    visit_date: date = Field(default_factory=utc_today, index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
