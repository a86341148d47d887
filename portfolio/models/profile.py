from typing import Optional
from sqlmodel import Field, SQLModel
from datetime import datetime
from sqlalchemy import Column, DateTime, Text

from portfolio.core.clock import utc_now

# Every singleton row carries this key; the unique constraint on it keeps the table at one row.
SINGLETON_KEY = "default"


class PersonalInfo(SQLModel, table=True):
    __tablename__ = "personal_info"

    id: Optional[int] = Field(default=None, primary_key=True)
    singleton_key: str = Field(default=SINGLETON_KEY, unique=True)

    name: str
    title: Optional[str] = Field(default=None)
    bio: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    profile_image_url: Optional[str] = Field(default=None)
    resume_url: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"onupdate": utc_now},
    )


class ContactDetails(SQLModel, table=True):
    __tablename__ = "contact_details"

    id: Optional[int] = Field(default=None, primary_key=True)
    singleton_key: str = Field(default=SINGLETON_KEY, unique=True)

    email: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)
    location: Optional[str] = Field(default=None)
    website: Optional[str] = Field(default=None)
    linkedin_url: Optional[str] = Field(default=None)
    github_url: Optional[str] = Field(default=None)
    twitter_url: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"onupdate": utc_now},
    )
