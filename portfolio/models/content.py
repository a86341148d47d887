from typing import Literal, Optional, List
from sqlmodel import Field, SQLModel
from datetime import date, datetime
from sqlalchemy import JSON, Column, DateTime, Text

from portfolio.core.clock import utc_now

ProjectStatus = Literal["completed", "in_progress", "planned"]


class ProjectBase(SQLModel):
    title: str
    description: Optional[str] = None
    long_description: Optional[str] = None
    project_url: Optional[str] = None
    github_url: Optional[str] = None
    image_url: Optional[str] = None
    featured: bool = Field(default=False)
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class Project(ProjectBase, table=True):
    __tablename__ = "project"

    id: Optional[int] = Field(default=None, primary_key=True)
    long_description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    technologies: Optional[List[str]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    featured: bool = Field(default=False, index=True)
    status: str = Field(default="completed", index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"onupdate": utc_now},
    )


class ProjectCreate(ProjectBase):
    technologies: Optional[List[str]] = None
    status: ProjectStatus = "completed"


class ProjectUpdate(SQLModel):
    title: Optional[str] = None
    description: Optional[str] = None
    long_description: Optional[str] = None
    technologies: Optional[List[str]] = None
    project_url: Optional[str] = None
    github_url: Optional[str] = None
    image_url: Optional[str] = None
    featured: Optional[bool] = None
    status: Optional[ProjectStatus] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class EducationBase(SQLModel):
    institution: str
    degree: str
    field_of_study: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None
    grade: Optional[str] = None
    is_current: bool = Field(default=False)


class Education(EducationBase, table=True):
    __tablename__ = "education"

    id: Optional[int] = Field(default=None, primary_key=True)
    start_date: Optional[date] = Field(default=None, index=True)
    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"onupdate": utc_now},
    )


class EducationCreate(EducationBase):
    pass


class EducationUpdate(SQLModel):
    institution: Optional[str] = None
    degree: Optional[str] = None
    field_of_study: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None
    grade: Optional[str] = None
    is_current: Optional[bool] = None


class CertificateBase(SQLModel):
    title: str
    issuing_organization: str
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None
    credential_id: Optional[str] = None
    credential_url: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None


class Certificate(CertificateBase, table=True):
    __tablename__ = "certificate"

    id: Optional[int] = Field(default=None, primary_key=True)
    issue_date: Optional[date] = Field(default=None, index=True)
    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"onupdate": utc_now},
    )


class CertificateCreate(CertificateBase):
    pass


class CertificateUpdate(SQLModel):
    title: Optional[str] = None
    issuing_organization: Optional[str] = None
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None
    credential_id: Optional[str] = None
    credential_url: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None


class SkillBase(SQLModel):
    name: str
    category: Optional[str] = None
    proficiency_level: Optional[int] = Field(default=None, ge=1, le=100)


class Skill(SkillBase, table=True):
    __tablename__ = "skill"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    category: Optional[str] = Field(default=None, index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))


class SkillCreate(SkillBase):
    pass


class SkillUpdate(SQLModel):
    name: Optional[str] = None
    category: Optional[str] = None
    proficiency_level: Optional[int] = Field(default=None, ge=1, le=100)
