"""Pydantic schemas for job applications and their statistics."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from careertrack.models.job_application import ApplicationStatus
from careertrack.schemas.common import CamelModel


class JobApplicationBase(CamelModel):
    company: str = Field(min_length=1, max_length=200)
    position: str = Field(min_length=1, max_length=200)
    job_description: str | None = None
    status: ApplicationStatus = ApplicationStatus.APPLIED
    application_date: datetime | None = None
    salary: str | None = Field(default=None, max_length=100)
    location: str | None = Field(default=None, max_length=200)
    job_url: str | None = Field(default=None, max_length=2048)
    notes: str | None = None
    follow_up_date: datetime | None = None


class JobApplicationCreate(JobApplicationBase):
    resume_id: UUID = Field(alias="resume")


class JobApplicationUpdate(CamelModel):
    """Partial update; only fields present in the request are applied."""

    resume_id: UUID | None = Field(default=None, alias="resume")
    company: str | None = Field(default=None, min_length=1, max_length=200)
    position: str | None = Field(default=None, min_length=1, max_length=200)
    job_description: str | None = None
    status: ApplicationStatus | None = None
    application_date: datetime | None = None
    salary: str | None = Field(default=None, max_length=100)
    location: str | None = Field(default=None, max_length=200)
    job_url: str | None = Field(default=None, max_length=2048)
    notes: str | None = None
    follow_up_date: datetime | None = None


class JobApplicationRead(JobApplicationBase):
    id: UUID = Field(alias="_id")
    user_id: UUID = Field(alias="user")
    resume_id: UUID | None = Field(default=None, alias="resume")
    application_date: datetime
    updated_at: datetime


class StatusCount(CamelModel):
    status: ApplicationStatus = Field(alias="_id")
    count: int


class JobApplicationStats(CamelModel):
    """Totals over the caller's own applications.

    Statuses with no applications are absent from ``by_status``.
    """

    total: int
    by_status: list[StatusCount]
