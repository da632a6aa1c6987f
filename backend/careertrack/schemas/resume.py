"""Pydantic schemas for resumes and their analysis snapshot."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from careertrack.schemas.common import CamelModel


class Skill(CamelModel):
    name: str
    category: str
    proficiency: str


class Experience(CamelModel):
    company: str
    position: str
    duration: str
    description: str


class Education(CamelModel):
    institution: str
    degree: str
    field: str
    year: str


class ResumeAnalysis(CamelModel):
    skills: list[Skill]
    experience: list[Experience]
    education: list[Education]
    summary: str
    strengths: list[str]
    areas_for_improvement: list[str]
    overall_score: int = Field(ge=0, le=100)
    analyzed_at: datetime


class ResumeRead(CamelModel):
    id: UUID = Field(alias="_id")
    user_id: UUID = Field(alias="user")
    filename: str
    original_name: str
    file_path: str
    file_size: int
    mime_type: str
    analysis: ResumeAnalysis | None = None
    uploaded_at: datetime
