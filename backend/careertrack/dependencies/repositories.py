"""Repository providers for route handlers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from careertrack.models.base import get_db
from careertrack.repositories.job_applications import JobApplicationRepository
from careertrack.repositories.resumes import ResumeRepository
from careertrack.repositories.users import UserRepository


def get_user_repo(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_resume_repo(db: AsyncSession = Depends(get_db)) -> ResumeRepository:
    return ResumeRepository(db)


def get_job_application_repo(db: AsyncSession = Depends(get_db)) -> JobApplicationRepository:
    return JobApplicationRepository(db)
