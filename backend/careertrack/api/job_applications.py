"""Job application endpoints."""

import logging
from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from careertrack.dependencies.auth import require_user
from careertrack.dependencies.repositories import get_job_application_repo, get_resume_repo
from careertrack.errors import validation_error
from careertrack.models.job_application import ApplicationStatus
from careertrack.models.user import User
from careertrack.repositories.job_applications import JobApplicationRepository
from careertrack.repositories.resumes import ResumeRepository
from careertrack.schemas.common import ApiResponse, MessageResponse
from careertrack.schemas.job_application import (
    JobApplicationCreate,
    JobApplicationRead,
    JobApplicationStats,
    JobApplicationUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/job-applications", tags=["job-applications"])

SortField = Literal["applicationDate", "updatedAt", "company", "position", "status"]

# Columns a client may not clear with an explicit null
REQUIRED_FIELDS = ("resume_id", "company", "position", "status", "application_date")


@router.post(
    "",
    status_code=201,
    response_model=ApiResponse[JobApplicationRead],
    response_model_exclude_none=True,
)
async def create_job_application(
    body: JobApplicationCreate,
    user: User = Depends(require_user),
    applications: JobApplicationRepository = Depends(get_job_application_repo),
    resumes: ResumeRepository = Depends(get_resume_repo),
):
    """Record an application; the referenced resume must belong to the caller."""
    async with applications.writing(user.id):
        await resumes.get_owned(body.resume_id, user.id)
        record = await applications.create(user_id=user.id, **body.model_dump(exclude_none=True))

    logger.info("User %s created job application %s at %s", user.id, record.id, record.company)
    return ApiResponse(
        message="Job application created successfully.",
        data=JobApplicationRead.model_validate(record),
    )


@router.get("", response_model=ApiResponse[list[JobApplicationRead]], response_model_exclude_none=True)
async def list_job_applications(
    user: User = Depends(require_user),
    applications: JobApplicationRepository = Depends(get_job_application_repo),
    status: ApplicationStatus | None = Query(None, description="Filter by status"),
    sort_by: SortField = Query("applicationDate", alias="sortBy"),
    order: Literal["asc", "desc"] = Query("desc"),
):
    records = await applications.list_for_owner(user.id, status=status, sort_by=sort_by, order=order)
    return ApiResponse(data=[JobApplicationRead.model_validate(r) for r in records])


@router.get(
    "/stats/overview",
    response_model=ApiResponse[JobApplicationStats],
    response_model_exclude_none=True,
)
async def job_application_stats(
    user: User = Depends(require_user),
    applications: JobApplicationRepository = Depends(get_job_application_repo),
):
    """Totals per status over the caller's own applications."""
    return ApiResponse(data=await applications.stats_for_owner(user.id))


@router.get(
    "/{application_id}",
    response_model=ApiResponse[JobApplicationRead],
    response_model_exclude_none=True,
)
async def get_job_application(
    application_id: UUID,
    user: User = Depends(require_user),
    applications: JobApplicationRepository = Depends(get_job_application_repo),
):
    record = await applications.get_owned(application_id, user.id)
    return ApiResponse(data=JobApplicationRead.model_validate(record))


@router.put(
    "/{application_id}",
    response_model=ApiResponse[JobApplicationRead],
    response_model_exclude_none=True,
)
async def update_job_application(
    application_id: UUID,
    body: JobApplicationUpdate,
    user: User = Depends(require_user),
    applications: JobApplicationRepository = Depends(get_job_application_repo),
    resumes: ResumeRepository = Depends(get_resume_repo),
):
    """Apply a partial update; only fields present in the body change."""
    changes = body.model_dump(exclude_unset=True)
    cleared = [name for name in REQUIRED_FIELDS if name in changes and changes[name] is None]
    if cleared:
        raise validation_error(
            "Validation failed.",
            [{"path": JobApplicationUpdate.model_fields[name].alias or name, "message": "Field cannot be null"}
             for name in cleared],
        )

    async with applications.writing(user.id):
        if "resume_id" in changes:
            await resumes.get_owned(changes["resume_id"], user.id)
        record = await applications.update_owned(application_id, user.id, **changes)

    return ApiResponse(
        message="Job application updated successfully.",
        data=JobApplicationRead.model_validate(record),
    )


@router.delete("/{application_id}", response_model=MessageResponse)
async def delete_job_application(
    application_id: UUID,
    user: User = Depends(require_user),
    applications: JobApplicationRepository = Depends(get_job_application_repo),
):
    async with applications.writing(user.id):
        await applications.delete_owned(application_id, user.id)

    logger.info("User %s deleted job application %s", user.id, application_id)
    return MessageResponse(message="Job application deleted successfully.")
