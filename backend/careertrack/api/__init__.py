"""API router aggregation."""

from fastapi import APIRouter

from careertrack.api.auth import router as auth_router
from careertrack.api.resumes import router as resumes_router
from careertrack.api.job_applications import router as job_applications_router

router = APIRouter(prefix="/api")

router.include_router(auth_router)
router.include_router(resumes_router)
router.include_router(job_applications_router)
