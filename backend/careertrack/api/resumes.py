"""Resume endpoints — upload with synchronous analysis, listing, re-analysis."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, UploadFile
from starlette.concurrency import run_in_threadpool

from careertrack.dependencies.auth import require_user
from careertrack.dependencies.repositories import get_resume_repo
from careertrack.models.user import User
from careertrack.repositories.resumes import ResumeRepository
from careertrack.schemas.common import ApiResponse, MessageResponse
from careertrack.schemas.resume import ResumeRead
from careertrack.services.file_storage import delete_file, read_upload, save_file
from careertrack.services.resume_analysis import create_resume_analysis

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resumes", tags=["resumes"])


def _analysis_snapshot(filename: str) -> dict:
    return create_resume_analysis(filename).model_dump(mode="json", by_alias=True)


@router.post(
    "/upload",
    status_code=201,
    response_model=ApiResponse[ResumeRead],
    response_model_exclude_none=True,
)
async def upload_resume(
    resume: UploadFile = File(...),
    user: User = Depends(require_user),
    resumes: ResumeRepository = Depends(get_resume_repo),
):
    """Store an uploaded PDF/DOC/DOCX and attach its analysis."""
    content = await read_upload(resume)
    original_name = resume.filename or "resume"
    filename, path = await run_in_threadpool(save_file, content, resume.content_type)

    try:
        async with resumes.writing(user.id):
            record = await resumes.create(
                user_id=user.id,
                filename=filename,
                original_name=original_name,
                file_path=str(path),
                file_size=len(content),
                mime_type=resume.content_type,
                analysis=_analysis_snapshot(original_name),
            )
    except Exception:
        await run_in_threadpool(delete_file, str(path))
        raise

    logger.info("User %s uploaded resume %s (%s)", user.id, record.id, original_name)
    return ApiResponse(
        message="Resume uploaded and analyzed successfully.",
        data=ResumeRead.model_validate(record),
    )


@router.get("", response_model=ApiResponse[list[ResumeRead]], response_model_exclude_none=True)
async def list_resumes(
    user: User = Depends(require_user),
    resumes: ResumeRepository = Depends(get_resume_repo),
):
    records = await resumes.list_for_owner(user.id)
    return ApiResponse(data=[ResumeRead.model_validate(r) for r in records])


@router.get("/{resume_id}", response_model=ApiResponse[ResumeRead], response_model_exclude_none=True)
async def get_resume(
    resume_id: UUID,
    user: User = Depends(require_user),
    resumes: ResumeRepository = Depends(get_resume_repo),
):
    record = await resumes.get_owned(resume_id, user.id)
    return ApiResponse(data=ResumeRead.model_validate(record))


@router.delete("/{resume_id}", response_model=MessageResponse)
async def delete_resume(
    resume_id: UUID,
    user: User = Depends(require_user),
    resumes: ResumeRepository = Depends(get_resume_repo),
):
    async with resumes.writing(user.id):
        record = await resumes.delete_owned(resume_id, user.id)

    await run_in_threadpool(delete_file, record.file_path)
    logger.info("User %s deleted resume %s", user.id, resume_id)
    return MessageResponse(message="Resume deleted successfully.")


@router.post(
    "/{resume_id}/reanalyze",
    response_model=ApiResponse[ResumeRead],
    response_model_exclude_none=True,
)
async def reanalyze_resume(
    resume_id: UUID,
    user: User = Depends(require_user),
    resumes: ResumeRepository = Depends(get_resume_repo),
):
    """Replace the stored analysis with a freshly generated one."""
    async with resumes.writing(user.id):
        record = await resumes.get_owned(resume_id, user.id)
        await resumes.update(record, analysis=_analysis_snapshot(record.original_name))

    return ApiResponse(
        message="Resume re-analyzed successfully.",
        data=ResumeRead.model_validate(record),
    )
