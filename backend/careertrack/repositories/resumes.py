"""Resume repository."""

from uuid import UUID

from sqlalchemy import select, update

from careertrack.models.job_application import JobApplication
from careertrack.models.resume import Resume
from careertrack.repositories.base import OwnedRepository


class ResumeRepository(OwnedRepository[Resume]):
    model = Resume
    not_found_message = "Resume not found."

    async def list_for_owner(self, owner_id: UUID) -> list[Resume]:
        result = await self.session.execute(
            select(Resume)
            .where(Resume.user_id == owner_id)
            .order_by(Resume.uploaded_at.desc())
        )
        return list(result.scalars().all())

    async def delete_owned(self, record_id: UUID, owner_id: UUID) -> Resume:
        """Delete the resume; applications that referenced it keep existing."""
        resume = await self.get_owned(record_id, owner_id)
        await self.session.execute(
            update(JobApplication)
            .where(JobApplication.user_id == owner_id, JobApplication.resume_id == resume.id)
            .values(resume_id=None)
        )
        await self.delete(resume)
        return resume
