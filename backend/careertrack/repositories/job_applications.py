"""Job application repository: owner-scoped listing, sorting and stats."""

from uuid import UUID

from sqlalchemy import func, select

from careertrack.models.job_application import ApplicationStatus, JobApplication
from careertrack.repositories.base import OwnedRepository
from careertrack.schemas.job_application import JobApplicationStats, StatusCount

SORT_COLUMNS = {
    "applicationDate": JobApplication.application_date,
    "updatedAt": JobApplication.updated_at,
    "company": JobApplication.company,
    "position": JobApplication.position,
    "status": JobApplication.status,
}


class JobApplicationRepository(OwnedRepository[JobApplication]):
    model = JobApplication
    not_found_message = "Job application not found."

    async def list_for_owner(
        self,
        owner_id: UUID,
        status: ApplicationStatus | None = None,
        sort_by: str = "applicationDate",
        order: str = "desc",
    ) -> list[JobApplication]:
        column = SORT_COLUMNS[sort_by]
        query = select(JobApplication).where(JobApplication.user_id == owner_id)
        if status:
            query = query.where(JobApplication.status == status)
        query = query.order_by(column.asc() if order == "asc" else column.desc())
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def stats_for_owner(self, owner_id: UUID) -> JobApplicationStats:
        """Count the owner's applications per status.

        Statuses with no applications do not appear in ``by_status``.
        """
        result = await self.session.execute(
            select(JobApplication.status, func.count(JobApplication.id).label("count"))
            .where(JobApplication.user_id == owner_id)
            .group_by(JobApplication.status)
        )
        rows = sorted(result.all(), key=lambda row: (-row.count, row.status.value))
        by_status = [StatusCount(status=row.status, count=row.count) for row in rows]
        return JobApplicationStats(total=sum(s.count for s in by_status), by_status=by_status)
