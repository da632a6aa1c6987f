"""User repository, including the explicit account-deletion cascade."""

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from careertrack.errors import conflict
from careertrack.models.job_application import JobApplication
from careertrack.models.resume import Resume
from careertrack.models.user import User
from careertrack.repositories.base import Repository

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "User already exists with this email."


class UserRepository(Repository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(select(User).where(User.email == email.strip().lower()))
        return result.scalar_one_or_none()

    async def create(self, **values) -> User:
        if await self.get_by_email(values["email"]):
            raise conflict(DUPLICATE_EMAIL_MESSAGE)
        try:
            return await super().create(**values)
        except IntegrityError as exc:
            raise conflict(DUPLICATE_EMAIL_MESSAGE) from exc

    async def delete_with_dependents(self, user: User) -> list[str]:
        """Delete the user, their applications and resumes in one transaction.

        Returns the stored file paths of the deleted resumes so the caller
        can remove them from disk after the commit.
        """
        user_id: UUID = user.id
        apps = await self.session.execute(delete(JobApplication).where(JobApplication.user_id == user_id))
        paths = (await self.session.execute(select(Resume.file_path).where(Resume.user_id == user_id))).scalars().all()
        await self.session.execute(delete(Resume).where(Resume.user_id == user_id))
        await self.session.delete(user)
        await self.session.flush()
        logger.info(
            "Deleted user %s with %d resumes and %d job applications",
            user_id, len(paths), apps.rowcount,
        )
        return list(paths)
