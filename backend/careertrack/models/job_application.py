"""Job application model — one tracked application per row."""

import enum

from sqlalchemy import Column, Enum, String, Text, ForeignKey, Index, Uuid

from careertrack.models.base import Base, UTCDateTime, UUIDMixin, utcnow


class ApplicationStatus(str, enum.Enum):
    APPLIED = "Applied"
    INTERVIEW = "Interview"
    OFFER = "Offer"
    REJECTED = "Rejected"
    WITHDRAWN = "Withdrawn"


class JobApplication(UUIDMixin, Base):
    __tablename__ = "job_applications"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Nulled when the referenced resume is deleted; the application itself is kept
    resume_id = Column(Uuid(as_uuid=True), ForeignKey("resumes.id", ondelete="SET NULL"), index=True)
    company = Column(String(200), nullable=False)
    position = Column(String(200), nullable=False)
    job_description = Column(Text)
    status = Column(
        Enum(
            ApplicationStatus,
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=ApplicationStatus.APPLIED,
        nullable=False,
    )
    application_date = Column(UTCDateTime(), default=utcnow, nullable=False)
    salary = Column(String(100))
    location = Column(String(200))
    job_url = Column(String(2048))
    notes = Column(Text)
    follow_up_date = Column(UTCDateTime())
    updated_at = Column(UTCDateTime(), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_job_applications_user_status", "user_id", "status"),
    )
