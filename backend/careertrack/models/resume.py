"""Uploaded resume metadata with its analysis snapshot."""

from sqlalchemy import Column, String, Integer, JSON, ForeignKey, Uuid

from careertrack.models.base import Base, UTCDateTime, UUIDMixin, utcnow


class Resume(UUIDMixin, Base):
    __tablename__ = "resumes"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    filename = Column(String(255), nullable=False)
    original_name = Column(String(255), nullable=False)
    file_path = Column(String(1024), nullable=False)
    file_size = Column(Integer, nullable=False)
    mime_type = Column(String(255), nullable=False)
    # Replaced wholesale on re-analysis, never patched in place
    analysis = Column(JSON)
    uploaded_at = Column(UTCDateTime(), default=utcnow, nullable=False)
