"""User model for authentication and e-mail verification."""

from sqlalchemy import Column, String, Boolean

from careertrack.models.base import Base, TimestampMixin, UTCDateTime, UUIDMixin


class User(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "users"

    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)

    # Pending one-time passcode; both cleared once the address is verified
    otp_code = Column(String(6))
    otp_expires_at = Column(UTCDateTime())
