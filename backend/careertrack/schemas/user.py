"""Pydantic schemas for authentication requests and the public user shape."""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from careertrack.schemas.common import CamelModel

MAX_PASSWORD_BYTES = 72


class _EmailField(BaseModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


class RegisterRequest(_EmailField):
    name: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=6, max_length=72)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, value: str) -> str:
        # bcrypt only accepts the first 72 bytes of its input
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class VerifyOtpRequest(_EmailField):
    otp: str = Field(pattern=r"^[0-9]{6}$")


class ResendOtpRequest(_EmailField):
    pass


class LoginRequest(_EmailField):
    password: str = Field(min_length=1)


class PublicUser(CamelModel):
    """What clients see of an account; ``token`` only after login/verification."""

    id: UUID = Field(alias="_id")
    name: str
    email: str
    token: str | None = None
