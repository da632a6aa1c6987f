"""Account endpoints — registration with OTP verification, login, deletion."""

import logging

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from careertrack.dependencies.auth import require_user
from careertrack.dependencies.repositories import get_user_repo
from careertrack.errors import authentication_error, not_found, validation_error
from careertrack.models.user import User
from careertrack.repositories.users import UserRepository
from careertrack.schemas.common import ApiResponse, MessageResponse
from careertrack.schemas.user import (
    LoginRequest,
    PublicUser,
    RegisterRequest,
    ResendOtpRequest,
    VerifyOtpRequest,
)
from careertrack.services.auth_service import hash_password, sign_token, verify_password
from careertrack.services.file_storage import delete_file
from careertrack.services.otp_service import clear_otp, issue_otp, otp_matches, send_otp

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

INVALID_OTP = "Invalid or expired OTP."
ALREADY_VERIFIED = "Account is already verified."


def _public_user(user: User, token: str | None = None) -> PublicUser:
    return PublicUser(id=user.id, name=user.name, email=user.email, token=token)


async def _deliver(user: User, code: str, sent_message: str) -> MessageResponse:
    delivered = await run_in_threadpool(send_otp, user.email, code)
    if not delivered:
        return MessageResponse(
            message="We could not send the verification email. Please request a new OTP."
        )
    return MessageResponse(message=sent_message)


@router.post("/register", response_model=MessageResponse)
async def register(body: RegisterRequest, users: UserRepository = Depends(get_user_repo)):
    """Create an unverified account and send it a one-time passcode."""
    async with users.writing(body.email):
        user = await users.create(
            name=body.name,
            email=body.email,
            hashed_password=hash_password(body.password),
            is_verified=False,
        )
        code = issue_otp(user)

    logger.info("Registered user %s (%s), awaiting verification", user.id, user.email)
    return await _deliver(
        user, code, "Registration successful. Please verify your email with the OTP sent."
    )


@router.post("/verify-otp", response_model=ApiResponse[PublicUser], response_model_exclude_none=True)
async def verify_otp(body: VerifyOtpRequest, users: UserRepository = Depends(get_user_repo)):
    """Exchange a valid code for a verified account and a session token."""
    user = await users.get_by_email(body.email)
    if user is None:
        raise validation_error(INVALID_OTP)

    # A concurrent verify may have consumed the code while we waited.
    async with users.writing(user.id):
        await users.refresh(user)
        if user.is_verified:
            raise validation_error(ALREADY_VERIFIED)
        if not otp_matches(user, body.otp):
            raise validation_error(INVALID_OTP)
        clear_otp(user)
        await users.update(user, is_verified=True)

    logger.info("Verified user %s", user.id)
    return ApiResponse(
        message="Email verified successfully.",
        data=_public_user(user, sign_token(user.id)),
    )


@router.post("/resend-otp", response_model=MessageResponse)
async def resend_otp(body: ResendOtpRequest, users: UserRepository = Depends(get_user_repo)):
    user = await users.get_by_email(body.email)
    if user is None:
        raise not_found("User not found.")

    async with users.writing(user.id):
        await users.refresh(user)
        if user.is_verified:
            raise validation_error(ALREADY_VERIFIED)
        code = issue_otp(user)
        await users.update(user)

    return await _deliver(user, code, "A new OTP has been sent to your email.")


@router.post("/login", response_model=ApiResponse[PublicUser], response_model_exclude_none=True)
async def login(body: LoginRequest, users: UserRepository = Depends(get_user_repo)):
    user = await users.get_by_email(body.email)
    if user is None or not verify_password(body.password, user.hashed_password):
        raise authentication_error("Invalid email or password.")
    if not user.is_verified:
        raise authentication_error("Please verify your email before logging in.")

    return ApiResponse(data=_public_user(user, sign_token(user.id)))


@router.get("/me", response_model=ApiResponse[PublicUser], response_model_exclude_none=True)
async def me(user: User = Depends(require_user)):
    return ApiResponse(data=_public_user(user))


@router.delete("/account", response_model=MessageResponse)
async def delete_account(
    user: User = Depends(require_user),
    users: UserRepository = Depends(get_user_repo),
):
    """Delete the account together with its resumes and job applications."""
    user_id = user.id
    async with users.writing(user_id):
        file_paths = await users.delete_with_dependents(user)

    for path in file_paths:
        await run_in_threadpool(delete_file, path)

    logger.info("Deleted account %s", user_id)
    return MessageResponse(message="Account deleted successfully.")
