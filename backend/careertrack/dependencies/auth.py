"""Authentication dependencies for FastAPI routes."""

from uuid import UUID

from fastapi import Depends, Request

from careertrack.dependencies.repositories import get_user_repo
from careertrack.errors import authentication_error
from careertrack.models.user import User
from careertrack.repositories.users import UserRepository
from careertrack.services.auth_service import verify_token

TOKEN_REQUIRED = "Authorization token is required."
TOKEN_INVALID = "Invalid or expired authorization token."


def bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme != "Bearer" or not token.strip():
        return None
    return token.strip()


async def require_user(
    request: Request,
    users: UserRepository = Depends(get_user_repo),
) -> User:
    """Return the token's user or raise 401.

    Bad signature, expiry, a deleted account and an unverified account all
    produce the same response.
    """
    token = bearer_token(request)
    if token is None:
        raise authentication_error(TOKEN_REQUIRED)

    subject = verify_token(token)
    if subject is None:
        raise authentication_error(TOKEN_INVALID)

    try:
        user_id = UUID(subject)
    except ValueError:
        raise authentication_error(TOKEN_INVALID)

    user = await users.get(user_id)
    if user is None or not user.is_verified:
        raise authentication_error(TOKEN_INVALID)
    return user
