"""One-time passcodes for e-mail verification."""

import logging
import random
import secrets
import smtplib
from datetime import datetime, timedelta, timezone
from email.message import EmailMessage

from careertrack.config import get_settings
from careertrack.models.user import User

logger = logging.getLogger(__name__)


def generate_otp() -> str:
    """Six-digit numeric code, uniform over 100000-999999."""
    return str(random.randint(100000, 999999))


def get_otp_expiry(now: datetime | None = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now + timedelta(minutes=get_settings().otp_ttl_minutes)


def is_otp_expired(expires_at: datetime | None, now: datetime | None = None) -> bool:
    """True when there is no expiry at all or it lies in the past."""
    if expires_at is None:
        return True
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return expires_at < now


def otp_matches(user: User, submitted: str) -> bool:
    """Check a submitted code against the user's pending one.

    Mismatch and expiry both yield False; the caller is not told which.
    """
    if not user.otp_code or not submitted:
        return False
    code_ok = secrets.compare_digest(user.otp_code.encode("utf-8"), submitted.strip().encode("utf-8"))
    return code_ok and not is_otp_expired(user.otp_expires_at)


def issue_otp(user: User) -> str:
    """Attach a fresh code and expiry to the user and return the code."""
    code = generate_otp()
    user.otp_code = code
    user.otp_expires_at = get_otp_expiry()
    return code


def clear_otp(user: User) -> None:
    user.otp_code = None
    user.otp_expires_at = None


def send_otp(email: str, code: str) -> bool:
    """Deliver a verification code.

    Uses SMTP when ``SMTP_HOST`` is configured; otherwise the code is written
    to the log for local development. Returns False when delivery failed so
    the caller can report it; the user can always request a resend.
    """
    settings = get_settings()
    if not settings.smtp_host:
        logger.info("OTP for %s: %s (SMTP not configured)", email, code)
        return True

    msg = EmailMessage()
    msg["Subject"] = f"Your {settings.app_name} verification code"
    msg["From"] = settings.smtp_from
    msg["To"] = email
    msg.set_content(
        f"Your verification code is: {code}\n\n"
        f"This code expires in {settings.otp_ttl_minutes} minutes.\n"
        "If you did not create an account, you can ignore this email."
    )

    try:
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=settings.smtp_timeout) as server:
            if settings.smtp_use_tls:
                server.starttls()
            if settings.smtp_username:
                server.login(settings.smtp_username, settings.smtp_password or "")
            server.send_message(msg)
    except (smtplib.SMTPException, OSError):
        logger.exception("Failed to send OTP email to %s", email)
        return False

    logger.info("Sent OTP email to %s", email)
    return True
