from datetime import datetime, timedelta, timezone

from careertrack.models.user import User
from careertrack.services.otp_service import (
    clear_otp,
    generate_otp,
    get_otp_expiry,
    is_otp_expired,
    issue_otp,
    otp_matches,
)


def test_generate_otp_is_six_digits_in_range():
    for _ in range(200):
        code = generate_otp()
        assert len(code) == 6
        assert code.isdigit()
        assert 100000 <= int(code) <= 999999


def test_expiry_is_ten_minutes_ahead():
    now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert get_otp_expiry(now) == now + timedelta(minutes=10)


def test_missing_expiry_counts_as_expired():
    assert is_otp_expired(None) is True


def test_future_and_past_expiry():
    now = datetime.now(timezone.utc)
    assert is_otp_expired(now + timedelta(minutes=5)) is False
    assert is_otp_expired(now - timedelta(seconds=1)) is True


def test_naive_expiry_is_treated_as_utc():
    now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert is_otp_expired(datetime(2026, 1, 1, 12, 5), now=now) is False
    assert is_otp_expired(datetime(2026, 1, 1, 11, 55), now=now) is True


def test_otp_matches_requires_code_and_freshness():
    user = User(email="a@example.com", name="A", hashed_password="x")
    code = issue_otp(user)

    assert otp_matches(user, code)
    assert not otp_matches(user, "000000" if code != "000000" else "111111")

    user.otp_expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
    assert not otp_matches(user, code)


def test_cleared_otp_never_matches():
    user = User(email="a@example.com", name="A", hashed_password="x")
    code = issue_otp(user)
    clear_otp(user)
    assert user.otp_code is None and user.otp_expires_at is None
    assert not otp_matches(user, code)


def test_otp_matches_rejects_non_ascii_digits():
    user = User(email="a@example.com", name="A", hashed_password="x")
    issue_otp(user)
    assert not otp_matches(user, "١٢٣٤٥٦")
