# tests/test_core/test_tokens.py
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from streamhub.core.config import settings
from streamhub.core.exceptions import InvalidTokenError, TokenExpiredError
from streamhub.core.jwt import decode_token
from streamhub.core.security import (
    create_access_token,
    generate_otp,
    get_password_hash,
    verify_password,
)


def test_token_round_trip_subject():
    token = create_access_token("user-123", email="john@example.com", phone="+1234567890")
    claims = decode_token(token)
    assert claims["sub"] == "user-123"
    assert claims["email"] == "john@example.com"
    assert claims["phone"] == "+1234567890"
    assert claims["jti"]


def test_token_expiry_defaults_to_configured_days():
    issued = datetime.now(timezone.utc).replace(microsecond=0)
    claims = decode_token(create_access_token("u1", now=issued))
    assert claims["exp"] - claims["iat"] == settings.ACCESS_TOKEN_EXPIRE_DAYS * 86400


def test_token_expired_after_ttl():
    # Issued far enough in the past that the TTL has elapsed
    issued = datetime.now(timezone.utc) - timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS, seconds=5)
    token = create_access_token("u1", now=issued)
    with pytest.raises(TokenExpiredError) as exc:
        decode_token(token)
    assert exc.value.code == "TOKEN_EXPIRED"
    assert exc.value.status_code == 401
    assert exc.value.headers == {"WWW-Authenticate": "Bearer"}


def test_token_tampered_is_invalid():
    header, payload, signature = create_access_token("u1").split(".")
    with pytest.raises(InvalidTokenError) as exc:
        decode_token(".".join([header, payload, signature[::-1]]))
    assert exc.value.code == "INVALID_TOKEN"


def test_token_signed_with_other_secret_is_invalid():
    forged = jwt.encode({"sub": "u1", "jti": "x"}, "another-secret", algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        decode_token(forged)


def test_token_without_sub_is_invalid():
    token = jwt.encode(
        {"jti": "x", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        settings.JWT_SECRET_KEY.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )
    with pytest.raises(InvalidTokenError) as exc:
        decode_token(token)
    assert exc.value.message == "Token missing user ID"


def test_password_hash_is_salted_and_verifies():
    first = get_password_hash("password123")
    second = get_password_hash("password123")
    assert first != second
    assert verify_password("password123", first)
    assert not verify_password("wrong", first)


@pytest.mark.parametrize("plain, hashed", [(None, "x"), ("x", None), ("x", "not-a-bcrypt-hash")])
def test_verify_password_never_raises(plain, hashed):
    assert verify_password(plain, hashed) is False


def test_generate_otp_shape():
    codes = {generate_otp() for _ in range(50)}
    assert all(len(c) == settings.OTP_LENGTH and c.isdigit() for c in codes)
    assert len(codes) > 1
    assert len(generate_otp(8)) == 8
