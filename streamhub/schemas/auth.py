# streamhub/schemas/auth.py

from typing import Annotated, Optional

from pydantic import BeforeValidator, EmailStr, Field

from streamhub.schemas.common import CamelModel


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v.strip() if isinstance(v, str) else v


Trimmed = Annotated[Optional[str], BeforeValidator(_blank_to_none)]


# ──────────────── Register ────────────────
class RegisterRequest(CamelModel):
    email: Annotated[Optional[EmailStr], BeforeValidator(_blank_to_none)] = None
    phone: Trimmed = Field(None, max_length=32, pattern=r"^\+?[0-9][0-9\s\-]{3,30}$")
    password: Optional[str] = Field(None, max_length=128)
    first_name: Trimmed = Field(None, max_length=100)
    last_name: Trimmed = Field(None, max_length=100)


class RegisteredUser(CamelModel):
    id: str
    email: Optional[str] = None
    phone: Optional[str] = None


# ──────────────── Login ────────────────
class LoginRequest(CamelModel):
    email_or_phone: Optional[str] = Field(None, max_length=320)
    password: Optional[str] = Field(None, max_length=128)


class UserProfile(CamelModel):
    id: str
    email: Optional[str] = None
    phone: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    preferred_language: str = "en"
    is_verified: bool = False


class AuthResult(CamelModel):
    token: str
    user: UserProfile


# ──────────────── OTP ────────────────
class OTPRequest(CamelModel):
    phone_or_email: Optional[str] = Field(None, max_length=320)


class OTPRequested(CamelModel):
    expires_in: int


class OTPVerifyRequest(CamelModel):
    phone_or_email: Optional[str] = Field(None, max_length=320)
    otp: Optional[str] = Field(None, max_length=10)
