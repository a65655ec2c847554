from datetime import date

from pydantic import Field

from app.models.user import Goal
from app.schemas.camel_model import CamelModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserRegister(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=5, max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6, max_length=255)

    weight_in_kg: float = Field(gt=0)
    height_in_cm: float = Field(gt=0)
    gender: str = Field(min_length=1, max_length=32)
    dob: date
    goal: Goal
    activity_level: str = Field(min_length=1, max_length=50)


class UserLogin(CamelModel):
    email: str = Field(min_length=5, max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1, max_length=255)


class AuthTokens(CamelModel):
    auth_token: str
    refresh_token: str


class SendOtpRequest(CamelModel):
    email: str = Field(min_length=5, max_length=255, pattern=EMAIL_PATTERN)


class AdminRegister(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=5, max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6, max_length=255)


class AdminLogin(CamelModel):
    email: str = Field(min_length=5, max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1, max_length=255)


class AdminToken(CamelModel):
    admin_auth_token: str


class AdminIdentity(CamelModel):
    admin_id: int
