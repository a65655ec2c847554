from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import func
from sqlmodel import Session, select

from app.core.config import settings
from app.core.errors import AuthError, ConflictError, NotFoundError
from app.core.security import (
    USER_ROLE,
    Principal,
    create_access_token,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
    hash_password,
    verify_password,
)
from app.db.session import get_session
from app.models.tracking import HeightEntry, WeightEntry
from app.models.user import User
from app.schemas.envelope import ApiResponse
from app.schemas.user import AuthTokens, SendOtpRequest, UserLogin, UserRegister
from app.services.entry_store import utcnow_naive
from app.services.notifications import send_one_time_code

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

AUTH_COOKIE = "authToken"
REFRESH_COOKIE = "refreshToken"

SessionDep = Annotated[Session, Depends(get_session)]
TokenDep = Annotated[str | None, Depends(oauth2_scheme)]


def _set_cookie(response: Response, key: str, value: str, max_age_minutes: int) -> None:
    response.set_cookie(
        key=key,
        value=value,
        max_age=max_age_minutes * 60,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,  # type: ignore[arg-type]
        path="/",
    )


def _clear_cookie(response: Response, key: str) -> None:
    response.delete_cookie(
        key=key,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,  # type: ignore[arg-type]
        path="/",
    )


def _issue_tokens_for_user(response: Response, user_id: int) -> AuthTokens:
    tokens = AuthTokens(
        auth_token=create_access_token(user_id),
        refresh_token=create_refresh_token(user_id),
    )
    _set_cookie(response, AUTH_COOKIE, tokens.auth_token, settings.ACCESS_TOKEN_MINUTES)
    _set_cookie(response, REFRESH_COOKIE, tokens.refresh_token, settings.REFRESH_TOKEN_MINUTES)
    return tokens


def _user_principal(payload: dict) -> Principal:
    return Principal(subject_id=int(payload["sub"]), role=USER_ROLE)


def _get_user_by_email(session: Session, email: str) -> User | None:
    normalized_email = email.strip().lower()
    statement = select(User).where(func.lower(User.email) == normalized_email)
    return session.exec(statement).first()


def get_current_user(request: Request, response: Response, token: TokenDep) -> Principal:
    """
    Resolve the calling user from the bearer header or the ``authToken``
    cookie. An expired access token is replaced when the ``refreshToken``
    cookie is still valid; both cookies are rotated on the response.
    """
    auth_token = token or request.cookies.get(AUTH_COOKIE)
    refresh_token = request.cookies.get(REFRESH_COOKIE)
    if not auth_token and not refresh_token:
        raise AuthError("Authentication failed: No authToken or refreshToken provided")

    if auth_token:
        try:
            return _user_principal(decode_access_token(auth_token))
        except ValueError:
            if not refresh_token:
                raise AuthError("Authentication failed: Invalid authToken")

    try:
        principal = _user_principal(decode_refresh_token(refresh_token or ""))
    except ValueError as exc:
        raise AuthError("Authentication failed: Both tokens are invalid") from exc

    _issue_tokens_for_user(response, principal.subject_id)
    logger.info("Rotated tokens for user %s", principal.subject_id)
    return principal


CurrentUserDep = Annotated[Principal, Depends(get_current_user)]


def load_user(session: Session, principal: Principal) -> User:
    user = session.get(User, principal.subject_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.get("/test", response_model=ApiResponse[None])
def auth_test() -> ApiResponse[None]:
    return ApiResponse(message="Auth api is working")


@router.post("/register", response_model=ApiResponse[None], status_code=status.HTTP_201_CREATED)
def register_user(payload: UserRegister, session: SessionDep) -> ApiResponse[None]:
    if _get_user_by_email(session, payload.email) is not None:
        raise ConflictError("Email already exists")

    user = User(
        email=payload.email.strip().lower(),
        name=payload.name.strip(),
        password_hash=hash_password(payload.password),
        gender=payload.gender.strip().lower(),
        dob=payload.dob,
        goal=payload.goal,
        activity_level=payload.activity_level.strip(),
    )
    session.add(user)
    session.flush()
    if user.id is None:
        raise RuntimeError("User creation failed")

    now = utcnow_naive()
    session.add(WeightEntry(user_id=user.id, date=now, weight=payload.weight_in_kg))
    session.add(HeightEntry(user_id=user.id, date=now, height=payload.height_in_cm))
    session.commit()

    logger.info("Registered user %s", user.id)
    return ApiResponse(message="User registered successfully")


@router.post("/login", response_model=ApiResponse[AuthTokens])
def login_user(payload: UserLogin, response: Response, session: SessionDep) -> ApiResponse[AuthTokens]:
    user = _get_user_by_email(session, payload.email)
    if user is None or not verify_password(payload.password, user.password_hash):
        raise AuthError("Invalid credentials")

    if user.id is None:
        raise RuntimeError("User record is invalid")

    tokens = _issue_tokens_for_user(response, user.id)
    logger.info("User %s logged in", user.id)
    return ApiResponse(message="Login successful", data=tokens)


@router.post("/sendotp", response_model=ApiResponse[None])
def send_otp(payload: SendOtpRequest) -> ApiResponse[None]:
    # The code stays server side; echoing it back would defeat the check.
    send_one_time_code(payload.email.strip().lower())
    return ApiResponse(message="OTP sent successfully")


@router.post("/checklogin", response_model=ApiResponse[None])
def check_login(current_user: CurrentUserDep) -> ApiResponse[None]:
    return ApiResponse(message="User authenticated successfully")


@router.post("/logout", response_model=ApiResponse[None])
def logout(response: Response) -> ApiResponse[None]:
    _clear_cookie(response, AUTH_COOKIE)
    _clear_cookie(response, REFRESH_COOKIE)
    return ApiResponse(message="Logout successful")
