from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy import func
from sqlmodel import Session, select

from app.api.routes.auth import TokenDep
from app.core.config import settings
from app.core.errors import AuthError, ConflictError
from app.core.security import (
    ADMIN_ROLE,
    Principal,
    create_admin_token,
    decode_admin_token,
    hash_password,
    verify_password,
)
from app.db.session import get_session
from app.models.admin import Admin
from app.schemas.envelope import ApiResponse
from app.schemas.user import AdminIdentity, AdminLogin, AdminRegister, AdminToken

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

ADMIN_COOKIE = "adminAuthToken"

SessionDep = Annotated[Session, Depends(get_session)]


def _get_admin_by_email(session: Session, email: str) -> Admin | None:
    normalized_email = email.strip().lower()
    statement = select(Admin).where(func.lower(Admin.email) == normalized_email)
    return session.exec(statement).first()


def get_current_admin(request: Request, token: TokenDep) -> Principal:
    """
    Only admin tokens are accepted here; a valid user token is rejected.
    """
    candidates = [value for value in (request.cookies.get(ADMIN_COOKIE), token) if value]
    if not candidates:
        raise AuthError("Admin authentication failed: No adminAuthToken provided")

    # Cookie first; a stale cookie falls back to the bearer header.
    for admin_token in candidates:
        try:
            payload = decode_admin_token(admin_token)
        except ValueError:
            continue
        return Principal(subject_id=int(payload["sub"]), role=ADMIN_ROLE)

    raise AuthError("Admin authentication failed: Invalid adminAuthToken")


CurrentAdminDep = Annotated[Principal, Depends(get_current_admin)]


@router.post("/register", response_model=ApiResponse[None], status_code=status.HTTP_201_CREATED)
def register_admin(payload: AdminRegister, session: SessionDep) -> ApiResponse[None]:
    if _get_admin_by_email(session, payload.email) is not None:
        raise ConflictError("Admin with this email already exists")

    admin = Admin(
        email=payload.email.strip().lower(),
        name=payload.name.strip(),
        password_hash=hash_password(payload.password),
    )
    session.add(admin)
    session.commit()
    session.refresh(admin)

    logger.info("Registered admin %s", admin.id)
    return ApiResponse(message="Admin registered successfully")


@router.post("/login", response_model=ApiResponse[AdminToken])
def login_admin(payload: AdminLogin, response: Response, session: SessionDep) -> ApiResponse[AdminToken]:
    admin = _get_admin_by_email(session, payload.email)
    if admin is None or not verify_password(payload.password, admin.password_hash):
        raise AuthError("Invalid admin credentials")

    if admin.id is None:
        raise RuntimeError("Admin record is invalid")

    admin_token = create_admin_token(admin.id)
    response.set_cookie(
        key=ADMIN_COOKIE,
        value=admin_token,
        max_age=settings.ADMIN_TOKEN_MINUTES * 60,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,  # type: ignore[arg-type]
        path="/",
    )
    logger.info("Admin %s logged in", admin.id)
    return ApiResponse(message="Admin login successful", data=AdminToken(admin_auth_token=admin_token))


@router.get("/checklogin", response_model=ApiResponse[AdminIdentity])
def check_admin_login(current_admin: CurrentAdminDep) -> ApiResponse[AdminIdentity]:
    return ApiResponse(
        message="Admin authenticated successfully",
        data=AdminIdentity(admin_id=current_admin.subject_id),
    )
