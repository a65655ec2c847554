from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.api.routes.auth import CurrentUserDep
from app.db.session import get_session
from app.schemas.envelope import ApiResponse
from app.schemas.report import ReportItem
from app.services.report import build_report

router = APIRouter(prefix="/report", tags=["report"])

SessionDep = Annotated[Session, Depends(get_session)]


@router.get("/test", response_model=ApiResponse[None])
def report_test(current_user: CurrentUserDep) -> ApiResponse[None]:
    return ApiResponse(message="Test API works for report")


@router.get("/getreport", response_model=ApiResponse[list[ReportItem]])
def get_report(session: SessionDep, current_user: CurrentUserDep) -> ApiResponse[list[ReportItem]]:
    summaries = build_report(session, current_user.subject_id)
    return ApiResponse(
        message="Report",
        data=[
            ReportItem(name=item.name, value=item.value, goal=item.goal, unit=item.unit)
            for item in summaries
        ],
    )
