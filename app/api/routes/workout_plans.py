from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlmodel import Session, col, select

from app.api.routes.admin import CurrentAdminDep
from app.core.errors import NotFoundError
from app.db.session import get_session
from app.models.workout_plan import WorkoutPlan
from app.schemas.envelope import ApiResponse
from app.schemas.workout_plan import PlanExercise, WorkoutPlanRead, WorkoutPlanWrite

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workoutplans", tags=["workoutplans"])

SessionDep = Annotated[Session, Depends(get_session)]


def _serialize_plan(plan: WorkoutPlan) -> WorkoutPlanRead:
    if plan.id is None:
        raise RuntimeError("Workout plan record is invalid")
    return WorkoutPlanRead(
        id=plan.id,
        name=plan.name,
        description=plan.description,
        duration_in_minutes=plan.duration_in_minutes,
        exercises=[PlanExercise.model_validate(item) for item in plan.exercises],
        image_url=plan.image_url,
        created_at=plan.created_at,
        updated_at=plan.updated_at,
    )


def _get_plan_or_404(session: Session, plan_id: int) -> WorkoutPlan:
    plan = session.get(WorkoutPlan, plan_id)
    if plan is None:
        raise NotFoundError("Workout not found")
    return plan


def _apply(plan: WorkoutPlan, payload: WorkoutPlanWrite) -> None:
    # Full overwrite: every mutable field is replaced.
    plan.name = payload.name.strip()
    plan.description = payload.description
    plan.duration_in_minutes = payload.duration_in_minutes
    plan.exercises = [item.model_dump(by_alias=True) for item in payload.exercises]
    plan.image_url = payload.image_url


@router.post(
    "/workouts",
    response_model=ApiResponse[WorkoutPlanRead],
    status_code=status.HTTP_201_CREATED,
)
def create_workout(
    payload: WorkoutPlanWrite,
    session: SessionDep,
    current_admin: CurrentAdminDep,
) -> ApiResponse[WorkoutPlanRead]:
    plan = WorkoutPlan(
        name="",
        description="",
        duration_in_minutes=0,
        exercises=[],
        image_url="",
    )
    _apply(plan, payload)
    session.add(plan)
    session.commit()
    session.refresh(plan)

    logger.info("Admin %s created workout plan %s", current_admin.subject_id, plan.id)
    return ApiResponse(message="Workout created successfully", data=_serialize_plan(plan))


@router.get("/workouts", response_model=ApiResponse[list[WorkoutPlanRead]])
def list_workouts(session: SessionDep) -> ApiResponse[list[WorkoutPlanRead]]:
    plans = session.exec(select(WorkoutPlan).order_by(col(WorkoutPlan.id))).all()
    return ApiResponse(
        message="Workouts fetched successfully",
        data=[_serialize_plan(plan) for plan in plans],
    )


@router.get("/workouts/{plan_id}", response_model=ApiResponse[WorkoutPlanRead])
def get_workout(plan_id: int, session: SessionDep) -> ApiResponse[WorkoutPlanRead]:
    plan = _get_plan_or_404(session, plan_id)
    return ApiResponse(message="Workout fetched successfully", data=_serialize_plan(plan))


@router.put("/workouts/{plan_id}", response_model=ApiResponse[WorkoutPlanRead])
def update_workout(
    plan_id: int,
    payload: WorkoutPlanWrite,
    session: SessionDep,
    current_admin: CurrentAdminDep,
) -> ApiResponse[WorkoutPlanRead]:
    plan = _get_plan_or_404(session, plan_id)
    _apply(plan, payload)
    plan.touch()
    session.add(plan)
    session.commit()
    session.refresh(plan)

    logger.info("Admin %s updated workout plan %s", current_admin.subject_id, plan_id)
    return ApiResponse(message="Workout updated successfully", data=_serialize_plan(plan))


@router.delete("/workouts/{plan_id}", response_model=ApiResponse[None])
def delete_workout(
    plan_id: int,
    session: SessionDep,
    current_admin: CurrentAdminDep,
) -> ApiResponse[None]:
    plan = _get_plan_or_404(session, plan_id)
    session.delete(plan)
    session.commit()

    logger.info("Admin %s deleted workout plan %s", current_admin.subject_id, plan_id)
    return ApiResponse(message="Workout deleted successfully")
