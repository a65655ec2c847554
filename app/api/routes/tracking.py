from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.api.routes.auth import CurrentUserDep, load_user
from app.core.errors import NotFoundError
from app.db.session import get_session
from app.schemas.envelope import ApiResponse
from app.schemas.tracking import (
    CalorieIntakeEntryCreate,
    CalorieIntakeEntryRead,
    CalorieIntakeGoalRead,
    EntriesByDateRequest,
    EntriesByLimitRequest,
    EntryCreate,
    EntryDeleteRequest,
    EntryDeleteResult,
    EntryRead,
    HeightEntryCreate,
    HeightEntryRead,
    HeightGoalRead,
    SleepEntryCreate,
    SleepEntryRead,
    SleepGoalRead,
    StepEntryCreate,
    StepEntryRead,
    StepGoalRead,
    WaterEntryCreate,
    WaterEntryRead,
    WaterGoalRead,
    WeightEntryCreate,
    WeightEntryRead,
    WeightGoalRead,
    WorkoutEntryCreate,
    WorkoutEntryRead,
    WorkoutGoalRead,
)
from app.services import goals
from app.services.entry_store import (
    ALL_ENTRIES,
    EntryStore,
    calorie_intake_store,
    height_store,
    parse_limit,
    sleep_store,
    step_store,
    utcnow_naive,
    water_store,
    weight_store,
    workout_store,
)

SessionDep = Annotated[Session, Depends(get_session)]


@dataclass(frozen=True)
class TrackedMetric:
    """
    Route naming for one metric: ``/{prefix}/add{entity}entry``,
    ``/{prefix}/get{collection}bydate`` and so on.
    """

    prefix: str
    entity: str
    collection: str
    label: str
    store: EntryStore
    create_model: type[EntryCreate]
    read_model: type[EntryRead]


def build_tracking_router(metric: TrackedMetric) -> APIRouter:
    router = APIRouter(prefix=f"/{metric.prefix}", tags=[metric.prefix])
    store = metric.store
    CreateModel = metric.create_model
    ReadModel = metric.read_model

    def _serialize(entries: Any) -> list[Any]:
        return [ReadModel.model_validate(entry) for entry in entries]

    @router.post(f"/add{metric.entity}entry", response_model=ApiResponse[ReadModel])
    def add_entry(
        payload: CreateModel,  # type: ignore[valid-type]
        session: SessionDep,
        current_user: CurrentUserDep,
    ) -> ApiResponse[Any]:
        user = load_user(session, current_user)
        entry = store.append(session, user.id, date=payload.date, values=payload.entry_values())
        return ApiResponse(
            message=f"{metric.label} entry added successfully",
            data=ReadModel.model_validate(entry),
        )

    @router.post(f"/get{metric.collection}bydate", response_model=ApiResponse[list[ReadModel]])
    def get_entries_by_date(
        session: SessionDep,
        current_user: CurrentUserDep,
        payload: EntriesByDateRequest | None = None,
    ) -> ApiResponse[Any]:
        user = load_user(session, current_user)
        day = payload.date if payload is not None else None
        entries = store.filter_by_exact_date(session, user.id, day)
        message = f"{metric.label} entries for the date" if day else f"{metric.label} entries for today"
        return ApiResponse(message=message, data=_serialize(entries))

    @router.post(f"/get{metric.collection}bylimit", response_model=ApiResponse[list[ReadModel]])
    def get_entries_by_limit(
        session: SessionDep,
        current_user: CurrentUserDep,
        payload: EntriesByLimitRequest | None = None,
    ) -> ApiResponse[Any]:
        user = load_user(session, current_user)
        limit = parse_limit(payload.limit if payload is not None else None)
        entries = store.filter_by_rolling_limit(session, user.id, limit)
        if limit == ALL_ENTRIES:
            message = f"All {metric.label.lower()} entries"
        else:
            message = f"{metric.label} entries for the last {limit} days"
        return ApiResponse(message=message, data=_serialize(entries))

    @router.delete(f"/delete{metric.entity}entry", response_model=ApiResponse[EntryDeleteResult])
    def delete_entry(
        session: SessionDep,
        current_user: CurrentUserDep,
        payload: EntryDeleteRequest | None = None,
    ) -> ApiResponse[EntryDeleteResult]:
        user = load_user(session, current_user)
        removed = store.delete_by_date(session, user.id, payload.date if payload is not None else None)
        return ApiResponse(
            message=f"{metric.label} entry deleted successfully",
            data=EntryDeleteResult(removed=removed),
        )

    return router


WEIGHT = TrackedMetric("weighttrack", "weight", "weight", "Weight", weight_store, WeightEntryCreate, WeightEntryRead)
HEIGHT = TrackedMetric("heighttrack", "height", "height", "Height", height_store, HeightEntryCreate, HeightEntryRead)
SLEEP = TrackedMetric("sleeptrack", "sleep", "sleep", "Sleep", sleep_store, SleepEntryCreate, SleepEntryRead)
STEPS = TrackedMetric("steptrack", "step", "steps", "Steps", step_store, StepEntryCreate, StepEntryRead)
WATER = TrackedMetric("watertrack", "water", "water", "Water", water_store, WaterEntryCreate, WaterEntryRead)
WORKOUTS = TrackedMetric(
    "workouttrack", "workout", "workouts", "Workout", workout_store, WorkoutEntryCreate, WorkoutEntryRead
)
CALORIE_INTAKE = TrackedMetric(
    "calorieintake",
    "calorieintake",
    "calorieintake",
    "Calorie intake",
    calorie_intake_store,
    CalorieIntakeEntryCreate,
    CalorieIntakeEntryRead,
)

weight_router = build_tracking_router(WEIGHT)
height_router = build_tracking_router(HEIGHT)
sleep_router = build_tracking_router(SLEEP)
step_router = build_tracking_router(STEPS)
water_router = build_tracking_router(WATER)
workout_router = build_tracking_router(WORKOUTS)
calorie_intake_router = build_tracking_router(CALORIE_INTAKE)


@weight_router.get("/getusergoalweight", response_model=ApiResponse[WeightGoalRead])
def get_user_goal_weight(session: SessionDep, current_user: CurrentUserDep) -> ApiResponse[WeightGoalRead]:
    user = load_user(session, current_user)
    latest_weight = weight_store.last_entry(session, user.id)
    latest_height = height_store.last_entry(session, user.id)
    if latest_height is None:
        raise NotFoundError("No height entries recorded")
    return ApiResponse(
        message="User goal weight information",
        data=WeightGoalRead(
            current_weight=latest_weight.weight if latest_weight is not None else None,
            goal_weight=goals.goal_weight(latest_height.height),
        ),
    )


@height_router.get("/getusergoalheight", response_model=ApiResponse[HeightGoalRead])
def get_user_goal_height(session: SessionDep, current_user: CurrentUserDep) -> ApiResponse[HeightGoalRead]:
    user = load_user(session, current_user)
    latest_height = height_store.last_entry(session, user.id)
    return ApiResponse(
        message="User height information",
        data=HeightGoalRead(current_height=latest_height.height if latest_height is not None else None),
    )


@step_router.get("/getusergoalsteps", response_model=ApiResponse[StepGoalRead])
def get_user_goal_steps(session: SessionDep, current_user: CurrentUserDep) -> ApiResponse[StepGoalRead]:
    user = load_user(session, current_user)
    return ApiResponse(
        message="User steps information",
        data=StepGoalRead(total_steps=goals.goal_for(user.goal)["steps"]),
    )


@workout_router.get("/getusergoalworkout", response_model=ApiResponse[WorkoutGoalRead])
def get_user_goal_workout(session: SessionDep, current_user: CurrentUserDep) -> ApiResponse[WorkoutGoalRead]:
    user = load_user(session, current_user)
    return ApiResponse(
        message="User goal workout days",
        data=WorkoutGoalRead(goal=goals.goal_for(user.goal)["workoutDays"]),
    )


@water_router.get("/getusergoalwater", response_model=ApiResponse[WaterGoalRead])
def get_user_goal_water(session: SessionDep, current_user: CurrentUserDep) -> ApiResponse[WaterGoalRead]:
    user = load_user(session, current_user)
    return ApiResponse(
        message="User max water information",
        data=WaterGoalRead(goal_water=goals.goal_for(user.goal)["waterInMilliliters"]),
    )


@sleep_router.get("/getusersleep", response_model=ApiResponse[SleepGoalRead])
def get_user_goal_sleep(session: SessionDep, current_user: CurrentUserDep) -> ApiResponse[SleepGoalRead]:
    user = load_user(session, current_user)
    return ApiResponse(
        message="User max sleep information",
        data=SleepGoalRead(goal_sleep=goals.goal_for(user.goal)["sleepInHrs"]),
    )


@calorie_intake_router.get("/getusergoalcalorieintake", response_model=ApiResponse[CalorieIntakeGoalRead])
def get_user_goal_calorie_intake(
    session: SessionDep,
    current_user: CurrentUserDep,
) -> ApiResponse[CalorieIntakeGoalRead]:
    user = load_user(session, current_user)
    latest_weight = weight_store.last_entry(session, user.id)
    latest_height = height_store.last_entry(session, user.id)
    if latest_weight is None or latest_height is None:
        raise NotFoundError("Weight and height entries are required")

    age = goals.age_in_years(user.dob, utcnow_naive().date())
    bmr = goals.basal_metabolic_rate(user.gender, latest_weight.weight, latest_height.height, age)
    return ApiResponse(
        message="User max calorie intake information",
        data=CalorieIntakeGoalRead(bmr=bmr, max_calorie_intake=goals.max_calorie_intake(bmr, user.goal)),
    )


routers = (
    weight_router,
    height_router,
    sleep_router,
    step_router,
    water_router,
    workout_router,
    calorie_intake_router,
)
