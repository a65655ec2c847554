from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from sqlmodel import Session

from app.core.errors import NotFoundError
from app.models.user import User
from app.services import goals
from app.services.entry_store import (
    calorie_intake_store,
    height_store,
    sleep_store,
    start_of_day,
    step_store,
    utcnow_naive,
    water_store,
    weight_store,
    workout_store,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WindowTotals:
    calorie_intake: float = 0
    sleep: float = 0
    steps: float = 0
    water: float = 0
    workouts: int = 0


@dataclass(frozen=True)
class MetricSummary:
    name: str
    value: float
    goal: float | str
    unit: str


def report_window(now: datetime) -> tuple[datetime, datetime]:
    """
    Inclusive window ``[today - 10 days, today]`` with today at midnight.
    """
    today = start_of_day(now)
    return today - timedelta(days=goals.REPORT_WINDOW_DAYS), today


def summarize(
    *,
    gender: str,
    dob: date,
    goal: str,
    totals: WindowTotals,
    weight_kg: float,
    height_cm: float,
    today: date,
) -> list[MetricSummary]:
    """
    Build the seven report rows from window totals and the current body
    measurements. Order is fixed: calorie intake, sleep, steps, water,
    workout, weight, height.
    """
    age = goals.age_in_years(dob, today)
    bmr = goals.basal_metabolic_rate(gender, weight_kg, height_cm, age)
    # Calorie goal covers the whole window, matching the windowed sum.
    max_calorie_intake = goals.max_calorie_intake(bmr, goal, days=goals.REPORT_WINDOW_DAYS)

    return [
        MetricSummary("Calorie Intake", totals.calorie_intake, max_calorie_intake, "cal"),
        MetricSummary("Sleep", totals.sleep, goals.REPORT_SLEEP_GOAL_HRS, "hrs"),
        MetricSummary("Steps", totals.steps, goals.report_step_goal(goal), "steps"),
        MetricSummary("Water", totals.water, goals.REPORT_WATER_GOAL_ML, "ml"),
        MetricSummary("Workout", totals.workouts, goals.workout_day_goal(goal), "days"),
        MetricSummary("Weight", weight_kg, goals.goal_weight(height_cm), "kg"),
        MetricSummary("Height", height_cm, "", "cm"),
    ]


def window_totals(session: Session, user_id: int, start: datetime, end: datetime) -> WindowTotals:
    return WindowTotals(
        calorie_intake=sum(
            entry.calorie_intake for entry in calorie_intake_store.between(session, user_id, start, end)
        ),
        sleep=sum(entry.duration_in_hrs for entry in sleep_store.between(session, user_id, start, end)),
        steps=sum(entry.steps for entry in step_store.between(session, user_id, start, end)),
        water=sum(
            entry.amount_in_milliliters for entry in water_store.between(session, user_id, start, end)
        ),
        workouts=len(workout_store.between(session, user_id, start, end)),
    )


def build_report(session: Session, user_id: int, *, now: datetime | None = None) -> list[MetricSummary]:
    user = session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")

    latest_weight = weight_store.last_entry(session, user_id)
    latest_height = height_store.last_entry(session, user_id)
    if latest_weight is None or latest_height is None:
        raise NotFoundError("Weight and height entries are required for the report")

    current = now or utcnow_naive()
    start, end = report_window(current)
    summaries = summarize(
        gender=user.gender,
        dob=user.dob,
        goal=user.goal,
        totals=window_totals(session, user_id, start, end),
        weight_kg=float(latest_weight.weight),
        height_cm=float(latest_height.height),
        today=current.date(),
    )
    logger.info("Built report for user %s", user_id)
    return summaries
