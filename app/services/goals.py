"""
Target thresholds derived from a user's stated goal and body measurements.

The per-metric goal routes serve daily thresholds. The report has its own
table, compared against sums over its ten-day window.
"""
from __future__ import annotations

from datetime import date

from app.models.user import Goal

TARGET_BMI = 22
CALORIE_GOAL_OFFSET = 500
REPORT_WINDOW_DAYS = 10

DAILY_STEP_GOALS = {
    Goal.weightLoss: 10000,
    Goal.weightGain: 5000,
    Goal.maintain: 7500,
}
REPORT_STEP_GOALS = {
    Goal.weightLoss: 10000,
    Goal.weightGain: 50000,
    Goal.maintain: 75000,
}
WORKOUT_DAY_GOALS = {
    Goal.weightLoss: 7,
    Goal.weightGain: 4,
    Goal.maintain: 5,
}

DAILY_SLEEP_GOAL_HRS = 8
DAILY_WATER_GOAL_ML = 4000
REPORT_SLEEP_GOAL_HRS = 60
REPORT_WATER_GOAL_ML = 40000


def _as_goal(goal: Goal | str) -> Goal | None:
    try:
        return Goal(goal)
    except ValueError:
        return None


def age_in_years(dob: date, today: date) -> int:
    # Year difference only; birthdays later in the year are not subtracted.
    return today.year - dob.year


def basal_metabolic_rate(gender: str, weight_kg: float, height_cm: float, age: int) -> float:
    """
    Harris-Benedict BMR. Any gender other than "male" uses the female branch.
    """
    if gender == "male":
        return 88.362 + (13.397 * weight_kg) + (4.799 * height_cm) - (5.677 * age)
    return 447.593 + (9.247 * weight_kg) + (3.098 * height_cm) - (4.330 * age)


def max_calorie_intake(bmr: float, goal: Goal | str, *, days: int = 1) -> float:
    resolved = _as_goal(goal)
    if resolved is Goal.weightLoss:
        return (bmr - CALORIE_GOAL_OFFSET) * days
    if resolved is Goal.weightGain:
        return (bmr + CALORIE_GOAL_OFFSET) * days
    return bmr * days


def goal_weight(height_cm: float) -> float:
    return TARGET_BMI * ((height_cm / 100) ** 2)


def daily_step_goal(goal: Goal | str) -> int:
    return DAILY_STEP_GOALS.get(_as_goal(goal), DAILY_STEP_GOALS[Goal.maintain])


def report_step_goal(goal: Goal | str) -> int:
    return REPORT_STEP_GOALS.get(_as_goal(goal), REPORT_STEP_GOALS[Goal.maintain])


def workout_day_goal(goal: Goal | str) -> int:
    return WORKOUT_DAY_GOALS.get(_as_goal(goal), WORKOUT_DAY_GOALS[Goal.maintain])


def goal_for(goal: Goal | str) -> dict[str, int]:
    """
    Per-metric daily thresholds served by the tracking goal routes.
    """
    return {
        "steps": daily_step_goal(goal),
        "workoutDays": workout_day_goal(goal),
        "waterInMilliliters": DAILY_WATER_GOAL_ML,
        "sleepInHrs": DAILY_SLEEP_GOAL_HRS,
    }
