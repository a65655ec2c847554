from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field

from app.models.base import BaseTable


class TrackedEntry(BaseTable):
    """
    One dated measurement owned by a user. Storage order is ascending id.
    """

    user_id: int = Field(nullable=False, foreign_key="users.id", index=True)
    # Naive UTC; time zones are normalized before storage.
    date: datetime = Field(nullable=False, index=True, sa_type=DateTime)


class WeightEntry(TrackedEntry, table=True):
    __tablename__: str = "weight_entries"  # type: ignore[assignment]

    weight: float = Field(nullable=False)


class HeightEntry(TrackedEntry, table=True):
    __tablename__: str = "height_entries"  # type: ignore[assignment]

    height: float = Field(nullable=False)


class SleepEntry(TrackedEntry, table=True):
    __tablename__: str = "sleep_entries"  # type: ignore[assignment]

    duration_in_hrs: float = Field(nullable=False)


class StepEntry(TrackedEntry, table=True):
    __tablename__: str = "step_entries"  # type: ignore[assignment]

    steps: int = Field(nullable=False)


class WaterEntry(TrackedEntry, table=True):
    __tablename__: str = "water_entries"  # type: ignore[assignment]

    amount_in_milliliters: float = Field(nullable=False)


class WorkoutEntry(TrackedEntry, table=True):
    __tablename__: str = "workout_entries"  # type: ignore[assignment]

    exercise: str = Field(nullable=False, max_length=200)
    duration_in_minutes: float = Field(nullable=False)


class CalorieIntakeEntry(TrackedEntry, table=True):
    __tablename__: str = "calorie_intake_entries"  # type: ignore[assignment]

    item: str = Field(nullable=False, max_length=200)
    quantity: float = Field(nullable=False)
    quantitytype: str = Field(nullable=False, max_length=50)
    calorie_intake: float = Field(nullable=False)
