from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from pydantic import Field, StrictInt, StrictStr

from app.schemas.camel_model import CamelModel


class EntryCreate(CamelModel, ABC):
    """
    Fields are optional so the store reports missing values with its own message.
    Subclasses map their wire fields onto the entry table columns.
    """

    date: datetime | None = None

    @abstractmethod
    def entry_values(self) -> dict[str, Any]:
        ...


class WeightEntryCreate(EntryCreate):
    weight_in_kg: float | None = Field(default=None, gt=0)

    def entry_values(self) -> dict[str, Any]:
        return {"weight": self.weight_in_kg}


class HeightEntryCreate(EntryCreate):
    height_in_cm: float | None = Field(default=None, gt=0)

    def entry_values(self) -> dict[str, Any]:
        return {"height": self.height_in_cm}


class SleepEntryCreate(EntryCreate):
    duration_in_hrs: float | None = Field(default=None, gt=0, le=24)

    def entry_values(self) -> dict[str, Any]:
        return {"duration_in_hrs": self.duration_in_hrs}


class StepEntryCreate(EntryCreate):
    steps: int | None = Field(default=None, gt=0)

    def entry_values(self) -> dict[str, Any]:
        return {"steps": self.steps}


class WaterEntryCreate(EntryCreate):
    amount_in_milliliters: float | None = Field(default=None, gt=0)

    def entry_values(self) -> dict[str, Any]:
        return {"amount_in_milliliters": self.amount_in_milliliters}


class WorkoutEntryCreate(EntryCreate):
    exercise: str | None = Field(default=None, min_length=1, max_length=200)
    duration_in_minutes: float | None = Field(default=None, gt=0)

    def entry_values(self) -> dict[str, Any]:
        return {"exercise": self.exercise, "duration_in_minutes": self.duration_in_minutes}


class CalorieIntakeEntryCreate(EntryCreate):
    item: str | None = Field(default=None, min_length=1, max_length=200)
    quantity: float | None = Field(default=None, gt=0)
    quantitytype: str | None = Field(default=None, min_length=1, max_length=50)
    calorie_intake: float | None = Field(default=None, ge=0)

    def entry_values(self) -> dict[str, Any]:
        return {
            "item": self.item,
            "quantity": self.quantity,
            "quantitytype": self.quantitytype,
            "calorie_intake": self.calorie_intake,
        }


class EntryRead(CamelModel):
    id: int
    date: datetime


class WeightEntryRead(EntryRead):
    weight: float


class HeightEntryRead(EntryRead):
    height: float


class SleepEntryRead(EntryRead):
    duration_in_hrs: float


class StepEntryRead(EntryRead):
    steps: int


class WaterEntryRead(EntryRead):
    amount_in_milliliters: float


class WorkoutEntryRead(EntryRead):
    exercise: str
    duration_in_minutes: float


class CalorieIntakeEntryRead(EntryRead):
    item: str
    quantity: float
    quantitytype: str
    calorie_intake: float


class EntriesByDateRequest(CamelModel):
    date: datetime | None = None


class EntriesByLimitRequest(CamelModel):
    limit: StrictInt | StrictStr | None = None


class EntryDeleteRequest(CamelModel):
    date: datetime | None = None


class EntryDeleteResult(CamelModel):
    removed: int


class WeightGoalRead(CamelModel):
    current_weight: float | None
    goal_weight: float


class HeightGoalRead(CamelModel):
    current_height: float | None


class StepGoalRead(CamelModel):
    total_steps: int


class WorkoutGoalRead(CamelModel):
    goal: int


class WaterGoalRead(CamelModel):
    goal_water: float


class SleepGoalRead(CamelModel):
    goal_sleep: float


class CalorieIntakeGoalRead(CamelModel):
    bmr: float
    max_calorie_intake: float
