from datetime import datetime

from pydantic import Field

from app.schemas.camel_model import CamelModel


class PlanExercise(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    sets: int = Field(gt=0)
    reps: int = Field(gt=0)
    image_url: str = Field(alias="imageURL", min_length=1, max_length=1000)


class WorkoutPlanWrite(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    duration_in_minutes: float = Field(gt=0)
    exercises: list[PlanExercise] = Field(default_factory=list, max_length=100)
    image_url: str = Field(alias="imageURL", min_length=1, max_length=1000)


class WorkoutPlanRead(CamelModel):
    id: int
    name: str
    description: str
    duration_in_minutes: float
    exercises: list[PlanExercise]
    image_url: str = Field(alias="imageURL")
    created_at: datetime
    updated_at: datetime
