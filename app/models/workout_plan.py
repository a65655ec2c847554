from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field

from app.models.base import BaseTable


class WorkoutPlan(BaseTable, table=True):
    __tablename__: str = "workout_plans"  # type: ignore[assignment]

    name: str = Field(nullable=False, index=True, max_length=200)
    description: str = Field(nullable=False)
    duration_in_minutes: float = Field(nullable=False)
    exercises: list[dict[str, Any]] = Field(sa_column=Column(JSON, nullable=False))
    image_url: str = Field(nullable=False, max_length=1000)
