from datetime import date
from enum import Enum

from sqlmodel import Field

from app.models.base import BaseTable


class Goal(str, Enum):
    weightLoss = "weightLoss"
    weightGain = "weightGain"
    maintain = "maintain"


class User(BaseTable, table=True):
    __tablename__: str = "users" # type: ignore[assignment]

    email: str = Field(index=True, unique=True, nullable=False, max_length=255)
    name: str = Field(nullable=False, max_length=255)
    password_hash: str = Field(nullable=False, max_length=255)

    # Anything other than "male" uses the female BMR branch.
    gender: str = Field(nullable=False, max_length=32)
    dob: date = Field(nullable=False)
    goal: Goal = Field(nullable=False)
    activity_level: str = Field(nullable=False, max_length=50)
