from sqlmodel import Field

from app.models.base import BaseTable


class Admin(BaseTable, table=True):
    __tablename__: str = "admins"  # type: ignore[assignment]

    email: str = Field(index=True, unique=True, nullable=False, max_length=255)
    name: str = Field(nullable=False, max_length=255)
    password_hash: str = Field(nullable=False, max_length=255)
