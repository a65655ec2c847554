from pydantic import BaseModel


class ReportItem(BaseModel):
    name: str
    value: int | float
    goal: int | float | str
    unit: str
