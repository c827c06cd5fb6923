from pydantic import BaseModel
from datetime import date


class CalendarPageOut(BaseModel):
    month: int
    year: int
    week_start: str
    weeks: list[list[date]]
