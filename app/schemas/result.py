from pydantic import BaseModel, Field
from datetime import datetime
from app.schemas.event import ResultOut
from app.schemas.user import UserSummary


class ResultUpsert(BaseModel):
    position: int = Field(gt=0)
    qualifying_position: int | None = Field(default=None, gt=0)
    fastest_lap: bool = False
    notes: str | None = None


class TeamResultOut(BaseModel):
    event_id: int
    title: str | None = None
    date: datetime
    type: str
    track: str
    car: str
    drivers: list[UserSummary] = []
    result: ResultOut
