from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal

EventTypeName = Literal["sprint", "endurance", "championship"]


# Esquemas de entrada
class DriverRef(BaseModel):
    id: int
    name: str | None = None


class EventCreate(BaseModel):
    title: str | None = None
    date: datetime
    type: EventTypeName
    car: str
    track: str
    duration: int = Field(gt=0)
    manager_id: int | None = None
    drivers: list[DriverRef] | None = None


class ChampionshipEventCreate(EventCreate):
    championship_id: int
    team_id: int | None = None


class EventEdit(BaseModel):
    # Todo opcional: solo se cambia lo que llega
    title: str | None = None
    date: datetime | None = None
    type: EventTypeName | None = None
    car: str | None = None
    track: str | None = None
    duration: int | None = Field(default=None, gt=0)
    drivers: list[DriverRef] | None = None


# Esquemas de salida
class EventDriverOut(BaseModel):
    id: int
    name: str
    team_id: int | None = None

    class Config:
        from_attributes = True


class ChampionshipRef(BaseModel):
    name: str
    organizer: str

    class Config:
        from_attributes = True


class ResultOut(BaseModel):
    id: int
    event_id: int
    position: int
    qualifying_position: int | None = None
    fastest_lap: bool = False
    notes: str | None = None

    class Config:
        from_attributes = True


class EventOut(BaseModel):
    id: int
    title: str | None = None
    date: datetime
    type: str
    car: str
    track: str
    duration: int
    manager_id: int | None = None
    championship_id: int | None = None
    team_id: int | None = None
    drivers: list[EventDriverOut] = []
    championship: ChampionshipRef | None = None
    result: ResultOut | None = None

    class Config:
        from_attributes = True
