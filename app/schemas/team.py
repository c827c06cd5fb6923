from pydantic import BaseModel
from app.schemas.user import UserSummary


class TeamCreate(BaseModel):
    name: str
    driver_ids: list[int] = []
    social_media_id: int | None = None


class TeamOut(BaseModel):
    id: int
    name: str
    manager_id: int
    social_media_id: int | None = None
    drivers: list[UserSummary] = []

    class Config:
        from_attributes = True


class ChampionshipCreate(BaseModel):
    name: str
    organizer: str


class ChampionshipOut(BaseModel):
    id: int
    name: str
    organizer: str
    manager_id: int

    class Config:
        from_attributes = True
