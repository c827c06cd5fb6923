from pydantic import BaseModel, EmailStr
from datetime import datetime
from typing import Literal

RoleName = Literal["driver", "manager", "socialMedia"]


class UserCreate(BaseModel):
    email: EmailStr
    name: str
    password: str


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserOut(BaseModel):
    id: int
    email: EmailStr
    name: str
    roles: list[str] = []
    team_id: int | None = None
    created_at: datetime | None = None


class UserSummary(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class RolesAssign(BaseModel):
    roles: list[RoleName]
