# app/db/models/event.py
import enum
from datetime import datetime
from sqlalchemy import Integer, String, DateTime, ForeignKey, Table, Column
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import List, Optional, TYPE_CHECKING
from app.db.session import Base

if TYPE_CHECKING:
    from app.db.models.user import User
    from app.db.models.team import Team
    from app.db.models.championship import Championship
    from app.db.models.result import Result


class EventType(str, enum.Enum):
    SPRINT = "sprint"
    ENDURANCE = "endurance"
    CHAMPIONSHIP = "championship"


# Tabla intermedia evento <-> pilotos
event_drivers = Table(
    "event_drivers",
    Base.metadata,
    Column("event_id", Integer, ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Event(Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String, nullable=False, default=EventType.SPRINT.value)
    car: Mapped[str] = mapped_column(String, nullable=False)
    track: Mapped[str] = mapped_column(String, nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)  # minutos

    manager_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    championship_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("championships.id"), nullable=True)
    team_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("teams.id"), nullable=True)

    # Relaciones
    manager: Mapped[Optional["User"]] = relationship("User", foreign_keys=[manager_id])
    championship: Mapped[Optional["Championship"]] = relationship("Championship", back_populates="events")
    team: Mapped[Optional["Team"]] = relationship("Team", back_populates="events")
    drivers: Mapped[List["User"]] = relationship("User", secondary=event_drivers, back_populates="driving_events")
    result: Mapped[Optional["Result"]] = relationship(
        "Result", back_populates="event", uselist=False, cascade="all, delete-orphan"
    )
