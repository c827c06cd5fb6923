# app/db/models/result.py
from datetime import datetime
from sqlalchemy import Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from typing import Optional, TYPE_CHECKING
from app.db.session import Base

if TYPE_CHECKING:
    from app.db.models.event import Event


class Result(Base):
    __tablename__ = "results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # Un único resultado por evento
    event_id: Mapped[int] = mapped_column(Integer, ForeignKey("events.id", ondelete="CASCADE"), unique=True, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    qualifying_position: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    fastest_lap: Mapped[bool] = mapped_column(Boolean, default=False)
    notes: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    # Relaciones
    event: Mapped["Event"] = relationship("Event", back_populates="result")
