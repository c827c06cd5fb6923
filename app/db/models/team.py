from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import List, Optional, TYPE_CHECKING
from app.db.session import Base

if TYPE_CHECKING:
    from app.db.models.user import User
    from app.db.models.event import Event


class Team(Base):
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)

    # Exactamente un manager, y un manager solo gestiona una escudería
    manager_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    # Community manager opcional
    social_media_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("users.id"), unique=True, nullable=True)

    # Relaciones
    manager: Mapped["User"] = relationship("User", back_populates="managing_team", foreign_keys=[manager_id])
    social_media: Mapped[Optional["User"]] = relationship(
        "User", back_populates="social_managing_team", foreign_keys=[social_media_id]
    )
    drivers: Mapped[List["User"]] = relationship("User", back_populates="team", foreign_keys="User.team_id")
    events: Mapped[List["Event"]] = relationship("Event", back_populates="team")
