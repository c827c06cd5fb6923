from sqlalchemy import String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from typing import List, Optional, TYPE_CHECKING
from app.db.session import Base
from app.db.models.role import user_roles
from app.db.models.event import event_drivers
from datetime import datetime

if TYPE_CHECKING:
    from app.db.models.role import Role
    from app.db.models.team import Team
    from app.db.models.event import Event


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    # Un piloto pertenece como mucho a una escudería
    team_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("teams.id", use_alter=True, name="fk_users_team_id"), nullable=True, index=True)

    # Relaciones
    roles: Mapped[List["Role"]] = relationship("Role", secondary=user_roles, back_populates="users")
    team: Mapped[Optional["Team"]] = relationship("Team", back_populates="drivers", foreign_keys=[team_id])
    managing_team: Mapped[Optional["Team"]] = relationship(
        "Team", back_populates="manager", foreign_keys="Team.manager_id", uselist=False
    )
    social_managing_team: Mapped[Optional["Team"]] = relationship(
        "Team", back_populates="social_media", foreign_keys="Team.social_media_id", uselist=False
    )
    driving_events: Mapped[List["Event"]] = relationship("Event", secondary=event_drivers, back_populates="drivers")
