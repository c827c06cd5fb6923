from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import List, TYPE_CHECKING
from app.db.session import Base

if TYPE_CHECKING:
    from app.db.models.user import User
    from app.db.models.event import Event


class Championship(Base):
    """
    Serie de carreras organizada por un manager (distinta de las carreras de resistencia del equipo).
    """
    __tablename__ = "championships"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    organizer: Mapped[str] = mapped_column(String, nullable=False)
    manager_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relaciones
    manager: Mapped["User"] = relationship("User")
    events: Mapped[List["Event"]] = relationship("Event", back_populates="championship")
