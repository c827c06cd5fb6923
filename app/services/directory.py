"""
Buscador de usuarios libres para montar una escudería:
pilotos sin equipo y community managers sin equipo asignado.
"""
from sqlalchemy.orm import Session
from app.core.errors import NotFoundError
from app.db.models.role import Role
from app.db.models.user import User
from app.services.roles import DRIVER, SOCIAL_MEDIA


def search_free_drivers(db: Session, q: str) -> list[User]:
    drivers = (
        db.query(User)
        .filter(
            User.name.contains(q, autoescape=True),
            User.roles.any(Role.name == DRIVER),
            User.team_id.is_(None),
        )
        .order_by(User.name)
        .all()
    )
    # A diferencia de los eventos, aquí una lista vacía es un error
    if not drivers:
        raise NotFoundError("No se han encontrado pilotos")
    return drivers


def search_free_social_media(db: Session, q: str) -> list[User]:
    users = (
        db.query(User)
        .filter(
            User.name.contains(q, autoescape=True),
            User.roles.any(Role.name == SOCIAL_MEDIA),
            ~User.social_managing_team.has(),
        )
        .order_by(User.name)
        .all()
    )
    if not users:
        raise NotFoundError("No se han encontrado community managers")
    return users
