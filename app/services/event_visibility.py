"""
Qué eventos puede ver cada usuario.

Cada petición se resuelve primero a un "scope" (piloto, manager o escudería)
y después ese scope se compila a un único predicado de SQLAlchemy junto
con el rango de fechas.
"""
import enum
import logging
from dataclasses import dataclass
from datetime import date
from typing import Union
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session
from app.db.models.event import Event
from app.db.models.team import Team
from app.db.models.user import User
from app.services.calendar import day_range
from app.services.event_store import find_events, find_team
from app.services.roles import DRIVER, MANAGER, SOCIAL_MEDIA, resolve

logger = logging.getLogger(__name__)


class EventView(str, enum.Enum):
    DRIVING = "driving"
    MANAGING = "managing"
    TEAM = "team"


@dataclass(frozen=True)
class DriverScope:
    user_id: int


@dataclass(frozen=True)
class ManagerScope:
    user_id: int


@dataclass(frozen=True)
class TeamScope:
    team_id: int
    viewer_id: int | None = None
    # False: se quitan los eventos que el usuario ya ve en sus otras pestañas
    include_own: bool = False


Scope = Union[DriverScope, ManagerScope, TeamScope]


def default_view(caller) -> EventView:
    """Vista por defecto según el rol principal."""
    primary = resolve(caller).primary()
    if primary == DRIVER:
        return EventView.DRIVING
    if primary == MANAGER:
        return EventView.MANAGING
    return EventView.TEAM


def team_criteria(caller) -> list:
    """
    Condición para encontrar la escudería del usuario según sus roles.
    Piloto y manager a la vez: cualquiera de las dos. Si no, el primer rol que encaje.
    """
    roles = resolve(caller)
    as_driver = Team.drivers.any(User.id == caller.id)
    as_manager = Team.manager_id == caller.id

    if roles.has_all(DRIVER, MANAGER):
        return [or_(as_driver, as_manager)]
    if roles.has_any(DRIVER):
        return [as_driver]
    if roles.has_any(MANAGER):
        return [as_manager]
    if roles.has_any(SOCIAL_MEDIA):
        return [Team.social_media_id == caller.id]
    return []


def resolve_team(db: Session, caller) -> Team | None:
    if caller is None:
        return None
    return find_team(db, *team_criteria(caller))


def resolve_scope(db: Session, caller, view: EventView | str | None = None, include_own: bool = False) -> Scope | None:
    """
    Decide el scope una sola vez. None significa "no hay nada que ver"
    (rol que no encaja o usuario sin escudería), no es un error.
    """
    if caller is None:
        return None
    view = EventView(view) if view else default_view(caller)
    roles = resolve(caller)

    if view == EventView.DRIVING:
        return DriverScope(caller.id) if roles.has_any(DRIVER) else None
    if view == EventView.MANAGING:
        return ManagerScope(caller.id) if roles.has_any(MANAGER) else None

    team = resolve_team(db, caller)
    if not team:
        logger.debug("Usuario %s sin escudería, vista de equipo vacía", caller.id)
        return None
    return TeamScope(team_id=team.id, viewer_id=caller.id, include_own=include_own)


def scope_predicate(scope: Scope):
    if isinstance(scope, DriverScope):
        return Event.drivers.any(User.id == scope.user_id)

    if isinstance(scope, ManagerScope):
        return Event.manager_id == scope.user_id

    if isinstance(scope, TeamScope):
        # Ningún piloto del evento es de fuera de la escudería
        no_outside_drivers = ~Event.drivers.any(
            or_(User.team_id.is_(None), User.team_id != scope.team_id)
        )
        # Enlazado a la escudería, o con al menos un piloto y todos de la escudería
        belongs_to_team = and_(
            no_outside_drivers,
            or_(Event.team_id == scope.team_id, Event.drivers.any()),
        )
        if scope.include_own or scope.viewer_id is None:
            return belongs_to_team

        # Fuera los que el usuario gestiona (ya salen en "managing")
        not_managed_by_viewer = or_(Event.manager_id.is_(None), Event.manager_id != scope.viewer_id)
        # Fuera los que solo corre él (ya salen en "driving")
        only_viewer_drives = and_(
            Event.drivers.any(User.id == scope.viewer_id),
            ~Event.drivers.any(User.id != scope.viewer_id),
        )
        return and_(belongs_to_team, not_managed_by_viewer, ~only_viewer_drives)

    raise TypeError(f"Scope desconocido: {scope!r}")


def build_filter(scope: Scope, first_day: date, last_day: date):
    """Predicado completo: scope + fecha dentro de [first_day, last_day] (días completos)."""
    start, end = day_range(first_day, last_day)
    return and_(scope_predicate(scope), Event.date >= start, Event.date < end)


def build_caller_filter(db: Session, caller, first_day: date, last_day: date, view: EventView | str | None = None):
    scope = resolve_scope(db, caller, view)
    if scope is None:
        return None
    return build_filter(scope, first_day, last_day)


def query_events(
    db: Session,
    caller,
    view: EventView | str | None,
    first_day: date,
    last_day: date,
    include_own: bool = False,
) -> list[Event]:
    scope = resolve_scope(db, caller, view, include_own=include_own)
    if scope is None:
        return []
    return find_events(db, build_filter(scope, first_day, last_day))
