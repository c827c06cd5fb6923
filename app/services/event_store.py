"""
Acceso a la base de datos para eventos y escuderías.
Las funciones reciben la sesión abierta por el endpoint; no hacen commit
salvo en las escrituras.
"""
import logging
from sqlalchemy.orm import Session, joinedload, selectinload
from app.core.errors import NotFoundError
from app.db.models.event import Event
from app.db.models.team import Team
from app.db.models.user import User

logger = logging.getLogger(__name__)


def find_events(db: Session, predicate) -> list[Event]:
    """Eventos que cumplen el predicado, por fecha ascendente, con pilotos, campeonato y resultado."""
    return (
        db.query(Event)
        .options(
            selectinload(Event.drivers),
            joinedload(Event.championship),
            joinedload(Event.result),
        )
        .filter(predicate)
        .order_by(Event.date.asc(), Event.id.asc())
        .all()
    )


def get_event(db: Session, event_id: int) -> Event:
    event = (
        db.query(Event)
        .options(selectinload(Event.drivers), joinedload(Event.result))
        .filter(Event.id == event_id)
        .first()
    )
    if not event:
        raise NotFoundError("Evento no encontrado")
    return event


def find_team(db: Session, *criteria) -> Team | None:
    if not criteria:
        return None
    return db.query(Team).filter(*criteria).first()


def load_drivers(db: Session, driver_ids: list[int]) -> list[User]:
    ids = list(dict.fromkeys(driver_ids))
    if not ids:
        return []
    drivers = db.query(User).filter(User.id.in_(ids)).all()
    if len(drivers) != len(ids):
        missing = set(ids) - {d.id for d in drivers}
        raise NotFoundError(f"Pilotos no encontrados: {sorted(missing)}")
    return drivers


def create_event(db: Session, data: dict, drivers: list[User]) -> Event:
    event = Event(**data)
    event.drivers = drivers
    db.add(event)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(event)
    logger.info("Evento %s creado (%s, %s pilotos)", event.id, event.type, len(drivers))
    return event


def update_event(db: Session, event: Event, changes: dict, drivers: list[User] | None = None) -> Event:
    for field, value in changes.items():
        setattr(event, field, value)
    # La lista de pilotos se sustituye entera, no se mezcla
    if drivers is not None:
        event.drivers = drivers
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(event)
    logger.info("Evento %s actualizado: %s", event.id, sorted(changes))
    return event


def delete_event(db: Session, event: Event) -> None:
    event_id = event.id
    db.delete(event)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Evento %s eliminado", event_id)
