import logging
from datetime import date
from sqlalchemy.orm import Session
from app.db.models.event import Event
from app.db.models.result import Result
from app.services.event_visibility import EventView, query_events

logger = logging.getLogger(__name__)

SORT_KEYS = {
    "date": lambda event: (event.date, event.id),
    "position": lambda event: (event.result.position, event.date),
}


def upsert_result(db: Session, event: Event, data: dict) -> Result:
    """Crea o sustituye el resultado del evento."""
    result = event.result
    if result is None:
        result = Result(event_id=event.id)
        db.add(result)

    for field, value in data.items():
        setattr(result, field, value)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(result)
    logger.info("Resultado del evento %s guardado (P%s)", event.id, result.position)
    return result


def team_results(
    db: Session,
    caller,
    first_day: date,
    last_day: date,
    sort_by: str = "date",
    descending: bool = False,
) -> list[Event]:
    """
    Eventos de la escudería con resultado dentro del rango.
    Aquí sí se incluyen los eventos propios del usuario.
    """
    events = query_events(db, caller, EventView.TEAM, first_day, last_day, include_own=True)
    with_result = [e for e in events if e.result is not None]
    return sorted(with_result, key=SORT_KEYS[sort_by], reverse=descending)
