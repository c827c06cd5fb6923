"""
Altas, ediciones y bajas de eventos.
"""
from sqlalchemy.orm import Session
from app.db.models.event import Event, EventType
from app.db.models.team import Team
from app.db.models.user import User
from app.services import event_store


def _event_drivers(db: Session, caller: User, driver_ids: list[int] | None) -> list[User]:
    # Sin pilotos indicados: el propio usuario es el piloto
    if driver_ids:
        return event_store.load_drivers(db, driver_ids)
    return [db.get(User, caller.id)]


def create_one_off_event(db: Session, caller: User, data: dict, driver_ids: list[int] | None) -> Event:
    """
    Evento suelto (sprint o resistencia).
    En resistencia la escudería es la que gestiona el usuario y el manager
    solo se enlaza si viene indicado. En el resto de tipos manager_id se ignora.
    """
    data = dict(data)
    manager_id = data.pop("manager_id", None)
    data.pop("team_id", None)
    data.pop("championship_id", None)

    if data.get("type") == EventType.ENDURANCE.value:
        team = event_store.find_team(db, Team.manager_id == caller.id)
        if team:
            data["team_id"] = team.id
        if manager_id:
            data["manager_id"] = manager_id

    return event_store.create_event(db, data, _event_drivers(db, caller, driver_ids))


def create_championship_event(db: Session, caller: User, data: dict, driver_ids: list[int] | None) -> Event:
    """Ronda de campeonato: championship_id, manager_id y team_id se guardan tal cual."""
    return event_store.create_event(db, dict(data), _event_drivers(db, caller, driver_ids))


def can_modify(caller: User, event: Event) -> bool:
    if caller is None:
        return False
    if event.manager_id == caller.id:
        return True
    return any(driver.id == caller.id for driver in event.drivers)


def edit_event(db: Session, event: Event, changes: dict, driver_ids: list[int] | None = None) -> Event:
    """
    Edición parcial. Ojo: si no llega `type` se guarda como sprint,
    aunque el evento fuera de otro tipo.
    """
    changes = dict(changes)
    if not changes.get("type"):
        changes["type"] = EventType.SPRINT.value

    drivers = event_store.load_drivers(db, driver_ids) if driver_ids is not None else None
    return event_store.update_event(db, event, changes, drivers)


def remove_event(db: Session, event: Event) -> None:
    event_store.delete_event(db, event)
