from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query
from app.db.session import SessionLocal
from app.db.models.championship import Championship
from app.db.models.team import Team
from app.core.deps import get_current_user, require_driver, require_manager
from app.schemas.event import EventCreate, ChampionshipEventCreate, EventEdit, EventOut
from app.services import event_store
from app.services.calendar import day_range as calendar_range, month_bounds
from app.services.event_visibility import EventView, query_events
from app.services.events import (
    can_modify,
    create_championship_event,
    create_one_off_event,
    edit_event,
    remove_event,
)

router = APIRouter(prefix="/events", tags=["Events"])


def resolve_range(
    month: int | None = Query(None, description="Mes empezando en 0 (enero = 0)"),
    year: int | None = Query(None, ge=1, le=9998),
    first_day: date | None = Query(None),
    last_day: date | None = Query(None),
) -> tuple[date, date]:
    """
    Rango de fechas de la consulta: o bien first_day + last_day,
    o bien un mes (por defecto el actual).
    """
    if first_day or last_day:
        if not (first_day and last_day):
            raise HTTPException(400, "Indica first_day y last_day a la vez")
        if first_day > last_day:
            raise HTTPException(400, "first_day no puede ser posterior a last_day")

    today = date.today()
    try:
        if first_day:
            # El rango se compila hasta last_day + 1 día, que tiene que existir
            calendar_range(first_day, last_day)
            return first_day, last_day
        return month_bounds(
            today.month - 1 if month is None else month,
            today.year if year is None else year,
        )
    except ValueError as e:
        raise HTTPException(400, str(e))


def list_events(current_user, view: EventView, day_range: tuple[date, date]):
    db = SessionLocal()
    try:
        events = query_events(db, current_user, view, *day_range)
        return [EventOut.model_validate(e) for e in events]
    finally:
        db.close()


# -----------------------
# Consultas
# -----------------------
@router.get("/driving", response_model=list[EventOut])
def get_driving_events(day_range=Depends(resolve_range), current_user=Depends(require_driver)):
    """Eventos en los que corre el usuario"""
    return list_events(current_user, EventView.DRIVING, day_range)


@router.get("/managing", response_model=list[EventOut])
def get_managing_events(day_range=Depends(resolve_range), current_user=Depends(require_manager)):
    """Eventos que gestiona el usuario"""
    return list_events(current_user, EventView.MANAGING, day_range)


@router.get("/team", response_model=list[EventOut])
def get_team_events(day_range=Depends(resolve_range), current_user=Depends(get_current_user)):
    """
    Eventos de la escudería del usuario.
    No incluye los que ya ve en "driving" (solo corre él) ni en "managing".
    Sin escudería devuelve lista vacía.
    """
    return list_events(current_user, EventView.TEAM, day_range)


# -----------------------
# Escrituras
# -----------------------
@router.post("/one-off", response_model=EventOut, status_code=201)
def create_one_off(payload: EventCreate, current_user=Depends(get_current_user)):
    db = SessionLocal()
    try:
        data = payload.model_dump(exclude={"drivers"})
        driver_ids = [d.id for d in payload.drivers] if payload.drivers else None
        event = create_one_off_event(db, current_user, data, driver_ids)
        return EventOut.model_validate(event)
    finally:
        db.close()


@router.post("/championship", response_model=EventOut, status_code=201)
def create_championship_round(payload: ChampionshipEventCreate, current_user=Depends(get_current_user)):
    """
    Ronda de un campeonato del usuario.
    Si se indica escudería tiene que ser la que gestiona el usuario.
    """
    db = SessionLocal()
    try:
        # 1. El campeonato existe y es del usuario
        championship = db.get(Championship, payload.championship_id)
        if not championship:
            raise HTTPException(404, "Campeonato no encontrado")
        if championship.manager_id != current_user.id:
            raise HTTPException(403, "No gestionas este campeonato")

        # 2. La escudería (opcional) la gestiona el usuario
        if payload.team_id is not None:
            team = db.get(Team, payload.team_id)
            if not team:
                raise HTTPException(404, "Escudería no encontrada")
            if team.manager_id != current_user.id:
                raise HTTPException(403, "No gestionas esta escudería")

        data = payload.model_dump(exclude={"drivers"})
        driver_ids = [d.id for d in payload.drivers] if payload.drivers else None
        event = create_championship_event(db, current_user, data, driver_ids)
        return EventOut.model_validate(event)
    finally:
        db.close()


@router.patch("/{event_id}", response_model=EventOut)
def edit(event_id: int, payload: EventEdit, current_user=Depends(get_current_user)):
    """
    Edición parcial. Los pilotos, si llegan, sustituyen a los anteriores.
    Si no llega `type` el evento pasa a ser sprint.
    """
    db = SessionLocal()
    try:
        event = event_store.get_event(db, event_id)
        if not can_modify(current_user, event):
            raise HTTPException(403, "No puedes modificar este evento")

        changes = payload.model_dump(exclude_unset=True, exclude={"drivers"})
        # Un null explícito solo vale para el título (el resto de columnas son obligatorias)
        changes = {k: v for k, v in changes.items() if v is not None or k == "title"}
        driver_ids = [d.id for d in payload.drivers] if payload.drivers is not None else None
        event = edit_event(db, event, changes, driver_ids)
        return EventOut.model_validate(event)
    finally:
        db.close()


@router.delete("/{event_id}")
def delete(event_id: int, current_user=Depends(get_current_user)):
    db = SessionLocal()
    try:
        event = event_store.get_event(db, event_id)
        if not can_modify(current_user, event):
            raise HTTPException(403, "No puedes borrar este evento")
        remove_event(db, event)
    finally:
        db.close()
    return {"message": "Evento eliminado"}
