from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query
from app.db.session import SessionLocal
from app.core.deps import get_current_user
from app.schemas.event import ResultOut
from app.schemas.result import ResultUpsert, TeamResultOut
from app.services import event_store
from app.services.calendar import month_bounds
from app.services.events import can_modify
from app.services.results import team_results, upsert_result

router = APIRouter(prefix="/results", tags=["Results"])


@router.put("/{event_id}", response_model=ResultOut)
def save_result(event_id: int, payload: ResultUpsert, current_user=Depends(get_current_user)):
    db = SessionLocal()
    try:
        event = event_store.get_event(db, event_id)
        if not can_modify(current_user, event):
            raise HTTPException(403, "No puedes guardar resultados de este evento")
        result = upsert_result(db, event, payload.model_dump())
        return ResultOut.model_validate(result)
    finally:
        db.close()


@router.get("/team", response_model=list[TeamResultOut])
def get_team_results(
    month: int | None = Query(None, description="Mes empezando en 0 (enero = 0)"),
    year: int | None = Query(None, ge=1, le=9998),
    sort_by: str = Query("date", pattern="^(date|position)$"),
    order: str = Query("asc", pattern="^(asc|desc)$"),
    current_user=Depends(get_current_user),
):
    """Resultados de la escudería del mes indicado (por defecto el actual)"""
    today = date.today()
    try:
        first_day, last_day = month_bounds(
            today.month - 1 if month is None else month,
            today.year if year is None else year,
        )
    except ValueError as e:
        raise HTTPException(400, str(e))

    db = SessionLocal()
    try:
        events = team_results(db, current_user, first_day, last_day, sort_by, order == "desc")
        return [
            {
                "event_id": e.id,
                "title": e.title,
                "date": e.date,
                "type": e.type,
                "track": e.track,
                "car": e.car,
                "drivers": [{"id": d.id, "name": d.name} for d in e.drivers],
                "result": ResultOut.model_validate(e.result),
            }
            for e in events
        ]
    finally:
        db.close()
