from datetime import date
from fastapi import APIRouter, HTTPException, Query
from app.core.config import WEEK_START
from app.schemas.calendar import CalendarPageOut
from app.services.calendar import Weekday, build_page, normalize_month

router = APIRouter(prefix="/calendar", tags=["Calendar"])


@router.get("/page", response_model=CalendarPageOut)
def get_calendar_page(
    month: int | None = Query(None, description="Mes empezando en 0 (enero = 0)"),
    year: int | None = Query(None, ge=1, le=9998),
    week_start: str | None = Query(None, description="monday, sunday..."),
):
    """Rejilla de 6 semanas del mes, empezando en el día configurado"""
    today = date.today()
    month = today.month - 1 if month is None else month
    year = today.year if year is None else year

    try:
        start = Weekday.from_name(week_start or WEEK_START)
        month, year = normalize_month(month, year)
        weeks = build_page(month, year, start)
    except ValueError as e:
        raise HTTPException(400, str(e))

    return {
        "month": month,
        "year": year,
        "week_start": start.name.lower(),
        "weeks": weeks,
    }
