"""
Generación de la página del calendario (rejilla de 6 semanas x 7 días)
y helpers de rango de fechas para las consultas de eventos.

Los meses van indexados desde 0 (enero = 0), igual que en el frontend.
Un índice fuera de 0..11 pasa al año anterior/siguiente, así las flechas
del calendario pueden sumar o restar meses sin preocuparse del cambio de año.
"""
import enum
from datetime import date, datetime, time, timedelta

WEEKS_PER_PAGE = 6
DAYS_PER_WEEK = 7


class Weekday(enum.IntEnum):
    # Mismos valores que date.weekday()
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def from_name(cls, name: str) -> "Weekday":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Día de la semana no válido: {name}")


def normalize_month(month: int, year: int) -> tuple[int, int]:
    """Devuelve (month, year) con month dentro de 0..11."""
    extra_years, month = divmod(month, 12)
    return month, year + extra_years


def first_day_of_month(month: int, year: int) -> date:
    month, year = normalize_month(month, year)
    if not date.min.year <= year <= date.max.year:
        raise ValueError(f"El año {year} se sale del rango de fechas")
    return date(year, month + 1, 1)


def week_offset(day: date, week_start: Weekday = Weekday.MONDAY) -> int:
    """Posición de `day` dentro de una semana que empieza en `week_start`."""
    return (day.weekday() - week_start) % DAYS_PER_WEEK


def build_page(month: int, year: int, week_start: Weekday = Weekday.MONDAY) -> list[list[date]]:
    """
    Construye la rejilla 6x7 del calendario.

    La celda i (fila*7 + columna) es el día 1 del mes desplazado (i - offset) días,
    así que los huecos se rellenan solos con días del mes anterior y del siguiente.
    Siempre devuelve 42 fechas consecutivas.
    Lanza ValueError si el mes (tras normalizarlo) o alguna celda queda fuera
    del rango de fechas de Python (años 1..9999).
    """
    first = first_day_of_month(month, year)
    offset = week_offset(first, week_start)

    try:
        return [
            [
                first + timedelta(days=row * DAYS_PER_WEEK + col - offset)
                for col in range(DAYS_PER_WEEK)
            ]
            for row in range(WEEKS_PER_PAGE)
        ]
    except OverflowError:
        # Primeras o últimas semanas fuera de date.min / date.max
        raise ValueError(f"La página de {first.month}/{first.year} se sale del rango de fechas")


def month_bounds(month: int, year: int) -> tuple[date, date]:
    """Primer y último día (ambos incluidos) del mes. ValueError fuera de los años 1..9999."""
    first = first_day_of_month(month, year)
    next_first = first_day_of_month(month + 1, year)
    return first, next_first - timedelta(days=1)


def day_range(first_day: date, last_day: date) -> tuple[datetime, datetime]:
    """
    Convierte [first_day, last_day] en [inicio, fin) de datetimes.
    El fin es last_day + 1 día a medianoche para incluir todo el último día
    sin importar la hora guardada en el evento.
    """
    start = datetime.combine(first_day, time.min)
    try:
        end = datetime.combine(last_day + timedelta(days=1), time.min)
    except OverflowError:
        raise ValueError(f"{last_day} se sale del rango de fechas")
    return start, end
