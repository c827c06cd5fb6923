# Importa todos los modelos para que SQLAlchemy resuelva las relaciones por nombre
from app.db.models.role import Role, user_roles  # noqa: F401
from app.db.models.event import Event, EventType, event_drivers  # noqa: F401
from app.db.models.user import User  # noqa: F401
from app.db.models.team import Team  # noqa: F401
from app.db.models.championship import Championship  # noqa: F401
from app.db.models.result import Result  # noqa: F401
