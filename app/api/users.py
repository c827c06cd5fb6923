from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import selectinload
from app.db.session import SessionLocal
from app.db.models.user import User
from app.core.deps import get_current_user, require_manager
from app.schemas.user import RolesAssign, UserOut, UserSummary
from app.services.roles import assign_roles
from app.services.directory import search_free_drivers, search_free_social_media
from app.api.auth import serialize_user

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/roles", response_model=UserOut)
def assign_my_roles(payload: RolesAssign, current_user=Depends(get_current_user)):
    """
    Asigna roles al usuario logueado (pantalla de bienvenida).
    Repetir la llamada con los mismos roles no cambia nada.
    """
    if not payload.roles:
        raise HTTPException(400, "Selecciona al menos un rol.")

    db = SessionLocal()
    try:
        user = (
            db.query(User)
            .options(selectinload(User.roles))
            .filter(User.id == current_user.id)
            .first()
        )
        assign_roles(db, user, payload.roles)
        return serialize_user(user)
    finally:
        db.close()


@router.get("/drivers", response_model=list[UserSummary])
def get_drivers(q: str = "", current_user=Depends(require_manager)):
    """Pilotos cuyo nombre contiene `q` y que todavía no tienen escudería"""
    db = SessionLocal()
    try:
        return search_free_drivers(db, q)
    finally:
        db.close()


@router.get("/social-media", response_model=list[UserSummary])
def get_social_media(q: str = "", current_user=Depends(require_manager)):
    """Community managers cuyo nombre contiene `q` sin escudería asignada"""
    db = SessionLocal()
    try:
        return search_free_social_media(db, q)
    finally:
        db.close()
