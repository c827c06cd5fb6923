import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import selectinload
from app.db.session import SessionLocal
from app.db.models.team import Team
from app.db.models.user import User
from app.core.deps import get_current_user, require_manager
from app.schemas.team import TeamCreate, TeamOut
from app.services.event_visibility import resolve_team
from app.services.roles import DRIVER, SOCIAL_MEDIA, resolve

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/teams", tags=["Teams"])


@router.post("/", response_model=TeamOut, status_code=201)
def create_team(payload: TeamCreate, current_user=Depends(require_manager)):
    """
    Crea una escudería gestionada por el usuario.
    Los pilotos tienen que tener rol de piloto y no estar en otra escudería.
    """
    db = SessionLocal()
    try:
        # 1. Un manager solo gestiona una escudería
        if db.query(Team).filter(Team.manager_id == current_user.id).first():
            raise HTTPException(400, "Ya gestionas una escudería.")

        # 2. Validar pilotos
        driver_ids = list(dict.fromkeys(payload.driver_ids))
        drivers = []
        if driver_ids:
            drivers = (
                db.query(User)
                .options(selectinload(User.roles))
                .filter(User.id.in_(driver_ids))
                .all()
            )
            if len(drivers) != len(driver_ids):
                raise HTTPException(404, "Algún piloto no existe.")
            for driver in drivers:
                if DRIVER not in resolve(driver):
                    raise HTTPException(400, f"{driver.name} no es piloto.")
                if driver.team_id is not None:
                    raise HTTPException(400, f"{driver.name} ya pertenece a una escudería.")

        # 3. Validar community manager
        if payload.social_media_id is not None:
            social = (
                db.query(User)
                .options(selectinload(User.roles))
                .filter(User.id == payload.social_media_id)
                .first()
            )
            if not social:
                raise HTTPException(404, "Community manager no encontrado.")
            if SOCIAL_MEDIA not in resolve(social):
                raise HTTPException(400, f"{social.name} no es community manager.")
            if db.query(Team).filter(Team.social_media_id == social.id).first():
                raise HTTPException(400, f"{social.name} ya lleva otra escudería.")

        # 4. Crear escudería y asignar pilotos
        team = Team(
            name=payload.name,
            manager_id=current_user.id,
            social_media_id=payload.social_media_id,
        )
        db.add(team)
        db.flush()  # Para obtener el ID

        for driver in drivers:
            driver.team_id = team.id

        db.commit()
        db.refresh(team)
        logger.info("Escudería %s creada por %s con %s pilotos", team.id, current_user.id, len(drivers))
        return TeamOut.model_validate(team)
    except HTTPException:
        db.rollback()
        raise
    finally:
        db.close()


@router.get("/managing", response_model=TeamOut | None)
def get_managing_for(current_user=Depends(require_manager)):
    """La escudería que gestiona el usuario (o null)"""
    db = SessionLocal()
    try:
        team = (
            db.query(Team)
            .options(selectinload(Team.drivers))
            .filter(Team.manager_id == current_user.id)
            .first()
        )
        return TeamOut.model_validate(team) if team else None
    finally:
        db.close()


@router.get("/mine", response_model=TeamOut | None)
def get_my_team(current_user=Depends(get_current_user)):
    """
    La escudería del usuario según sus roles (piloto, manager o community manager).
    Si no tiene, devuelve null en vez de error.
    """
    db = SessionLocal()
    try:
        team = resolve_team(db, current_user)
        return TeamOut.model_validate(team) if team else None
    finally:
        db.close()
