from fastapi import APIRouter, Depends
from app.db.session import SessionLocal
from app.db.models.championship import Championship
from app.core.deps import require_manager
from app.schemas.team import ChampionshipCreate, ChampionshipOut

router = APIRouter(prefix="/championships", tags=["Championships"])


@router.post("/", response_model=ChampionshipOut, status_code=201)
def create_championship(payload: ChampionshipCreate, current_user=Depends(require_manager)):
    db = SessionLocal()
    championship = Championship(
        name=payload.name,
        organizer=payload.organizer,
        manager_id=current_user.id,
    )
    db.add(championship)
    db.commit()
    db.refresh(championship)
    db.close()
    return championship


@router.get("/", response_model=list[ChampionshipOut])
def list_my_championships(current_user=Depends(require_manager)):
    db = SessionLocal()
    championships = (
        db.query(Championship)
        .filter(Championship.manager_id == current_user.id)
        .order_by(Championship.name)
        .all()
    )
    db.close()
    return championships
