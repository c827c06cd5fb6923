import logging
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import selectinload
from app.schemas.user import UserCreate, UserLogin, UserOut
from app.db.session import SessionLocal
from app.db.models.user import User
from app.core.security import hash_password, verify_password, create_access_token
from app.core.deps import get_current_user
from app.services.roles import resolve

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def serialize_user(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "roles": sorted(resolve(user)),
        "team_id": user.team_id,
        "created_at": user.created_at,
    }


@router.post("/register", status_code=201)
def register(user: UserCreate):
    db = SessionLocal()

    # 1. Validar que no exista el email
    existing_user = db.query(User).filter(User.email == user.email).first()
    if existing_user:
        db.close()
        raise HTTPException(status_code=400, detail="El email ya está registrado")

    # 2. Crear usuario (sin roles: los elige en la pantalla de bienvenida)
    new_user = User(
        email=user.email,
        name=user.name,
        hashed_password=hash_password(user.password),
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    user_id = new_user.id
    db.close()

    logger.info("Usuario %s registrado", user_id)
    return {"message": "Usuario creado exitosamente", "id": user_id}


@router.post("/login")
def login(user: UserLogin):
    db = SessionLocal()
    db_user = (
        db.query(User)
        .options(selectinload(User.roles))
        .filter(User.email == user.email)
        .first()
    )
    db.close()

    if not db_user or not verify_password(user.password, db_user.hashed_password):
        raise HTTPException(status_code=401, detail="Credenciales incorrectas")

    token = create_access_token({
        "sub": str(db_user.id),
        "name": db_user.name,
        "roles": sorted(resolve(db_user)),
    })

    return {"access_token": token, "token_type": "bearer"}


@router.get("/me", response_model=UserOut)
def get_current_user_data(current_user: User = Depends(get_current_user)):
    """Devuelve los datos del usuario logueado (con sus roles)"""
    return serialize_user(current_user)
