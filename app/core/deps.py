from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from sqlalchemy.orm import selectinload
from app.core.config import SECRET_KEY, ALGORITHM
from app.db.session import SessionLocal
from app.db.models.user import User
from app.services.roles import resolve

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def get_current_user(token: str = Depends(oauth2_scheme)):
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        user_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Token inválido")

    db = SessionLocal()
    # Cargamos los roles ya aquí: después de cerrar la sesión no se pueden pedir
    user = (
        db.query(User)
        .options(selectinload(User.roles))
        .filter(User.id == user_id)
        .first()
    )
    db.close()

    if not user:
        raise HTTPException(status_code=401, detail="Usuario no encontrado")

    return user

def require_roles(*roles: str):
    """
    Dependencia que deja pasar si el usuario tiene ALGUNO de los roles.
    Ej: Depends(require_roles("manager"))
    """
    def checker(current_user: User = Depends(get_current_user)):
        if not resolve(current_user).has_any(*roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Se requiere rol: {', '.join(roles)}",
            )
        return current_user

    return checker

require_driver = require_roles("driver")
require_manager = require_roles("manager")
