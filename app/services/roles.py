import logging
from typing import Iterable
from sqlalchemy.orm import Session
from app.db.models.role import Role
from app.db.models.user import User

logger = logging.getLogger(__name__)

DRIVER = "driver"
MANAGER = "manager"
SOCIAL_MEDIA = "socialMedia"

ROLES = (DRIVER, MANAGER, SOCIAL_MEDIA)

# Orden de preferencia para decidir el rol "principal" de un usuario
PRIMARY_ROLE_ORDER = (DRIVER, MANAGER, SOCIAL_MEDIA)


class RoleSet(frozenset):
    """
    Conjunto de roles de un usuario.
    has_all = todos los roles (AND), has_any = al menos uno (OR).
    """

    def has_all(self, *roles: str) -> bool:
        return bool(roles) and all(role in self for role in roles)

    def has_any(self, *roles: str) -> bool:
        return any(role in self for role in roles)

    def primary(self) -> str | None:
        for role in PRIMARY_ROLE_ORDER:
            if role in self:
                return role
        return None


def resolve(user) -> RoleSet:
    """
    Roles efectivos del usuario. Si no hay usuario o no tiene la colección
    de roles cargada devuelve un conjunto vacío (nunca lanza).
    """
    if user is None:
        return RoleSet()
    roles = getattr(user, "roles", None)
    if not roles:
        return RoleSet()
    return RoleSet(getattr(role, "name", role) for role in roles)


def has_role(principal, role: str | Iterable[str]) -> bool:
    """
    Compatibilidad con el helper del frontend: con una lista exige TODOS los roles.
    Para "alguno de" usar resolve(user).has_any(...).
    """
    if principal is None:
        return False
    roles = resolve(principal)
    if isinstance(role, str):
        return roles.has_all(role)
    return roles.has_all(*role)


def assign_roles(db: Session, user: User, role_names: Iterable[str]) -> RoleSet:
    """
    Conecta (o crea si no existen) los roles indicados al usuario.
    Es idempotente: repetir la llamada no duplica nada.
    """
    wanted = list(dict.fromkeys(role_names))
    invalid = [name for name in wanted if name not in ROLES]
    if invalid:
        raise ValueError(f"Roles no válidos: {', '.join(invalid)}")

    current = {role.name for role in user.roles}
    for name in wanted:
        if name in current:
            continue
        role = db.query(Role).filter(Role.name == name).first()
        if not role:
            role = Role(name=name)
            db.add(role)
        user.roles.append(role)
        current.add(name)

    db.commit()
    db.refresh(user)
    logger.info("Roles de usuario %s: %s", user.id, sorted(current))
    return resolve(user)
