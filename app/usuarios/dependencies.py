"""Dependencias de FastAPI para el recurso usuarios."""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.common.database import get_db
from app.common.hashing import PasswordHasher

from .repository import UsuarioRepository
from .service import UsuarioService


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Hasher compartido; su contexto de passlib no tiene estado por petición."""
    return PasswordHasher()


async def get_usuario_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UsuarioService:
    """Construye el servicio con el repositorio de la sesión actual."""
    return UsuarioService(UsuarioRepository(db), hasher)
