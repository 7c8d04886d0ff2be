"""
Repositorio para operaciones de base de datos relacionadas con usuarios.

Este módulo concentra todo el SQL sobre la tabla ``usuarios``, siguiendo el
patrón de repositorio. Cada método devuelve un ``Result``: las excepciones de
SQLAlchemy se registran y se convierten en ``Failure(DatabaseError)``.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.common.errors import DatabaseError
from app.common.result import Failure, Result, Success
from app.usuarios.errors import EmailAlreadyExistsError
from app.usuarios.models import PUBLIC_COLUMNS, Usuario

logger = logging.getLogger(__name__)

EMAIL_UNIQUE_INDEX = "uq_usuarios_email_lower"


def _es_email_duplicado(error: IntegrityError) -> bool:
    """Indica si la violación de integridad proviene del índice único del email."""
    return EMAIL_UNIQUE_INDEX in str(error.orig) or EMAIL_UNIQUE_INDEX in str(error)


class UsuarioRepository:
    """Repositorio para operaciones de base de datos de usuarios."""

    def __init__(self, db: AsyncSession):
        """Inicializa el repositorio con una sesión de base de datos."""
        self.db = db

    async def list_all(self) -> Result[List[Dict[str, Any]], DatabaseError]:
        """
        Lista todos los usuarios con la proyección pública.

        La contraseña no se selecciona, así que nunca llega a memoria.
        El orden es el natural del motor.
        """
        try:
            result = await self.db.execute(select(*PUBLIC_COLUMNS))
            return Success([dict(row) for row in result.mappings().all()])
        except SQLAlchemyError as e:
            logger.error(f"Error de base de datos al listar usuarios: {str(e)}", exc_info=True)
            return Failure(DatabaseError(message=str(e)))

    async def get_by_id(
        self, usuario_id: int
    ) -> Result[Optional[Dict[str, Any]], DatabaseError]:
        """
        Obtiene un usuario por su ID.

        Returns:
            Result con el usuario (proyección pública) o ``None`` si no existe.
        """
        try:
            result = await self.db.execute(
                select(*PUBLIC_COLUMNS).where(Usuario.id == usuario_id)
            )
            row = result.mappings().first()
            return Success(dict(row) if row is not None else None)
        except SQLAlchemyError as e:
            logger.error(
                f"Error de base de datos al obtener usuario por ID {usuario_id}: {str(e)}",
                exc_info=True,
            )
            return Failure(DatabaseError(message=str(e)))

    async def find_ids_by_email(
        self, email_lower: str, exclude_id: Optional[int] = None
    ) -> Result[List[int], DatabaseError]:
        """
        Busca usuarios cuyo email, en minúsculas, coincida con ``email_lower``.

        Args:
            email_lower: Email ya normalizado a minúsculas.
            exclude_id: ID a ignorar (el propio usuario al actualizar).

        Returns:
            Result con la lista de IDs que coinciden.
        """
        try:
            query = select(Usuario.id).where(func.lower(Usuario.email) == email_lower)
            if exclude_id is not None:
                query = query.where(Usuario.id != exclude_id)
            result = await self.db.execute(query)
            return Success(list(result.scalars().all()))
        except SQLAlchemyError as e:
            logger.error(
                f"Error de base de datos al buscar usuarios por email {email_lower}: {str(e)}",
                exc_info=True,
            )
            return Failure(DatabaseError(message=str(e)))

    async def insert(
        self,
        nombre: str,
        email: str,
        password_hash: str,
        rol: str,
        activo: int,
    ) -> Result[Dict[str, Any], EmailAlreadyExistsError | DatabaseError]:
        """
        Inserta un usuario nuevo.

        Args:
            nombre: Nombre ya recortado.
            email: Email ya recortado.
            password_hash: Hash de la contraseña.
            rol: Rol validado.
            activo: 0 o 1.

        Returns:
            Result con ``{"id", "fechacreacion"}`` asignados por la base de datos.
        """
        stmt = (
            insert(Usuario)
            .values(
                nombre=nombre,
                email=email,
                password=password_hash,
                rol=rol,
                activo=activo,
            )
            .returning(Usuario.id.label("id"), Usuario.fechacreacion)
        )
        try:
            result = await self.db.execute(stmt)
            row = result.mappings().one()
            await self.db.commit()
            return Success(dict(row))
        except IntegrityError as e:
            await self.db.rollback()
            if _es_email_duplicado(e):
                logger.warning(f"Índice único rechazó el email duplicado {email}")
                return Failure(EmailAlreadyExistsError(email))
            logger.error(f"Error de integridad al crear usuario {email}: {str(e)}", exc_info=True)
            return Failure(DatabaseError(message=str(e)))
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Error de base de datos al crear usuario {email}: {str(e)}", exc_info=True)
            return Failure(DatabaseError(message=str(e)))

    async def update_by_id(
        self, usuario_id: int, values: Dict[str, Any]
    ) -> Result[int, EmailAlreadyExistsError | DatabaseError]:
        """
        Ejecuta un único ``UPDATE`` parametrizado con las columnas indicadas.

        Args:
            usuario_id: ID del usuario a modificar.
            values: Pares atributo/valor ya validados.

        Returns:
            Result con el número de filas afectadas.
        """
        stmt = update(Usuario).where(Usuario.id == usuario_id).values(**values)
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
            return Success(result.rowcount)
        except IntegrityError as e:
            await self.db.rollback()
            if _es_email_duplicado(e) and "email" in values:
                logger.warning(f"Índice único rechazó el email duplicado {values['email']}")
                return Failure(EmailAlreadyExistsError(values["email"], otro=True))
            logger.error(
                f"Error de integridad al actualizar usuario {usuario_id}: {str(e)}", exc_info=True
            )
            return Failure(DatabaseError(message=str(e)))
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Error de base de datos al actualizar usuario {usuario_id}: {str(e)}", exc_info=True
            )
            return Failure(DatabaseError(message=str(e)))

    async def delete_by_id(self, usuario_id: int) -> Result[int, DatabaseError]:
        """
        Elimina (borrado físico) un usuario por su ID.

        Returns:
            Result con el número de filas eliminadas (0 si no existía).
        """
        try:
            result = await self.db.execute(delete(Usuario).where(Usuario.id == usuario_id))
            await self.db.commit()
            return Success(result.rowcount)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Error de base de datos al eliminar usuario {usuario_id}: {str(e)}", exc_info=True
            )
            return Failure(DatabaseError(message=str(e)))
