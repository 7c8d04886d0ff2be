"""
Lógica de negocio del recurso usuarios.

``UsuarioService`` implementa las cinco operaciones CRUD. No guarda estado
entre llamadas: el repositorio (store) y el hasher se inyectan al construirlo,
lo que permite sustituirlos en las pruebas.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from app.common.errors import AppError, DatabaseError, ValidationError
from app.common.hashing import PasswordHasher
from app.common.result import Failure, Result, Success, is_successful, map_failure
from app.usuarios.errors import (
    MENSAJE_ERROR_ACTUALIZAR,
    MENSAJE_ERROR_CREAR,
    EmailAlreadyExistsError,
    SinCamposError,
    SinDatosValidosError,
    UsuarioNotFoundError,
)
from app.usuarios.models import ACTIVO_POR_DEFECTO, ROL_POR_DEFECTO
from app.usuarios.repository import UsuarioRepository
from app.usuarios.validators import (
    CAMPOS_ACTUALIZABLES,
    MENSAJE_PASSWORD_NO_HASHEABLE,
    UpdateBuilder,
    coerce_activo,
    validar_email,
    validar_nombre,
    validar_password,
    validar_rol,
)

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"[0-9]+")
_MAX_ID = 2**31 - 1


def parse_usuario_id(raw: Any) -> Optional[int]:
    """Convierte el ID recibido en la ruta a entero.

    Un valor que no sea un entero positivo representable no puede coincidir
    con ninguna fila, por lo que se devuelve ``None``.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if 0 <= raw <= _MAX_ID else None
    if not isinstance(raw, str) or not _ID_PATTERN.fullmatch(raw.strip()):
        return None
    value = int(raw.strip())
    return value if value <= _MAX_ID else None


def _ocultar_error(mensaje: str):
    """Sustituye el mensaje de los errores inesperados de escritura.

    Los errores de negocio (validación, conflicto) pasan tal cual.
    """

    def mapper(error: AppError) -> AppError:
        if isinstance(error, DatabaseError):
            logger.error(f"{mensaje}: {error.message}")
            return DatabaseError(message=mensaje, detail=error.message)
        return error

    return mapper


class UsuarioService:
    def __init__(self, repository: UsuarioRepository, hasher: PasswordHasher):
        self.repository = repository
        self.hasher = hasher

    async def _hashear(self, password: str) -> str:
        """Hashea la contraseña; bcrypt rechaza algunas entradas (bytes nulos)."""
        try:
            return await self.hasher.hash(password)
        except ValueError as e:
            raise ValidationError(MENSAJE_PASSWORD_NO_HASHEABLE, field="password") from e

    async def listar_usuarios(self) -> Result[List[Dict[str, Any]], DatabaseError]:
        """Lista todos los usuarios (sin contraseña)."""
        return await self.repository.list_all()

    async def obtener_usuario(
        self, usuario_id: Any
    ) -> Result[Dict[str, Any], UsuarioNotFoundError | DatabaseError]:
        """Obtiene un usuario por su ID."""
        parsed_id = parse_usuario_id(usuario_id)
        if parsed_id is None:
            return Failure(UsuarioNotFoundError(usuario_id))

        result = await self.repository.get_by_id(parsed_id)
        if not is_successful(result):
            return result
        usuario = result.unwrap()
        if usuario is None:
            return Failure(UsuarioNotFoundError(parsed_id))
        return Success(usuario)

    async def crear_usuario(self, payload: Dict[str, Any]) -> Result[Dict[str, Any], AppError]:
        """
        Crea un usuario.

        Los campos se validan en orden (nombre, email, password, rol, activo) y
        el primer error corta el proceso. Después se comprueba que el email no
        exista, se hashea la contraseña y se inserta la fila.

        Returns:
            Result con ``{id, nombre, email, rol, activo}``; nunca la contraseña.
        """
        result = await self._crear(payload)
        return map_failure(result, _ocultar_error(MENSAJE_ERROR_CREAR))

    async def _crear(self, payload: Dict[str, Any]) -> Result[Dict[str, Any], AppError]:
        try:
            nombre = validar_nombre(payload.get("nombre"), creando=True)
            email = validar_email(payload.get("email"), creando=True)
            password = validar_password(payload.get("password"), creando=True)
            rol = validar_rol(payload["rol"]) if "rol" in payload else ROL_POR_DEFECTO
            activo = (
                coerce_activo(payload["activo"]) if "activo" in payload else ACTIVO_POR_DEFECTO
            )
        except ValidationError as e:
            return Failure(e)

        existentes = await self.repository.find_ids_by_email(email.lower())
        if not is_successful(existentes):
            return existentes
        if existentes.unwrap():
            return Failure(EmailAlreadyExistsError(email))

        try:
            password_hash = await self._hashear(password)
        except ValidationError as e:
            return Failure(e)
        insertado = await self.repository.insert(
            nombre=nombre,
            email=email,
            password_hash=password_hash,
            rol=rol,
            activo=activo,
        )
        if not is_successful(insertado):
            return insertado

        nuevo_id = insertado.unwrap()["id"]
        logger.info(f"Usuario {nuevo_id} creado ({email}, rol {rol})")
        return Success(
            {"id": nuevo_id, "nombre": nombre, "email": email, "rol": rol, "activo": activo}
        )

    async def actualizar_usuario(
        self, usuario_id: Any, payload: Dict[str, Any]
    ) -> Result[Dict[str, Any], AppError]:
        """
        Actualiza parcialmente un usuario.

        Primero se exige al menos un campo y que el usuario exista. Luego cada
        campo presente se valida en orden y se acumula en un ``UpdateBuilder``;
        la escritura ocurre una sola vez, cuando todos los campos son válidos.

        Returns:
            Result con los campos actualizados (sin contraseña).
        """
        result = await self._actualizar(usuario_id, payload)
        return map_failure(result, _ocultar_error(MENSAJE_ERROR_ACTUALIZAR))

    async def _actualizar(
        self, usuario_id: Any, payload: Dict[str, Any]
    ) -> Result[Dict[str, Any], AppError]:
        if not any(campo in payload for campo in CAMPOS_ACTUALIZABLES):
            return Failure(SinCamposError())

        existente = await self.obtener_usuario(usuario_id)
        if not is_successful(existente):
            return existente
        target_id = existente.unwrap()["id"]

        builder = UpdateBuilder()
        try:
            if "nombre" in payload:
                builder.set("nombre", validar_nombre(payload["nombre"]))

            if "email" in payload:
                email = validar_email(payload["email"])
                otros = await self.repository.find_ids_by_email(
                    email.lower(), exclude_id=target_id
                )
                if not is_successful(otros):
                    return otros
                if otros.unwrap():
                    return Failure(EmailAlreadyExistsError(email, otro=True))
                builder.set("email", email)

            if "password" in payload:
                password = validar_password(payload["password"])
                builder.set("password", await self._hashear(password))

            if "rol" in payload:
                builder.set("rol", validar_rol(payload["rol"]))

            if "activo" in payload:
                builder.set("activo", coerce_activo(payload["activo"]))
        except ValidationError as e:
            return Failure(e)

        if not builder:
            return Failure(SinDatosValidosError())

        actualizado = await self.repository.update_by_id(target_id, builder.values())
        if not is_successful(actualizado):
            return actualizado

        logger.info(f"Usuario {target_id} actualizado: {sorted(builder.values())}")
        return Success(builder.publicos())

    async def eliminar_usuario(
        self, usuario_id: Any
    ) -> Result[None, UsuarioNotFoundError | DatabaseError]:
        """Elimina un usuario (borrado físico)."""
        parsed_id = parse_usuario_id(usuario_id)
        if parsed_id is None:
            return Failure(UsuarioNotFoundError(usuario_id))

        result = await self.repository.delete_by_id(parsed_id)
        if not is_successful(result):
            return result
        if result.unwrap() == 0:
            return Failure(UsuarioNotFoundError(parsed_id))

        logger.info(f"Usuario {parsed_id} eliminado")
        return Success(None)
