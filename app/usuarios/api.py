"""
Módulo de rutas de la API para la gestión de usuarios.

Este módulo define los endpoints CRUD del recurso ``/usuarios``. Los errores
devueltos por el servicio se lanzan como ``AppError`` y los convierte en
respuesta JSON el manejador registrado en ``app.main``.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from app.common.result import get_or_raise
from app.common.schemas import ErrorResponse, NotFoundResponse

from . import schemas
from .dependencies import get_usuario_service
from .service import UsuarioService

router = APIRouter(prefix="/usuarios", tags=["usuarios"])

_ERROR_500 = {status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}}
_ERROR_400 = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}
_ERROR_404 = {status.HTTP_404_NOT_FOUND: {"model": NotFoundResponse}}


@router.get(
    "",
    response_model=list[schemas.UsuarioPublic],
    summary="Listar usuarios",
    description="Obtiene todos los usuarios registrados, sin la contraseña.",
    responses={**_ERROR_500},
)
async def listar_usuarios(
    service: UsuarioService = Depends(get_usuario_service),
) -> list[dict[str, Any]]:
    return get_or_raise(await service.listar_usuarios())


@router.get(
    "/{usuario_id}",
    response_model=schemas.UsuarioPublic,
    summary="Obtener un usuario por ID",
    responses={**_ERROR_404, **_ERROR_500},
)
async def obtener_usuario(
    usuario_id: str,
    service: UsuarioService = Depends(get_usuario_service),
) -> dict[str, Any]:
    """
    Obtiene un usuario por su ID.

    Raises:
        UsuarioNotFoundError: Si el usuario no existe (404).
        DatabaseError: Si falla la base de datos (500).
    """
    return get_or_raise(await service.obtener_usuario(usuario_id))


@router.post(
    "",
    response_model=schemas.UsuarioCreado,
    status_code=status.HTTP_201_CREATED,
    summary="Crear un nuevo usuario",
    description="Crea un usuario con nombre, email y password; rol y activo son opcionales.",
    responses={**_ERROR_400, **_ERROR_500},
)
async def crear_usuario(
    payload: dict[str, Any] = Body(
        ...,
        examples=[{"nombre": "Ana", "email": "ana@x.com", "password": "secret1"}],
    ),
    service: UsuarioService = Depends(get_usuario_service),
) -> dict[str, Any]:
    """
    Crea un nuevo usuario.

    Raises:
        ValidationError: Si algún campo no es válido (400).
        EmailAlreadyExistsError: Si el email ya está registrado (400).
        DatabaseError: Si falla la base de datos (500, mensaje genérico).
    """
    return get_or_raise(await service.crear_usuario(payload))


@router.api_route(
    "/{usuario_id}",
    methods=["PATCH", "PUT"],
    response_model=schemas.UsuarioActualizado,
    response_model_exclude_unset=True,
    summary="Actualizar un usuario",
    description="Actualiza solo los campos enviados y devuelve esos mismos campos.",
    responses={**_ERROR_400, **_ERROR_404, **_ERROR_500},
)
async def actualizar_usuario(
    usuario_id: str,
    payload: dict[str, Any] = Body(..., examples=[{"rol": "admin"}]),
    service: UsuarioService = Depends(get_usuario_service),
) -> dict[str, Any]:
    return get_or_raise(await service.actualizar_usuario(usuario_id, payload))


@router.delete(
    "/{usuario_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Eliminar un usuario",
    description="Elimina definitivamente un usuario.",
    responses={**_ERROR_404, **_ERROR_500},
)
async def eliminar_usuario(
    usuario_id: str,
    service: UsuarioService = Depends(get_usuario_service),
) -> Response:
    get_or_raise(await service.eliminar_usuario(usuario_id))
    # Si llegamos aquí, la operación fue exitosa y no se devuelve contenido.
    return Response(status_code=status.HTTP_204_NO_CONTENT)
