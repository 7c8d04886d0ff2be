"""Módulo de errores personalizados para la aplicación.

Este módulo define las clases de error personalizadas utilizadas en toda la aplicación,
proporcionando un manejo de errores consistente y tipado.

El cuerpo de respuesta de cada error es compatible con los clientes existentes:
``{"error": "..."}`` para errores de validación, conflicto y servidor, y
``{"message": "..."}`` para recursos inexistentes.
"""

from enum import Enum
from typing import Any

from fastapi import status


class ErrorCode(str, Enum):
    """Códigos de error estandarizados para la aplicación.

    Los códigos de error siguen el formato: PREFIJO_NUMERO
    """

    # Errores de validación (2000-2999)
    VALIDATION_ERROR = "VALID_2000"

    # Errores de recursos (3000-3999)
    RESOURCE_NOT_FOUND = "RES_3000"
    DUPLICATE_ENTRY = "RES_3001"

    # Errores de base de datos (4000-4999)
    DATABASE_ERROR = "DB_4000"

    # Errores del servidor (5000-5999)
    INTERNAL_SERVER_ERROR = "SRV_5000"


class AppError(Exception):
    """Clase base para todos los errores de la aplicación.

    Args:
        status_code: Código de estado HTTP
        code: Código de error personalizado
        message: Mensaje de error mostrado al cliente
        detail: Detalles internos (se registran, nunca se envían al cliente)
    """

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        code: str | ErrorCode = ErrorCode.INTERNAL_SERVER_ERROR,
        message: str = "Ha ocurrido un error inesperado",
        detail: str | dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.code = code.value if isinstance(code, ErrorCode) else code
        self.message = message
        self.detail = detail
        super().__init__(self.message)

    def to_response(self) -> dict[str, Any]:
        """Cuerpo JSON de la respuesta HTTP."""
        return {"error": self.message}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ValidationError(AppError):
    """Excepción lanzada cuando un campo de la petición no es válido."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            detail={"field": field} if field else None,
        )


class ConflictError(AppError):
    """Excepción lanzada cuando los datos chocan con un registro existente.

    Se responde con 400 para mantener la compatibilidad con los clientes.
    """

    def __init__(self, message: str, detail: str | dict[str, Any] | None = None) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            code=ErrorCode.DUPLICATE_ENTRY,
            message=message,
            detail=detail,
        )


class ResourceNotFoundError(AppError):
    """Excepción lanzada cuando no se encuentra un recurso solicitado."""

    def __init__(
        self,
        message: str = "Recurso no encontrado",
        resource_id: str | int | None = None,
    ) -> None:
        self.resource_id = resource_id
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            code=ErrorCode.RESOURCE_NOT_FOUND,
            message=message,
            detail={"id": resource_id} if resource_id is not None else None,
        )

    def to_response(self) -> dict[str, Any]:
        return {"message": self.message}


class DatabaseError(AppError):
    """Excepción lanzada cuando ocurre un error en la base de datos."""

    def __init__(
        self,
        message: str = "Error en la base de datos",
        detail: str | dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            code=ErrorCode.DATABASE_ERROR,
            message=message,
            detail=detail,
        )
