"""Módulo común con utilidades y configuraciones compartidas.

Este paquete proporciona componentes reutilizables a través de toda la
aplicación, incluyendo:

- Configuración centralizada
- Manejo de base de datos
- Manejo de errores
- Hash de contraseñas
- Utilidades para el patrón Result
"""

from app.common.config import Settings, get_settings, settings
from app.common.errors import (
    AppError,
    ConflictError,
    DatabaseError,
    ErrorCode,
    ResourceNotFoundError,
    ValidationError,
)
from app.common.hashing import PasswordHasher
from app.common.result import Failure, Result, Success, get_or_raise, map_failure

__all__ = [
    # Configuración
    "Settings",
    "get_settings",
    "settings",
    # Errores
    "AppError",
    "ConflictError",
    "DatabaseError",
    "ErrorCode",
    "ResourceNotFoundError",
    "ValidationError",
    # Seguridad
    "PasswordHasher",
    # Result
    "Result",
    "Success",
    "Failure",
    "get_or_raise",
    "map_failure",
]
