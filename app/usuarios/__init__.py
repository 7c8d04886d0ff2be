"""
Módulo de usuarios.

Este módulo contiene el modelo, el repositorio, la lógica de negocio y las
rutas del recurso ``/usuarios``.
"""

from . import errors, models, schemas, service, validators
from .models import Usuario
from .repository import UsuarioRepository
from .schemas import UsuarioActualizado, UsuarioCreado, UsuarioPublic
from .service import UsuarioService

__all__ = [
    "errors",
    "models",
    "schemas",
    "service",
    "validators",
    "Usuario",
    "UsuarioRepository",
    "UsuarioService",
    "UsuarioPublic",
    "UsuarioCreado",
    "UsuarioActualizado",
]
