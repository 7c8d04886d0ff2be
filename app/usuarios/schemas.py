"""
Esquemas Pydantic para las respuestas del recurso usuarios.

Los cuerpos de entrada se validan campo a campo en ``validators`` para
respetar el orden de las comprobaciones y los mensajes existentes; aquí solo
se definen las formas de salida. Ninguna incluye la contraseña.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

Rol = Literal["cliente", "admin"]


class UsuarioPublic(BaseModel):
    """Usuario tal como se devuelve en las lecturas."""

    id: int = Field(..., description="ID único del usuario")
    nombre: str = Field(..., description="Nombre del usuario")
    email: str = Field(..., description="Correo electrónico")
    rol: Rol = Field(..., description="Rol del usuario")
    fechacreacion: datetime | None = Field(None, description="Fecha de creación")
    activo: int = Field(..., description="1 si está activo, 0 si no")

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "example": {
                "id": 1,
                "nombre": "Ana",
                "email": "ana@ejemplo.com",
                "rol": "cliente",
                "fechacreacion": "2024-01-01T00:00:00",
                "activo": 1,
            }
        },
    }


class UsuarioCreado(BaseModel):
    """Respuesta de la creación: el ID asignado y los campos enviados."""

    id: int
    nombre: str
    email: str
    rol: Rol
    activo: int

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": 7,
                "nombre": "Ana",
                "email": "ana@x.com",
                "rol": "cliente",
                "activo": 1,
            }
        }
    }


class UsuarioActualizado(BaseModel):
    """Campos modificados por una actualización parcial.

    Los campos que no llegaron en la petición se omiten de la respuesta.
    """

    nombre: str | None = None
    email: str | None = None
    rol: Rol | None = None
    activo: int | None = None
