"""
Esquemas comunes para las respuestas de error de la API.

Se usan para documentar en OpenAPI los cuerpos que devuelven los manejadores
de excepciones de ``app.main``.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Cuerpo de los errores de validación, conflicto y servidor."""

    error: str = Field(..., description="Mensaje de error descriptivo")

    model_config = {
        "json_schema_extra": {
            "example": {"error": "El campo email debe ser un correo válido"}
        }
    }


class NotFoundResponse(BaseModel):
    """Cuerpo de las respuestas 404."""

    message: str = Field(..., description="Mensaje descriptivo")

    model_config = {
        "json_schema_extra": {"example": {"message": "Usuario no encontrado"}}
    }
