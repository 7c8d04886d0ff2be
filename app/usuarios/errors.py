"""Errores específicos para el módulo de usuarios."""


from app.common.errors import ConflictError, ResourceNotFoundError, ValidationError

MENSAJE_NO_ENCONTRADO = "Usuario no encontrado"
MENSAJE_ERROR_CREAR = "Ocurrió un error interno al crear el usuario"
MENSAJE_ERROR_ACTUALIZAR = "Ocurrió un error interno al actualizar el usuario"


class UsuarioNotFoundError(ResourceNotFoundError):
    """Excepción lanzada cuando no existe un usuario con el ID indicado."""

    def __init__(self, usuario_id: int | str | None = None) -> None:
        super().__init__(message=MENSAJE_NO_ENCONTRADO, resource_id=usuario_id)


class EmailAlreadyExistsError(ConflictError):
    """Excepción lanzada cuando el email ya pertenece a otro usuario.

    Args:
        email: Email recibido en la petición, tal como llegó.
        otro: True cuando el conflicto se detecta al actualizar un usuario
            existente ("otro usuario").
    """

    def __init__(self, email: str, otro: bool = False) -> None:
        self.email = email
        quien = "otro usuario" if otro else "un usuario"
        super().__init__(
            message=f'Ya existe {quien} con el email "{email}"',
            detail={"email": email},
        )


class SinCamposError(ValidationError):
    """La petición de actualización no trae ningún campo reconocido."""

    def __init__(self) -> None:
        super().__init__(
            "Debe proporcionar al menos un campo para actualizar: "
            "nombre, email, password, rol, activo"
        )


class SinDatosValidosError(ValidationError):
    """No quedó ningún campo en la sentencia de actualización."""

    def __init__(self) -> None:
        super().__init__("No hay datos válidos para actualizar")
