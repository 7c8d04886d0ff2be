"""
Validación y coerción de los campos de usuario.

Cada función recibe el valor crudo del cuerpo JSON y devuelve el valor ya
normalizado, o lanza ``ValidationError`` con el mensaje que verá el cliente.
Las reglas son las mismas al crear y al actualizar; solo cambia el texto del
mensaje (al crear los campos obligatorios se anuncian como "requeridos").
"""

import math
from typing import Any

from app.common.errors import ValidationError

from .models import ROLES

CAMPOS_ACTUALIZABLES = ("nombre", "email", "password", "rol", "activo")
PASSWORD_MIN_LENGTH = 6

_MENSAJES = {
    "nombre": (
        "El campo nombre es requerido y debe ser una cadena válida",
        "El campo nombre debe ser una cadena válida",
    ),
    "email": (
        "El campo email es requerido y debe ser un email válido",
        "El campo email debe ser un correo válido",
    ),
    "password": (
        f"El campo password es requerido y debe tener al menos {PASSWORD_MIN_LENGTH} caracteres",
        f"El campo password debe tener al menos {PASSWORD_MIN_LENGTH} caracteres",
    ),
}
MENSAJE_ROL = 'El campo rol debe ser "cliente" o "admin"'
MENSAJE_ACTIVO = "El campo activo debe ser 0 o 1"
MENSAJE_PASSWORD_NO_HASHEABLE = "El campo password contiene caracteres no permitidos"


def _mensaje(campo: str, creando: bool) -> str:
    al_crear, al_actualizar = _MENSAJES[campo]
    return al_crear if creando else al_actualizar


def validar_nombre(valor: Any, creando: bool = False) -> str:
    """Devuelve el nombre sin espacios sobrantes; debe quedar no vacío."""
    if not isinstance(valor, str) or not valor.strip():
        raise ValidationError(_mensaje("nombre", creando), field="nombre")
    return valor.strip()


def validar_email(valor: Any, creando: bool = False) -> str:
    """Devuelve el email recortado, conservando mayúsculas y minúsculas."""
    if not isinstance(valor, str) or "@" not in valor:
        raise ValidationError(_mensaje("email", creando), field="email")
    return valor.strip()


def validar_password(valor: Any, creando: bool = False) -> str:
    if not isinstance(valor, str) or len(valor) < PASSWORD_MIN_LENGTH:
        raise ValidationError(_mensaje("password", creando), field="password")
    return valor


def validar_rol(valor: Any) -> str:
    if not isinstance(valor, str) or valor not in ROLES:
        raise ValidationError(MENSAJE_ROL, field="rol")
    return valor


def coerce_activo(valor: Any) -> int:
    """Convierte ``activo`` a 0 o 1.

    Acepta los enteros 0 y 1, los flotantes 0.0 y 1.0 y las cadenas
    numéricas que representen esos valores ("0", "1", " 1 ", "1.0").
    Rechaza booleanos, ``None``, cadenas vacías y cualquier otro valor.

    Raises:
        ValidationError: si el valor no pertenece al conjunto aceptado.
    """
    numero: float | None = None
    if isinstance(valor, bool):
        numero = None
    elif isinstance(valor, (int, float)):
        numero = float(valor)
    elif isinstance(valor, str) and valor.strip():
        try:
            numero = float(valor.strip())
        except ValueError:
            numero = None

    if numero is None or math.isnan(numero) or numero not in (0.0, 1.0):
        raise ValidationError(MENSAJE_ACTIVO, field="activo")
    return int(numero)


class UpdateBuilder:
    """Acumula las columnas que cambian en una actualización parcial.

    Solo se agregan campos que ya pasaron la validación. ``values()`` alimenta
    una única sentencia ``UPDATE`` parametrizada y ``publicos()`` el cuerpo
    de la respuesta, que nunca incluye la contraseña.
    """

    _PRIVADOS = frozenset({"password"})

    def __init__(self) -> None:
        self._valores: dict[str, Any] = {}
        self._publicos: dict[str, Any] = {}

    def set(self, campo: str, valor: Any) -> "UpdateBuilder":
        """Registra ``campo = valor``.

        Args:
            campo: Atributo del modelo ``Usuario``.
            valor: Valor ya validado que se escribirá en la base de datos.
        """
        if campo not in CAMPOS_ACTUALIZABLES:
            raise KeyError(f"Campo no actualizable: {campo}")
        self._valores[campo] = valor
        if campo not in self._PRIVADOS:
            self._publicos[campo] = valor
        return self

    def values(self) -> dict[str, Any]:
        return dict(self._valores)

    def publicos(self) -> dict[str, Any]:
        return dict(self._publicos)

    def __len__(self) -> int:
        return len(self._valores)

    def __bool__(self) -> bool:
        return bool(self._valores)

    def __repr__(self) -> str:
        return f"UpdateBuilder(campos={list(self._valores)})"
