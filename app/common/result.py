"""Utilidades sobre el tipo ``Result`` de la biblioteca ``returns``.

Repositorios y servicios devuelven ``Success``/``Failure`` en lugar de lanzar
excepciones; la capa HTTP convierte el ``Failure`` en excepción con
``get_or_raise`` para que lo atienda el manejador de ``AppError``.
"""

from __future__ import annotations

from typing import Callable, TypeVar, cast

from returns.pipeline import is_successful
from returns.result import Failure, Result, Success

_ValueType = TypeVar("_ValueType", covariant=True)
_ErrorType = TypeVar("_ErrorType", contravariant=True)
_NewErrorType = TypeVar("_NewErrorType")

__all__ = [
    'Result',
    'Success',
    'Failure',
    'is_successful',
    'map_failure',
    'get_or_raise',
]


def map_failure(
    result: Result[_ValueType, _ErrorType],
    mapper: Callable[[_ErrorType], _NewErrorType],
) -> Result[_ValueType, _NewErrorType]:
    """Aplica ``mapper`` al error de un ``Failure``; un ``Success`` pasa intacto.

    El servicio de usuarios lo usa para sustituir el mensaje de los errores de
    base de datos en las operaciones de escritura.
    """
    if is_successful(result):
        return cast(Result[_ValueType, _NewErrorType], result)
    return Failure(mapper(cast(_ErrorType, result.failure())))


def get_or_raise(result: Result[_ValueType, Exception]) -> _ValueType:
    """Devuelve el valor del ``Success`` o lanza el error del ``Failure``.

    Raises:
        Exception: El error contenido (normalmente un ``AppError``).
    """
    if is_successful(result):
        return cast(_ValueType, result.unwrap())
    raise cast(Exception, result.failure())
