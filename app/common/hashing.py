# app/common/hashing.py
from fastapi.concurrency import run_in_threadpool
from passlib.context import CryptContext

from app.common.config import settings


class PasswordHasher:
    """Hash de contraseñas de un solo sentido con bcrypt.

    El factor de trabajo (rounds) es fijo para cada instancia. El cálculo del
    hash es costoso en CPU, por eso las variantes asíncronas lo ejecutan en el
    threadpool y no bloquean el event loop.
    """

    def __init__(self, rounds: int | None = None) -> None:
        self.rounds = rounds if rounds is not None else settings.PASSWORD_HASH_ROUNDS
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=self.rounds,
        )

    def hash_sync(self, password: str) -> str:
        """Genera un hash seguro de una contraseña.

        Args:
            password: Contraseña en texto plano

        Returns:
            str: Hash de la contraseña
        """
        return self._context.hash(password)

    def verify_sync(self, plain_password: str, hashed_password: str) -> bool:
        """Verifica si una contraseña coincide con un hash."""
        return self._context.verify(plain_password, hashed_password)

    async def hash(self, password: str) -> str:
        return await run_in_threadpool(self.hash_sync, password)
