from datetime import datetime
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio

from app.common.database import build_engine, build_sessionmaker, create_tables
from app.common.errors import DatabaseError
from app.common.hashing import PasswordHasher
from app.common.result import Failure, Result, Success
from app.usuarios.errors import EmailAlreadyExistsError
from app.usuarios.repository import UsuarioRepository
from app.usuarios.service import UsuarioService

# Importar el modelo registra la tabla en Base.metadata
from app.usuarios import models  # noqa: F401


@pytest.fixture
def hasher():
    """Hasher con el mínimo de rounds que admite bcrypt, para pruebas rápidas."""
    return PasswordHasher(rounds=4)


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Motor SQLite en un archivo temporal con la tabla usuarios creada."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'usuarios.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    async with build_sessionmaker(engine)() as session:
        yield session


@pytest.fixture
def repository(db_session):
    return UsuarioRepository(db_session)


@pytest.fixture
def service(repository, hasher):
    return UsuarioService(repository, hasher)


class InMemoryUsuarioRepository:
    """Doble de prueba del repositorio que guarda las filas en un diccionario.

    Reproduce el contrato de ``UsuarioRepository``: devuelve ``Result`` y
    nunca expone la contraseña en las lecturas. ``fail_with`` hace que todas
    las operaciones devuelvan ``Failure(DatabaseError(fail_with))``.
    """

    def __init__(self) -> None:
        self.rows: Dict[int, Dict[str, Any]] = {}
        self.next_id = 1
        self.fail_with: Optional[str] = None

    def _public(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in row.items() if k != "password"}

    def _failure(self) -> Result:
        return Failure(DatabaseError(message=self.fail_with))

    async def list_all(self) -> Result[List[Dict[str, Any]], DatabaseError]:
        if self.fail_with is not None:
            return self._failure()
        return Success([self._public(r) for r in self.rows.values()])

    async def get_by_id(self, usuario_id: int):
        if self.fail_with is not None:
            return self._failure()
        row = self.rows.get(usuario_id)
        return Success(self._public(row) if row else None)

    async def find_ids_by_email(self, email_lower: str, exclude_id: Optional[int] = None):
        if self.fail_with is not None:
            return self._failure()
        ids = [
            row_id
            for row_id, row in self.rows.items()
            if row["email"].lower() == email_lower and row_id != exclude_id
        ]
        return Success(ids)

    async def insert(self, nombre, email, password_hash, rol, activo):
        if self.fail_with is not None:
            return self._failure()
        if any(r["email"].lower() == email.lower() for r in self.rows.values()):
            return Failure(EmailAlreadyExistsError(email))
        row_id = self.next_id
        self.next_id += 1
        self.rows[row_id] = {
            "id": row_id,
            "nombre": nombre,
            "email": email,
            "password": password_hash,
            "rol": rol,
            "fechacreacion": datetime(2024, 1, 1, 12, 0, 0),
            "activo": activo,
        }
        return Success({"id": row_id, "fechacreacion": self.rows[row_id]["fechacreacion"]})

    async def update_by_id(self, usuario_id: int, values: Dict[str, Any]):
        if self.fail_with is not None:
            return self._failure()
        if usuario_id not in self.rows:
            return Success(0)
        self.rows[usuario_id].update(values)
        return Success(1)

    async def delete_by_id(self, usuario_id: int):
        if self.fail_with is not None:
            return self._failure()
        return Success(1 if self.rows.pop(usuario_id, None) else 0)


@pytest.fixture
def memory_repository():
    return InMemoryUsuarioRepository()
