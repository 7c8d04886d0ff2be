"""Módulo de configuración de la base de datos.

Este módulo proporciona la configuración inicial para SQLAlchemy,
incluyendo la creación de la sesión de base de datos y la clase Base para los modelos.
"""
from functools import lru_cache
from typing import Any, AsyncGenerator

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.common.config import settings

# Convenciones de nombres para constraints
# Ver: https://alembic.sqlalchemy.org/en/latest/naming.html
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Metadatos con las convenciones de nombres
metadata = MetaData(naming_convention=convention)


class Base(DeclarativeBase):
    """Clase base para todos los modelos SQLAlchemy."""

    metadata = metadata


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Crea un motor asíncrono para la URL indicada.

    SQLite no admite los parámetros de tamaño del pool, así que solo se
    aplican a los demás motores.
    """
    options: dict[str, Any] = {"echo": echo}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_pre_ping=True,  # Verifica la conexión antes de usarla
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
        )
    return create_async_engine(database_url, **options)


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Importante para operaciones asíncronas
        autoflush=False,
    )


@lru_cache
def get_engine() -> AsyncEngine:
    """Motor de la aplicación, creado en el primer uso."""
    return build_engine(str(settings.DATABASE_URL), echo=settings.DATABASE_ECHO)


@lru_cache
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return build_sessionmaker(get_engine())


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Obtiene una sesión de base de datos por petición.

    Las escrituras las confirma el repositorio; aquí solo se revierte lo
    pendiente si el manejador lanza una excepción.

    Yields:
        AsyncSession: Sesión de base de datos asíncrona
    """
    async with get_sessionmaker()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def create_tables(engine: AsyncEngine) -> None:
    """Crea las tablas registradas en ``Base.metadata`` que no existan."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Cierra las conexiones del pool si el motor llegó a crearse."""
    if get_engine.cache_info().currsize:
        await get_engine().dispose()
