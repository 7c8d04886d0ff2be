"""Módulo de configuración de la aplicación.

Este módulo proporciona una forma de cargar y validar la configuración
desde variables de entorno, con valores por defecto y tipos fuertes.
"""

import json
from functools import lru_cache
from typing import Annotated

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Configuración principal de la aplicación.

    Los valores se leen del entorno o del archivo ``.env``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )
    # ======================
    # Configuración de la aplicación
    # ======================
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    PROJECT_NAME: str = Field(
        "API de Usuarios",
        description="Nombre del proyecto para documentación y metadatos",
    )
    VERSION: str = Field("0.1.0", description="Versión de la API")
    API_PREFIX: str = Field(
        "",
        description="Prefijo común para las rutas de la API (vacío = /usuarios)",
    )

    # Dominios permitidos para CORS
    CORS_ORIGINS: Annotated[list[str], NoDecode] = ["http://localhost:3000"]  # Frontend por defecto

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def validate_cors_origins(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            return json.loads(v)
        elif isinstance(v, list):
            return v
        raise ValueError(
            "CORS_ORIGINS debe ser una lista o una cadena separada por comas"
        )

    # ======================
    # Base de datos
    # ======================
    DATABASE_URL: str = "postgresql+asyncpg://postgres:postgres@db:5432/usuarios_db"
    DATABASE_ECHO: bool = False
    DATABASE_POOL_SIZE: int = 5
    DATABASE_MAX_OVERFLOW: int = 10

    # ======================
    # Seguridad
    # ======================
    PASSWORD_HASH_ROUNDS: int = Field(
        10,
        ge=4,
        le=31,
        description="Factor de trabajo (rounds) de bcrypt para hashear contraseñas",
    )

    # ======================
    # Logging
    # ======================
    LOG_LEVEL: str = Field("INFO", description="Nivel de logging de la aplicación")
    LOG_FILE: str | None = Field(
        None, description="Ruta del archivo de log; si es None solo se usa la consola"
    )

    # ======================
    # Configuraciones de desarrollo
    # ======================
    FIRST_ADMIN_NOMBRE: str = Field(
        "Administrador", description="Nombre del primer administrador"
    )
    FIRST_ADMIN_EMAIL: str | None = Field(
        None, description="Email del primer administrador (solo desarrollo)"
    )
    FIRST_ADMIN_PASSWORD: SecretStr | None = Field(
        None, description="Contraseña del primer administrador (solo desarrollo)"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"LOG_LEVEL inválido: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Obtiene la configuración de la aplicación.

    Esta función está decorada con @lru_cache para evitar múltiples lecturas
    del archivo .env y mantener una única instancia de configuración.

    Returns:
        Settings: Instancia de configuración cargada desde las variables de entorno.
    """
    return Settings()


# Instancia de configuración para importación directa
settings = get_settings()
