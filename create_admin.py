import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Agregar el directorio raíz al PYTHONPATH para importar correctamente los módulos
sys.path.append(str(Path(__file__).parent))

from returns.pipeline import is_successful

from app.common.config import settings
from app.common.database import build_engine, build_sessionmaker, create_tables
from app.common.hashing import PasswordHasher
from app.common.logging import setup_logging
from app.usuarios.errors import EmailAlreadyExistsError
from app.usuarios.repository import UsuarioRepository
from app.usuarios.service import UsuarioService

logger = logging.getLogger("create_admin")


async def init_db(nombre: str, email: str, password: str, database_url: str) -> int:
    """Crea la tabla de usuarios si no existe y registra un administrador.

    Returns:
        Código de salida del proceso.
    """
    engine = build_engine(database_url)
    try:
        await create_tables(engine)

        async with build_sessionmaker(engine)() as session:
            service = UsuarioService(UsuarioRepository(session), PasswordHasher())
            result = await service.crear_usuario(
                {"nombre": nombre, "email": email, "password": password, "rol": "admin"}
            )

        if is_successful(result):
            logger.info(f"Administrador creado con ID {result.unwrap()['id']}")
            return 0

        error = result.failure()
        if isinstance(error, EmailAlreadyExistsError):
            logger.info(f"El administrador {email} ya existe, no se hace nada")
            return 0
        logger.error(f"No se pudo crear el administrador: {error.message}")
        return 1
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Crea el primer usuario administrador")
    parser.add_argument("--nombre", default=settings.FIRST_ADMIN_NOMBRE)
    parser.add_argument("--email", default=settings.FIRST_ADMIN_EMAIL)
    parser.add_argument(
        "--password",
        default=(
            settings.FIRST_ADMIN_PASSWORD.get_secret_value()
            if settings.FIRST_ADMIN_PASSWORD
            else None
        ),
    )
    parser.add_argument("--database-url", default=str(settings.DATABASE_URL))
    args = parser.parse_args(argv)

    if not args.email or not args.password:
        parser.error("Defina FIRST_ADMIN_EMAIL y FIRST_ADMIN_PASSWORD o use --email/--password")

    setup_logging(log_level=settings.LOG_LEVEL)
    return asyncio.run(init_db(args.nombre, args.email, args.password, args.database_url))


if __name__ == "__main__":
    sys.exit(main())
