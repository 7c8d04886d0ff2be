import pytest
from sqlalchemy import select

from app.common.database import build_engine, build_sessionmaker
from app.usuarios.models import Usuario
from create_admin import init_db, main


@pytest.mark.asyncio
class TestInitDb:
    async def test_crea_tabla_y_administrador(self, tmp_path):
        url = f"sqlite+aiosqlite:///{tmp_path / 'admin.db'}"

        assert await init_db("Admin", "admin@x.com", "admin123", url) == 0
        # Una segunda ejecución no duplica al administrador
        assert await init_db("Admin", "ADMIN@x.com", "admin123", url) == 0

        engine = build_engine(url)
        try:
            async with build_sessionmaker(engine)() as session:
                filas = (await session.execute(select(Usuario.email, Usuario.rol))).all()
        finally:
            await engine.dispose()
        assert [(f.email, f.rol) for f in filas] == [("admin@x.com", "admin")]

    async def test_password_invalida(self, tmp_path):
        url = f"sqlite+aiosqlite:///{tmp_path / 'admin.db'}"

        assert await init_db("Admin", "admin@x.com", "123", url) == 1

    async def test_password_que_bcrypt_no_acepta(self, tmp_path):
        url = f"sqlite+aiosqlite:///{tmp_path / 'admin.db'}"

        assert await init_db("Admin", "admin@x.com", "admin\x00123", url) == 1


def test_main_exige_email_y_password():
    with pytest.raises(SystemExit) as exc_info:
        main(["--email", ""])
    assert exc_info.value.code == 2
