import pytest
from fastapi.testclient import TestClient

from app.common.hashing import PasswordHasher
from app.main import app as fastapi_app
from app.usuarios.dependencies import get_usuario_service
from app.usuarios.errors import MENSAJE_ERROR_ACTUALIZAR, MENSAJE_ERROR_CREAR
from app.usuarios.service import UsuarioService

ANA = {"nombre": "Ana", "email": "ana@x.com", "password": "secret1"}


@pytest.fixture
def client(memory_repository):
    """Cliente HTTP con el servicio conectado al repositorio en memoria."""
    hasher = PasswordHasher(rounds=4)
    fastapi_app.dependency_overrides[get_usuario_service] = lambda: UsuarioService(
        memory_repository, hasher
    )
    yield TestClient(fastapi_app)
    fastapi_app.dependency_overrides.clear()


def _crear(client, **campos):
    response = client.post("/usuarios", json={**ANA, **campos})
    assert response.status_code == 201, response.text
    return response.json()


class TestCrear:
    def test_crear_devuelve_201(self, client):
        response = client.post("/usuarios", json=ANA)

        assert response.status_code == 201
        assert response.json() == {
            "id": 1,
            "nombre": "Ana",
            "email": "ana@x.com",
            "rol": "cliente",
            "activo": 1,
        }

    def test_nombre_faltante(self, client):
        response = client.post("/usuarios", json={"email": "ana@x.com", "password": "secret1"})

        assert response.status_code == 400
        assert response.json() == {
            "error": "El campo nombre es requerido y debe ser una cadena válida"
        }

    def test_email_duplicado(self, client):
        _crear(client, email="A@x.com")

        response = client.post("/usuarios", json={**ANA, "email": "a@x.com"})

        assert response.status_code == 400
        assert response.json() == {"error": 'Ya existe un usuario con el email "a@x.com"'}

    def test_activo_invalido(self, client):
        response = client.post("/usuarios", json={**ANA, "activo": True})

        assert response.status_code == 400
        assert response.json() == {"error": "El campo activo debe ser 0 o 1"}

    def test_password_con_byte_nulo(self, client):
        response = client.post("/usuarios", json={**ANA, "password": "abc\u0000defg"})

        assert response.status_code == 400
        assert response.json() == {"error": "El campo password contiene caracteres no permitidos"}

    def test_cuerpo_que_no_es_objeto(self, client):
        response = client.post("/usuarios", json=["Ana"])

        assert response.status_code == 422

    def test_error_de_base_de_datos(self, client, memory_repository):
        memory_repository.fail_with = "could not connect to server"

        response = client.post("/usuarios", json=ANA)

        assert response.status_code == 500
        assert response.json() == {"error": MENSAJE_ERROR_CREAR}


class TestLeer:
    def test_listar(self, client):
        _crear(client)
        _crear(client, nombre="Luis", email="luis@x.com", rol="admin")

        response = client.get("/usuarios")

        assert response.status_code == 200
        usuarios = response.json()
        assert [u["email"] for u in usuarios] == ["ana@x.com", "luis@x.com"]
        assert all("password" not in u for u in usuarios)
        assert usuarios[0]["fechacreacion"] == "2024-01-01T12:00:00"

    def test_listar_vacio(self, client):
        response = client.get("/usuarios")

        assert response.status_code == 200
        assert response.json() == []

    def test_obtener(self, client):
        creado = _crear(client)

        response = client.get(f"/usuarios/{creado['id']}")

        assert response.status_code == 200
        assert response.json() == {
            "id": creado["id"],
            "nombre": "Ana",
            "email": "ana@x.com",
            "rol": "cliente",
            "fechacreacion": "2024-01-01T12:00:00",
            "activo": 1,
        }

    @pytest.mark.parametrize("usuario_id", ["999", "abc", "\u0661"])
    def test_obtener_inexistente(self, client, usuario_id):
        response = client.get(f"/usuarios/{usuario_id}")

        assert response.status_code == 404
        assert response.json() == {"message": "Usuario no encontrado"}

    def test_error_de_base_de_datos_en_lectura(self, client, memory_repository):
        memory_repository.fail_with = "relation usuarios does not exist"

        response = client.get("/usuarios")

        assert response.status_code == 500
        assert response.json() == {"error": "relation usuarios does not exist"}


class TestActualizar:
    @pytest.mark.parametrize("method", ["patch", "put"])
    def test_actualizar_rol(self, client, method):
        creado = _crear(client)

        response = client.request(method, f"/usuarios/{creado['id']}", json={"rol": "admin"})

        assert response.status_code == 200
        assert response.json() == {"rol": "admin"}
        assert client.get(f"/usuarios/{creado['id']}").json()["rol"] == "admin"

    def test_password_no_aparece_en_respuesta(self, client):
        creado = _crear(client)

        response = client.patch(
            f"/usuarios/{creado['id']}", json={"password": "otra123", "activo": "0"}
        )

        assert response.status_code == 200
        assert response.json() == {"activo": 0}

    def test_sin_campos(self, client):
        creado = _crear(client)

        response = client.patch(f"/usuarios/{creado['id']}", json={})

        assert response.status_code == 400
        assert response.json() == {
            "error": "Debe proporcionar al menos un campo para actualizar: "
            "nombre, email, password, rol, activo"
        }

    def test_inexistente(self, client):
        response = client.patch("/usuarios/999", json={"rol": "admin"})

        assert response.status_code == 404
        assert response.json() == {"message": "Usuario no encontrado"}

    def test_email_de_otro_usuario(self, client):
        _crear(client, nombre="Luis", email="luis@x.com")
        ana = _crear(client)

        response = client.patch(f"/usuarios/{ana['id']}", json={"email": "Luis@X.com"})

        assert response.status_code == 400
        assert response.json() == {"error": 'Ya existe otro usuario con el email "Luis@X.com"'}

    def test_error_de_base_de_datos(self, client, memory_repository):
        ana = _crear(client)
        memory_repository.fail_with = "deadlock detected"

        response = client.patch(f"/usuarios/{ana['id']}", json={"rol": "admin"})

        # La comprobación de existencia ya falla con el error genérico
        assert response.status_code == 500
        assert response.json() == {"error": MENSAJE_ERROR_ACTUALIZAR}


class TestEliminar:
    def test_eliminar(self, client):
        creado = _crear(client)

        response = client.delete(f"/usuarios/{creado['id']}")

        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"/usuarios/{creado['id']}").status_code == 404

    def test_eliminar_inexistente(self, client):
        response = client.delete("/usuarios/999")

        assert response.status_code == 404
        assert response.json() == {"message": "Usuario no encontrado"}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
