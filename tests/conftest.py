"""
Configuración de pytest para tests
"""
import pytest
from fastapi.testclient import TestClient

from petstore.db import PetstoreDb, get_db
from petstore.main import app

# Deshabilitar rate limiting en la app antes de los tests
@pytest.fixture(scope="session", autouse=True)
def disable_rate_limiting():
    """Deshabilita rate limiting para todos los tests"""
    app.state.limiter = None

@pytest.fixture
def db():
    """Repositorio vacío para cada test"""
    return PetstoreDb()

@pytest.fixture
def api(db):
    """La app usando el repositorio del test"""
    app.dependency_overrides[get_db] = lambda: db
    yield app
    app.dependency_overrides.clear()

@pytest.fixture
def client(api):
    """Fixture para cliente de test de FastAPI"""
    return TestClient(api)

@pytest.fixture
def pet_data():
    """Datos de mascota de prueba"""
    return {
        "name": "Luna",
        "status": "available",
        "tags": [{"name": "perro"}, {"name": "joven"}],
        "category": {"name": "perros"},
        "photoUrls": [],
    }
