import os
import tempfile

# Must be set before config/database are imported anywhere
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(tempfile.mkdtemp(), 'test_fitness.db')}"
os.environ["SEED_TEMPLATES"] = "false"

import uuid
import pytest
from fastapi.testclient import TestClient

from database import Base, engine, init_db
from main import app
from service_modules.auth_service import auth_service
from service_modules.template_service import template_service


@pytest.fixture(autouse=True)
def fresh_db():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


def register(name, role="User", password="password123"):
    email = f"{name.lower()}_{uuid.uuid4().hex[:8]}@example.com"
    result = auth_service.register_user({
        "name": name,
        "email": email,
        "password": password,
        "confirm_password": password,
        "role": role
    })
    return {"id": result["user_id"], "email": email, "password": password}


@pytest.fixture
def trainer():
    return register("Coach", role="Trainer")


@pytest.fixture
def client_user():
    return register("Alex")


@pytest.fixture
def make_template():
    def _make(name, exercises):
        return template_service.create_template(name, [
            {"exercise_name": ex, "sets": sets, "reps": reps}
            for ex, sets, reps in exercises
        ])
    return _make


def auth_headers(test_client, user):
    response = test_client.post("/api/auth/login", json={"email": user["email"], "password": user["password"]})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
