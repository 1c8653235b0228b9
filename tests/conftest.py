import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from application import create_app

DEMO_PASSWORD = "123456"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        JWT_SECRET="test-secret",
        BCRYPT_ROUNDS=4,
        AUTO_CREATE_TABLES=True,
        INIT_DB_SECRET="init-secret",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # with 블록 안에서 startup(테이블 생성)이 실행됨
    with TestClient(app) as c:
        yield c


@pytest.fixture
def seeded(app, client):
    """데모 데이터 (admin/teacher/teacher02/student01~05, 성적 10건)"""
    app.state.setup_service.init_db()
    return app


@pytest.fixture
def login(client):
    def _login(username: str, role: str, password: str = DEMO_PASSWORD) -> dict:
        r = client.post("/api/auth/login", json={"username": username, "password": password, "role": role})
        assert r.status_code == 200, r.text
        token = r.json()["data"]["token"]
        return {"Authorization": f"Bearer {token}"}
    return _login


@pytest.fixture
def admin_headers(seeded, login):
    return login("admin", "admin")


@pytest.fixture
def teacher_headers(seeded, login):
    return login("teacher", "teacher")


@pytest.fixture
def student_headers(seeded, login):
    # student01: students.id = 1, 반 1
    return login("student01", "student")
