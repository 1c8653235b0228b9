def test_init_db_requires_secret(client):
    r = client.post("/api/setup/init-db", json={"secret": "guess"})
    assert r.status_code == 403
    assert r.json()["message"] == "Invalid secret"


def test_init_db_disabled_without_configured_secret(settings):
    from fastapi.testclient import TestClient
    from application import create_app

    app = create_app(settings.model_copy(update={"INIT_DB_SECRET": None}))
    with TestClient(app) as client:
        assert client.post("/api/setup/init-db", json={"secret": ""}).status_code == 403


def test_init_db_seeds_once(client):
    r = client.post("/api/setup/init-db", json={"secret": "init-secret"})
    assert r.status_code == 200
    assert r.json()["data"] == {"classes": 3, "courses": 5, "users": 8, "students": 5, "grades": 10}

    r = client.post("/api/setup/init-db", json={"secret": "init-secret"})
    assert r.status_code == 200
    assert r.json()["data"] == {}

    r = client.post("/api/auth/login", json={"username": "teacher", "password": "123456", "role": "teacher"})
    assert r.status_code == 200


def test_health_and_index(client):
    assert client.get("/health").json() == {"status": "ok", "database": "up"}
    index = client.get("/").json()
    assert index["endpoints"]["grades"] == "/api/grades"


def test_unknown_route_uses_envelope(client):
    r = client.get("/api/nothing-here")
    assert r.status_code == 404
    assert r.json() == {"code": 404, "message": "Not found"}


def test_latency_header(client):
    assert "X-Latency-Ms" in client.get("/health").headers


def test_each_app_applies_its_log_level(settings):
    import logging
    from application import create_app

    root = logging.getLogger()
    previous = root.level
    try:
        create_app(settings.model_copy(update={"LOG_LEVEL": "DEBUG"}))
        assert root.level == logging.DEBUG
        create_app(settings.model_copy(update={"LOG_LEVEL": "ERROR"}))
        assert root.level == logging.ERROR
    finally:
        root.setLevel(previous)
