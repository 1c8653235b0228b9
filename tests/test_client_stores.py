import json

import pytest

from client.http_client import ApiError, GradeApiClient, SessionExpired
from client.storage import TokenStorage
from client.stores import GradeStore, UserStore


@pytest.fixture
def storage():
    return TokenStorage()


@pytest.fixture
def api(client, seeded, storage):
    # TestClient 는 httpx.Client 이므로 그대로 주입
    return GradeApiClient(storage, http=client)


@pytest.fixture
def user_store(api, storage):
    return UserStore(api, storage)


def test_login_keeps_token_and_user(user_store, storage):
    user_store.login("teacher", "123456", "teacher")
    assert user_store.is_logged_in
    assert user_store.role == "teacher"
    assert storage.token == user_store.token
    assert storage.get("userInfo")["username"] == "teacher"


def test_login_failure_raises_api_error(user_store):
    with pytest.raises(ApiError) as exc:
        user_store.login("teacher", "wrong", "teacher")
    assert exc.value.code == 401
    assert not isinstance(exc.value, SessionExpired)
    assert not user_store.is_logged_in


def test_fetch_user_info_and_logout(user_store, storage):
    user_store.login("student01", "123456", "student")
    info = user_store.fetch_user_info()
    assert info["student_code"] == "2023001"

    user_store.logout()
    assert not user_store.is_logged_in
    assert storage.token is None
    assert storage.get("userInfo") is None


def test_expired_session_clears_storage(user_store, storage):
    user_store.login("admin", "123456", "admin")
    storage.set("token", "garbage")
    with pytest.raises(ApiError):
        user_store.fetch_user_info()
    assert storage.token is None
    assert not user_store.is_logged_in


def test_init_restores_saved_session(api, storage):
    UserStore(api, storage).login("admin", "123456", "admin")
    restored = UserStore(api, storage)
    restored.init()
    assert restored.is_logged_in
    assert restored.role == "admin"


def test_init_drops_unreadable_user_info(api, storage):
    storage.set("token", "t")
    storage.set("userInfo", "not-a-dict")
    store = UserStore(api, storage)
    store.init()
    assert not store.is_logged_in
    assert storage.get("userInfo") is None


def test_grade_store_for_teacher(api, user_store):
    user_store.login("teacher", "123456", "teacher")
    store = GradeStore(api)

    assert [c["id"] for c in store.load_courses()] == [1]
    assert store.courses == [{"id": 1, "name": "Advanced Mathematics", "credit": 4.0}]
    assert [c["id"] for c in store.load_classes()] == [1]
    assert len(store.load_students(class_id=1)) == 3

    res = store.add_grades(1, "2025-2026-2", [{"student_id": 1, "score": 99}])
    assert res["data"] == {"inserted": 1, "updated": 0}
    assert len(store.load_grades(semester="2025-2026-2")) == 1
    assert store.get_course_stats(1)["total"] == 4
    assert [g["score"] for g in store.get_failed_students(course_id=1)] == [55.0]


def test_grade_store_for_student_falls_back_to_empty(api, user_store):
    user_store.login("student01", "123456", "student")
    store = GradeStore(api)

    assert store.load_courses() == []
    assert store.get_course_stats(1) is None
    assert store.get_failed_students() == []
    assert len(store.load_grades()) == 2
    with pytest.raises(ApiError) as exc:
        store.update_grade(1, 100)
    assert exc.value.code == 403


def test_token_storage_persists_to_file(tmp_path):
    path = tmp_path / "session.json"
    TokenStorage(str(path)).set("token", "abc")
    assert json.loads(path.read_text(encoding="utf-8")) == {"token": "abc"}
    assert TokenStorage(str(path)).token == "abc"


def test_token_storage_ignores_corrupt_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")
    assert TokenStorage(str(path)).token is None
