from sqlalchemy import select, func

from models.courses import Course
from models.grades import Grade


def _count_grades(app, **where):
    stmt = select(func.count()).select_from(Grade)
    for key, value in where.items():
        stmt = stmt.where(getattr(Grade, key) == value)
    with app.state.db.session() as session:
        return session.execute(stmt).scalar()


def test_student_sees_only_own_grades(client, student_headers):
    data = client.get("/api/grades", headers=student_headers).json()["data"]
    assert {g["student_code"] for g in data} == {"2023001"}
    assert len(data) == 2


def test_student_scope_survives_other_filters(client, student_headers):
    # 반 2 (다른 학생들) 필터를 줘도 본인 행만
    data = client.get("/api/grades", params={"class_id": 2}, headers=student_headers).json()["data"]
    assert data == []
    data = client.get("/api/grades", params={"keyword": "2023002"}, headers=student_headers).json()["data"]
    assert data == []
    data = client.get("/api/grades", params={"course_id": 1}, headers=student_headers).json()["data"]
    assert [(g["student_code"], g["course_id"]) for g in data] == [("2023001", 1)]


def test_staff_sees_all_grades_with_join_fields(client, teacher_headers):
    data = client.get("/api/grades", headers=teacher_headers).json()["data"]
    assert len(data) == 10
    row = next(g for g in data if g["id"] == 1)
    assert row["student_name"] == "Zhang San"
    assert row["course_name"] == "Advanced Mathematics"
    assert row["class_name"] == "Computer Science 2301"
    assert row["semester"] == "2025-2026-1"
    assert row["score"] == 85.5


def test_grade_filters(client, admin_headers):
    data = client.get("/api/grades", params={"keyword": "Li Si"}, headers=admin_headers).json()["data"]
    assert {g["student_code"] for g in data} == {"2023002"}

    data = client.get("/api/grades", params={"course_id": 3, "class_id": 2}, headers=admin_headers).json()["data"]
    assert sorted(g["id"] for g in data) == [8, 10]

    data = client.get("/api/grades", params={"semester": "2030-1"}, headers=admin_headers).json()["data"]
    assert data == []


def test_batch_upsert_inserts_then_updates(app, client, teacher_headers):
    payload = {"course_id": 4, "semester": "2025-2026-1",
               "grades": [{"student_id": 1, "score": 70}, {"student_id": 2, "score": 80}]}
    r = client.post("/api/grades", json=payload, headers=teacher_headers)
    assert r.status_code == 200
    assert r.json()["data"] == {"inserted": 2, "updated": 0}

    payload["grades"] = [{"student_id": 1, "score": 75}, {"student_id": 3, "score": 40}]
    r = client.post("/api/grades", json=payload, headers=teacher_headers)
    assert r.json()["data"] == {"inserted": 1, "updated": 1}
    assert r.json()["message"] == "Inserted 1 new grades, updated 1 existing grades"

    assert _count_grades(app, course_id=4) == 3
    with app.state.db.session() as session:
        score = session.execute(
            select(Grade.score).where(Grade.student_id == 1, Grade.course_id == 4)
        ).scalar_one()
    assert score == 75


def test_batch_upsert_same_entry_twice_is_one_row(app, client, admin_headers):
    payload = {"course_id": 5, "semester": "2025-2026-2", "grades": [{"student_id": 4, "score": 66}]}
    first = client.post("/api/grades", json=payload, headers=admin_headers).json()["data"]
    second = client.post("/api/grades", json=payload, headers=admin_headers).json()["data"]
    assert first == {"inserted": 1, "updated": 0}
    assert second == {"inserted": 0, "updated": 1}
    assert _count_grades(app, course_id=5, student_id=4) == 1


def test_batch_upsert_duplicate_student_within_one_batch(app, client, admin_headers):
    payload = {"course_id": 5, "semester": "2025-2026-2",
               "grades": [{"student_id": 4, "score": 50}, {"student_id": 4, "score": 65}]}
    data = client.post("/api/grades", json=payload, headers=admin_headers).json()["data"]
    assert data == {"inserted": 1, "updated": 1}
    assert _count_grades(app, course_id=5, student_id=4) == 1


def test_batch_upsert_is_all_or_nothing(app, client, admin_headers):
    before = _count_grades(app)
    payload = {"course_id": 4, "semester": "2025-2026-1", "grades": [
        {"student_id": 1, "score": 90},
        {"student_id": 2, "score": 91},
        {"student_id": 999, "score": 92},   # 존재하지 않는 학생
        {"student_id": 4, "score": 93},
        {"student_id": 5, "score": 94},
    ]}
    r = client.post("/api/grades", json=payload, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["code"] == 400
    assert _count_grades(app) == before
    assert _count_grades(app, course_id=4) == 0


def test_batch_upsert_rolls_back_updates_too(app, client, admin_headers):
    payload = {"course_id": 1, "semester": "2025-2026-1", "grades": [
        {"student_id": 1, "score": 10},      # 기존 85.5 수정 시도
        {"student_id": 999, "score": 20},
    ]}
    assert client.post("/api/grades", json=payload, headers=admin_headers).status_code == 400
    with app.state.db.session() as session:
        assert session.get(Grade, 1).score == 85.5


def test_empty_batch_is_rejected(client, admin_headers):
    r = client.post("/api/grades", json={"course_id": 1, "semester": "2025-2026-1", "grades": []},
                    headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Grade entries must not be empty"


def test_batch_requires_semester(client, admin_headers):
    r = client.post("/api/grades", json={"course_id": 1, "grades": [{"student_id": 1, "score": 1}]},
                    headers=admin_headers)
    assert r.status_code == 400


def test_students_cannot_write_grades(client, student_headers):
    payload = {"course_id": 1, "semester": "x", "grades": [{"student_id": 1, "score": 100}]}
    assert client.post("/api/grades", json=payload, headers=student_headers).status_code == 403
    assert client.put("/api/grades/1", json={"score": 100}, headers=student_headers).status_code == 403
    assert client.delete("/api/grades/1", headers=student_headers).status_code == 403
    assert client.get("/api/grades/stats/1", headers=student_headers).status_code == 403
    assert client.get("/api/grades/failed", headers=student_headers).status_code == 403


def test_update_grade(app, client, teacher_headers):
    r = client.put("/api/grades/5", json={"score": 61}, headers=teacher_headers)
    assert r.status_code == 200
    with app.state.db.session() as session:
        assert session.get(Grade, 5).score == 61

    assert client.put("/api/grades/999", json={"score": 61}, headers=teacher_headers).status_code == 404
    assert client.put("/api/grades/5", json={"score": "high"}, headers=teacher_headers).status_code == 400


def test_delete_grade(app, client, teacher_headers):
    assert client.delete("/api/grades/5", headers=teacher_headers).status_code == 200
    assert _count_grades(app, id=5) == 0
    assert client.delete("/api/grades/5", headers=teacher_headers).status_code == 404


def test_course_stats(app, client, admin_headers):
    with app.state.db.transaction() as session:
        session.add(Course(id=6, name="Operating Systems", credit=3.0))

    entries = [{"student_id": i, "score": s} for i, s in zip(range(1, 6), [85.5, 78.0, 92.0, 88.5, 55.0])]
    client.post("/api/grades", json={"course_id": 6, "semester": "2025-2026-1", "grades": entries},
                headers=admin_headers)

    data = client.get("/api/grades/stats/6", headers=admin_headers).json()["data"]
    assert data == {
        "total": 5,
        "average": 79.8,
        "max": 92.0,
        "min": 55.0,
        "pass_count": 4,
        "fail_count": 1,
        "pass_rate": "80.0",
    }


def test_course_stats_without_grades(client, admin_headers):
    data = client.get("/api/grades/stats/4", headers=admin_headers).json()["data"]
    assert data == {"total": 0, "average": 0, "max": 0, "min": 0,
                    "pass_count": 0, "fail_count": 0, "pass_rate": 0}


def test_failed_students_worst_first(client, teacher_headers):
    data = client.get("/api/grades/failed", headers=teacher_headers).json()["data"]
    assert [g["score"] for g in data] == [45.0, 55.0, 58.0]

    data = client.get("/api/grades/failed", params={"course_id": 1}, headers=teacher_headers).json()["data"]
    assert [(g["student_code"], g["score"]) for g in data] == [("2023003", 55.0)]


def test_failed_students_custom_pass_score(client, teacher_headers):
    data = client.get("/api/grades/failed", params={"pass_score": 80}, headers=teacher_headers).json()["data"]
    assert [g["score"] for g in data] == [45.0, 55.0, 58.0, 62.0, 78.0]
