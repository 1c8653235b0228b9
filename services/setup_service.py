"""
DB 초기화 서비스

- 테이블이 없으면 생성하고, 비어 있는 테이블에만 데모 데이터를 넣는다.
- 데모 계정 비밀번호는 모두 123456
- /setup/init-db 엔드포인트와 scripts/init_db.py 에서 사용
"""

import logging
from typing import Dict

from sqlalchemy import select, func

from database.db import Database
from models.users import User
from models.classes import Class
from models.courses import Course
from models.students import Student
from models.grades import Grade
from utils.security import hash_password

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "123456"
DEMO_SEMESTER = "2025-2026-1"

CLASSES = [
    (1, "Computer Science 2301", "Computer Science and Technology"),
    (2, "Computer Science 2302", "Computer Science and Technology"),
    (3, "Software Engineering 2301", "Software Engineering"),
]

COURSES = [
    (1, "Advanced Mathematics", 4.0),
    (2, "College English", 3.0),
    (3, "Programming Fundamentals", 3.5),
    (4, "Data Structures", 4.0),
    (5, "Computer Networks", 3.0),
]

# (id, username, name, role, class_id, course_id)
USERS = [
    (1, "admin", "Administrator", "admin", None, None),
    (2, "teacher", "Teacher Zhang", "teacher", 1, 1),
    (3, "teacher02", "Teacher Li", "teacher", 2, 2),
    (10, "student01", "Zhang San", "student", 1, None),
    (11, "student02", "Li Si", "student", 1, None),
    (12, "student03", "Wang Wu", "student", 1, None),
    (13, "student04", "Zhao Liu", "student", 2, None),
    (14, "student05", "Qian Qi", "student", 2, None),
]

# (id, student_code, user_id, class_id)
STUDENTS = [
    (1, "2023001", 10, 1),
    (2, "2023002", 11, 1),
    (3, "2023003", 12, 1),
    (4, "2023004", 13, 2),
    (5, "2023005", 14, 2),
]

# (id, student_id, course_id, score)
GRADES = [
    (1, 1, 1, 85.5), (2, 1, 2, 78.0),
    (3, 2, 1, 92.0), (4, 2, 2, 88.5),
    (5, 3, 1, 55.0), (6, 3, 2, 62.0),
    (7, 4, 2, 95.0), (8, 4, 3, 89.0),
    (9, 5, 2, 45.0), (10, 5, 3, 58.0),
]


class SetupService:
    def __init__(self, db: Database, bcrypt_rounds: int = 10):
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds

    def init_db(self) -> Dict[str, int]:
        """스키마 생성 + 데모 데이터 시드. 테이블별로 추가된 행 수 반환"""
        self.db.create_all()
        seeded = {}
        with self.db.transaction() as session:
            def empty(model) -> bool:
                return session.execute(select(func.count()).select_from(model)).scalar() == 0

            if empty(Class):
                session.add_all(Class(id=i, name=n, major=m) for i, n, m in CLASSES)
                seeded["classes"] = len(CLASSES)
            if empty(Course):
                session.add_all(Course(id=i, name=n, credit=c) for i, n, c in COURSES)
                seeded["courses"] = len(COURSES)
            session.flush()

            if empty(User):
                hashed = hash_password(DEMO_PASSWORD, self.bcrypt_rounds)
                session.add_all(
                    User(id=i, username=u, password=hashed, name=n, role=r, class_id=cl, course_id=co)
                    for i, u, n, r, cl, co in USERS
                )
                seeded["users"] = len(USERS)
                session.flush()

                # 데모 학생 행은 데모 계정을 만들 때만 함께 생성
                if empty(Student):
                    session.add_all(
                        Student(id=i, student_code=c, user_id=u, class_id=cl) for i, c, u, cl in STUDENTS
                    )
                    seeded["students"] = len(STUDENTS)
                    session.flush()

            if "students" in seeded and empty(Grade):
                session.add_all(
                    Grade(id=i, student_id=s, course_id=c, score=sc, semester=DEMO_SEMESTER)
                    for i, s, c, sc in GRADES
                )
                seeded["grades"] = len(GRADES)

        logger.info(f"Database initialized: seeded={seeded}")
        return seeded
