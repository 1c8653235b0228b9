from typing import List, Optional

from sqlalchemy import select, func

from database.db import Database
from models.users import User
from models.classes import Class
from models.courses import Course
from models.students import Student
from schemas.auth import CurrentUser
from schemas.directory import CourseOut, ClassOut, StudentOut
from services.access_policy import directory_scope, DirectoryScope


class DirectoryService:
    """과목 / 학급 / 학생 목록 (읽기 전용, 역할 범위 적용)"""

    def __init__(self, db: Database):
        self.db = db

    def _scope(self, session, requester: CurrentUser) -> DirectoryScope:
        course_id = class_id = None
        if requester.role == "teacher":
            account = session.get(User, requester.id)
            if account is not None:
                course_id, class_id = account.course_id, account.class_id
        return directory_scope(requester, course_id=course_id, class_id=class_id)

    # ✅ 과목 목록: admin 전체, teacher 본인 담당 과목
    def list_courses(self, requester: CurrentUser) -> List[CourseOut]:
        with self.db.session() as session:
            scope = self._scope(session, requester)
            if scope.restricted and scope.course_id is None:
                return []

            stmt = select(Course).order_by(Course.id)
            if scope.restricted:
                stmt = stmt.where(Course.id == scope.course_id)

            courses = session.execute(stmt).scalars().all()
            return [CourseOut(id=c.id, name=c.name, credit=c.credit) for c in courses]

    # ✅ 학급 목록 + 재적 학생 수: admin 전체, teacher 본인 담당 반
    def list_classes(self, requester: CurrentUser) -> List[ClassOut]:
        with self.db.session() as session:
            scope = self._scope(session, requester)
            if scope.restricted and scope.class_id is None:
                return []

            stmt = (
                select(Class.id, Class.name, Class.major, func.count(Student.id).label("student_count"))
                .outerjoin(Student, Student.class_id == Class.id)
                .group_by(Class.id, Class.name, Class.major)
                .order_by(Class.id)
            )
            if scope.restricted:
                stmt = stmt.where(Class.id == scope.class_id)

            rows = session.execute(stmt).mappings().all()
            return [ClassOut(**row) for row in rows]

    # ✅ 학생 목록 (반 필터 선택)
    def list_students(self, class_id: Optional[int] = None) -> List[StudentOut]:
        stmt = (
            select(
                Student.id,
                Student.student_code,
                User.name.label("student_name"),
                Student.class_id,
                Class.name.label("class_name"),
            )
            .join(User, Student.user_id == User.id)
            .outerjoin(Class, Student.class_id == Class.id)
            .order_by(Student.student_code)
        )
        if class_id is not None:
            stmt = stmt.where(Student.class_id == class_id)

        with self.db.session() as session:
            rows = session.execute(stmt).mappings().all()
        return [StudentOut(**row) for row in rows]
