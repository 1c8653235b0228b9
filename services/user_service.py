import logging
from typing import List, Optional

from sqlalchemy import select, delete, or_
from sqlalchemy.exc import IntegrityError

from database.db import Database
from models.users import User
from models.students import Student
from schemas.users import UserCreate, UserUpdate, UserOut
from utils.errors import (
    NotFoundError, DuplicateUsername, SelfDeletion, InvalidOldPassword, ConflictError,
)
from utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """관리자용 계정 CRUD + 학생 레코드 동기화, 본인 비밀번호 변경"""

    def __init__(self, db: Database, bcrypt_rounds: int = 10):
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds

    # ==========================================================
    # [READ] 목록: 아이디/이름 부분 일치 + 역할 필터, 최신순
    # ==========================================================
    def list_users(self, keyword: Optional[str] = None, role: Optional[str] = None) -> List[UserOut]:
        stmt = select(User)
        keyword = (keyword or "").strip()
        if keyword:
            pattern = f"%{keyword.lower()}%"
            stmt = stmt.where(or_(User.username.ilike(pattern), User.name.ilike(pattern)))
        if role:
            stmt = stmt.where(User.role == role)
        stmt = stmt.order_by(User.created_at.desc(), User.id.desc())

        with self.db.session() as session:
            users = session.execute(stmt).scalars().all()
            return [UserOut.model_validate(u) for u in users]

    # ==========================================================
    # [CREATE] 계정 생성 (학생 + 반 지정 시 students 행도 함께 생성)
    # ==========================================================
    def create_user(self, payload: UserCreate) -> int:
        with self.db.transaction() as session:
            exists = session.execute(
                select(User.id).where(User.username == payload.username)
            ).first()
            if exists:
                raise DuplicateUsername()

            # 0 은 "미지정"으로 취급
            class_id = payload.class_id or None
            course_id = payload.course_id or None

            user = User(
                username=payload.username,
                password=hash_password(payload.password, self.bcrypt_rounds),
                name=payload.name,
                role=payload.role,
                class_id=class_id,
                course_id=course_id,
                status=payload.status,
            )
            session.add(user)
            self._flush(session)

            if payload.role == "student" and class_id:
                session.add(Student(student_code=payload.username, user_id=user.id, class_id=class_id))
                self._flush(session)

            user_id = user.id

        logger.info(f"User created: id={user_id} username={payload.username} role={payload.role}")
        return user_id

    # ==========================================================
    # [UPDATE] 계정 수정 (비밀번호는 값이 있을 때만 재설정)
    # ==========================================================
    def update_user(self, user_id: int, payload: UserUpdate) -> None:
        with self.db.transaction() as session:
            user = session.get(User, user_id)
            if user is None:
                raise NotFoundError("User not found")

            if payload.username != user.username:
                taken = session.execute(
                    select(User.id).where(User.username == payload.username, User.id != user_id)
                ).first()
                if taken:
                    raise DuplicateUsername()

            user.username = payload.username
            user.name = payload.name
            user.role = payload.role
            user.class_id = payload.class_id or None
            user.course_id = payload.course_id or None
            if payload.status is not None:
                user.status = payload.status
            if payload.password:
                user.password = hash_password(payload.password, self.bcrypt_rounds)

            # 학생이면 students 행의 반 배정을 동기화 (있으면 수정, 없으면 생성)
            if payload.role == "student":
                student = session.execute(
                    select(Student).where(Student.user_id == user_id)
                ).scalar_one_or_none()
                if student is not None:
                    student.class_id = payload.class_id or None
                elif payload.class_id:
                    session.add(Student(student_code=user.username, user_id=user_id, class_id=payload.class_id))

            self._flush(session)

        logger.info(f"User updated: id={user_id}")

    # ==========================================================
    # [DELETE] 계정 삭제 (students / grades 는 FK CASCADE)
    # ==========================================================
    def delete_user(self, user_id: int, requester_id: int) -> None:
        if user_id == requester_id:
            raise SelfDeletion()

        with self.db.transaction() as session:
            result = session.execute(delete(User).where(User.id == user_id))
            if result.rowcount == 0:
                raise NotFoundError("User not found")

        logger.info(f"User deleted: id={user_id} by={requester_id}")

    # ==========================================================
    # 본인 비밀번호 변경
    # ==========================================================
    def change_password(self, user_id: int, old_password: str, new_password: str) -> None:
        with self.db.transaction() as session:
            user = session.get(User, user_id)
            if user is None:
                raise NotFoundError("User not found")
            if not verify_password(old_password, user.password):
                raise InvalidOldPassword()
            user.password = hash_password(new_password, self.bcrypt_rounds)

        logger.info(f"Password changed: id={user_id}")

    @staticmethod
    def _flush(session):
        try:
            session.flush()
        except IntegrityError as e:
            # username / student_code 유일성 위반, 존재하지 않는 반·과목 참조
            logger.warning(f"User write rejected by constraint: {e.orig}")
            raise ConflictError("Username, student code, class or course conflicts with existing data")
