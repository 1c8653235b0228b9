from sqlalchemy import Column, Integer, String, DateTime, Enum, ForeignKey, func
from database.db import Base

# ✅ 역할 / 계정 상태 상수
ROLES = ("admin", "teacher", "student")
STATUS_ACTIVE = 1
STATUS_DISABLED = 0


class User(Base):
    __tablename__ = "users"  # 계정 테이블 (관리자/교사/학생 공통)

    id = Column(Integer, primary_key=True, index=True)                 # 계정 고유 ID (PK)
    username = Column(String(50), unique=True, nullable=False)         # 로그인 아이디 (전역 유일)
    password = Column(String(255), nullable=False)                     # bcrypt 해시
    name = Column(String(50), nullable=False)                          # 표시 이름
    role = Column(Enum(*ROLES, name="user_role"), nullable=False)      # admin | teacher | student
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="SET NULL"))   # 교사 담당 반 / 학생 소속 반
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="SET NULL"))  # 교사 담당 과목
    status = Column(Integer, nullable=False, default=STATUS_ACTIVE)    # 1: 활성, 0: 비활성
    created_at = Column(DateTime, server_default=func.now())           # 생성 시각
