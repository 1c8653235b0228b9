from sqlalchemy import Column, Integer, String, ForeignKey
from database.db import Base

class Student(Base):
    __tablename__ = "students"  # 학생 정보 테이블 (users 와 1:1)

    id = Column(Integer, primary_key=True, index=True)                                   # 학생 고유 ID (PK)
    student_code = Column(String(20), unique=True, nullable=False)                       # 학번 (전역 유일)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)  # 소유 계정 (계정 삭제 시 함께 삭제)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="SET NULL"))            # 소속 반 (없을 수 있음)
