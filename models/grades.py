from sqlalchemy import Column, Integer, Float, String, DateTime, ForeignKey, func
from database.db import Base

class Grade(Base):
    __tablename__ = "grades"  # 성적 테이블
    # (student_id, course_id, semester) 논리 키는 애플리케이션(일괄 입력)에서 보장

    id = Column(Integer, primary_key=True, index=True)                                          # 성적 고유 ID (PK)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)  # 학생 ID
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False)    # 과목 ID
    score = Column(Float)                                                                       # 점수 (입력 전 NULL 가능)
    semester = Column(String(20))                                                               # 학기 (예: 2025-2026-1)
    created_at = Column(DateTime, server_default=func.now())                                    # 생성 시각
