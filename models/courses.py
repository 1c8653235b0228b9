from sqlalchemy import Column, Integer, String, Float
from database.db import Base

class Course(Base):
    __tablename__ = "courses"  # 과목 테이블

    id = Column(Integer, primary_key=True, index=True)      # 과목 고유 ID (PK)
    name = Column(String(100), nullable=False)              # 과목 이름
    credit = Column(Float, default=0)                       # 학점
