from sqlalchemy import Column, Integer, String
from database.db import Base

class Class(Base):
    __tablename__ = "classes"  # 학급(반) 테이블

    id = Column(Integer, primary_key=True, index=True)      # 학급 고유 ID (PK)
    name = Column(String(50), nullable=False)               # 반 이름 (예: 컴퓨터2301반)
    major = Column(String(100))                             # 전공
