from typing import List, Optional
from datetime import datetime

from pydantic import BaseModel, Field


# ✅ 일괄 입력 항목 (학생 1명의 점수)
class GradeEntry(BaseModel):
    student_id: int
    score: Optional[float] = None


# ✅ 일괄 입력 요청 (과목 + 학기 단위)
class GradeBatch(BaseModel):
    course_id: int
    semester: str = Field(..., min_length=1, max_length=20)
    grades: List[GradeEntry]


# ✅ 단건 점수 수정
class GradeScoreUpdate(BaseModel):
    score: float


# ✅ 목록 필터 (쿼리 파라미터)
class GradeQuery(BaseModel):
    keyword: Optional[str] = None
    course_id: Optional[int] = None
    class_id: Optional[int] = None
    semester: Optional[str] = None


# ✅ 일괄 입력 결과
class BatchResult(BaseModel):
    inserted: int
    updated: int


# ✅ 목록 출력용 (조인 결과)
class GradeRow(BaseModel):
    id: int
    score: Optional[float] = None
    semester: Optional[str] = None
    created_at: Optional[datetime] = None
    student_id: int
    student_code: str
    student_name: str
    course_id: int
    course_name: str
    class_id: Optional[int] = None
    class_name: Optional[str] = None


# ✅ 과목 통계
class CourseStats(BaseModel):
    total: int
    average: float
    max: float
    min: float
    pass_count: int
    fail_count: int
    pass_rate: str | int   # "80.0" 형식, 데이터가 없으면 0
