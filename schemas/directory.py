from typing import Optional
from pydantic import BaseModel


# ✅ 과목
class CourseOut(BaseModel):
    id: int
    name: str
    credit: Optional[float] = None


# ✅ 학급 (재적 학생 수 포함)
class ClassOut(BaseModel):
    id: int
    name: str
    major: Optional[str] = None
    student_count: int = 0


# ✅ 학생 목록 항목
class StudentOut(BaseModel):
    id: int
    student_code: str
    student_name: str
    class_id: Optional[int] = None
    class_name: Optional[str] = None
