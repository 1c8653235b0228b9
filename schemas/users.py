from typing import Optional
from datetime import datetime

from pydantic import BaseModel, Field, ConfigDict

from schemas.auth import Role


# ✅ 공통 입력 필드 (생성/수정)
class UserBase(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)   # 로그인 아이디
    name: str = Field(..., min_length=1, max_length=50)       # 표시 이름
    role: Role                                                # admin | teacher | student
    class_id: Optional[int] = None                            # 교사 담당 반 / 학생 소속 반
    course_id: Optional[int] = None                           # 교사 담당 과목
    status: int = Field(1, ge=0, le=1)                        # 1: 활성, 0: 비활성


# ✅ 생성 요청: 비밀번호 필수
class UserCreate(UserBase):
    password: str = Field(..., min_length=1)


# ✅ 수정 요청: 비밀번호가 있으면 재설정, 없으면 유지
class UserUpdate(UserBase):
    password: Optional[str] = None
    status: Optional[int] = Field(None, ge=0, le=1)          # 생략하면 기존 상태 유지


# ✅ 본인 비밀번호 변경
class PasswordChange(BaseModel):
    old_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


# ✅ 목록 출력용
class UserOut(BaseModel):
    id: int
    username: str
    name: str
    role: Role
    class_id: Optional[int] = None
    course_id: Optional[int] = None
    status: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
