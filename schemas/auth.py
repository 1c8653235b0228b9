from typing import Literal, Optional
from datetime import datetime

from pydantic import BaseModel, Field

Role = Literal["admin", "teacher", "student"]


# ✅ 로그인 요청
class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    role: Role


# ✅ 토큰에 담기는 신원 정보 (요청 컨텍스트에 부착됨)
class CurrentUser(BaseModel):
    id: int
    username: str
    name: str
    role: Role


# ✅ 로그인 응답
class LoginResult(BaseModel):
    token: str
    user: CurrentUser


# ✅ 내 정보 조회 응답 (학생이면 학번/반/전공 포함)
class UserProfile(BaseModel):
    id: int
    username: str
    name: str
    role: Role
    status: int
    created_at: Optional[datetime] = None
    student_code: Optional[str] = None
    class_name: Optional[str] = None
    major: Optional[str] = None
