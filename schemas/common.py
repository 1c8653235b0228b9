"""
schemas/common.py

- 프로젝트 전반에서 재사용할 공용 스키마 모음 (Pydantic v2)
- 모든 응답은 {code, message?, data?} 봉투 형식
  - code == 200 : 성공
  - 그 외       : 실패 (HTTP 상태 코드와 동일 값)
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# =========================================================
# 1) 에러 응답 표준
# =========================================================

class FieldError(BaseModel):
    """필드 단위 검증 오류"""
    field: str = Field(..., description="오류가 난 필드 경로 (예: body.username)")
    message: str


class ErrorResponse(BaseModel):
    """전역 에러 핸들러가 내려주는 표준 에러 응답"""
    code: int = Field(..., description="HTTP 상태 코드와 동일한 애플리케이션 코드")
    message: str = Field(..., description="사람이 읽을 수 있는 에러 메시지")
    errors: Optional[List[FieldError]] = None

    model_config = ConfigDict(extra="ignore")


def error_body(code: int, message: str, errors: Optional[list] = None) -> dict:
    return ErrorResponse(code=code, message=message, errors=errors or None).model_dump(exclude_none=True)


# =========================================================
# 2) 성공 응답
# =========================================================

def ok(data: Any = None, message: Optional[str] = None) -> dict:
    """성공 봉투 생성. 값이 없는 키는 생략"""
    body: dict = {"code": 200}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body
