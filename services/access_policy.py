"""
역할 기반 조회 범위 정책.

요청자 신원과 요청 필터를 받아 구조화된 필터 집합을 돌려주는 순수 함수들.
쿼리 빌더(grade_service, directory_service)는 이 결과만 보고 WHERE 절을 만든다.
"""

from dataclasses import dataclass
from typing import Optional

from schemas.auth import CurrentUser
from schemas.grades import GradeQuery
from utils.errors import Forbidden


@dataclass(frozen=True)
class GradeFilter:
    owner_user_id: Optional[int] = None   # 학생 본인 행으로 강제 제한
    keyword: Optional[str] = None
    course_id: Optional[int] = None
    class_id: Optional[int] = None
    semester: Optional[str] = None


@dataclass(frozen=True)
class DirectoryScope:
    restricted: bool = False              # False 면 전체 조회
    course_id: Optional[int] = None
    class_id: Optional[int] = None


def grade_filters(identity: CurrentUser, query: GradeQuery) -> GradeFilter:
    keyword = (query.keyword or "").strip() or None
    semester = (query.semester or "").strip() or None
    owner = identity.id if identity.role == "student" else None
    return GradeFilter(
        owner_user_id=owner,
        keyword=keyword,
        course_id=query.course_id,
        class_id=query.class_id,
        semester=semester,
    )


def directory_scope(identity: CurrentUser, course_id: Optional[int] = None,
                    class_id: Optional[int] = None) -> DirectoryScope:
    """
    과목/학급 목록 범위.
    - admin   : 전체
    - teacher : 본인 계정에 묶인 course_id / class_id 만 (없으면 빈 결과)
    - student : 이 경로로는 조회 불가
    """
    if identity.role == "admin":
        return DirectoryScope()
    if identity.role == "teacher":
        return DirectoryScope(restricted=True, course_id=course_id, class_id=class_id)
    raise Forbidden()
