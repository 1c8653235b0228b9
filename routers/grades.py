from typing import Optional

from fastapi import APIRouter, Depends, Query

from dependencies.security import CurrentUserDep, StaffDep
from dependencies.services import get_grade_service
from schemas.common import ok
from schemas.grades import GradeBatch, GradeQuery, GradeScoreUpdate
from services.access_policy import grade_filters
from services.grade_service import GradeService, PASS_SCORE

router = APIRouter(prefix="/grades", tags=["grades"])

# ==========================================================
# [1단계] 정적 분석/요약 라우터 (교사/관리자)
# ==========================================================

# ✅ [LOW PERFORMERS] 기준 미달 목록 (낮은 점수 순)
@router.get("/failed")
def get_failed_students(
    user: StaffDep,
    course_id: Optional[int] = Query(default=None),
    pass_score: float = Query(default=PASS_SCORE),
    grades: GradeService = Depends(get_grade_service),
):
    return ok(grades.failed_students(course_id, pass_score))


# ✅ [STATS] 과목별 통계
@router.get("/stats/{course_id}")
def get_course_stats(course_id: int, user: StaffDep, grades: GradeService = Depends(get_grade_service)):
    return ok(grades.course_stats(course_id))

# ==========================================================
# [2단계] CRUD 기본 라우터
# ==========================================================

# ✅ [READ] 성적 목록 (모든 역할, 학생은 본인 성적만)
@router.get("")
def read_grades(
    user: CurrentUserDep,
    query: GradeQuery = Depends(),
    grades: GradeService = Depends(get_grade_service),
):
    return ok(grades.list_grades(grade_filters(user, query)))


# ✅ [UPSERT] 일괄 입력 (있으면 수정, 없으면 추가)
@router.post("")
def create_grades(batch: GradeBatch, user: StaffDep, grades: GradeService = Depends(get_grade_service)):
    result = grades.batch_upsert(batch.course_id, batch.semester, batch.grades)
    return ok(
        result,
        f"Inserted {result.inserted} new grades, updated {result.updated} existing grades",
    )

# ==========================================================
# [3단계] 동적 라우터
# ==========================================================

# ✅ [UPDATE] 점수 수정
@router.put("/{grade_id}")
def update_grade(grade_id: int, body: GradeScoreUpdate, user: StaffDep,
                 grades: GradeService = Depends(get_grade_service)):
    grades.update_grade(grade_id, body.score)
    return ok(message="Grade updated successfully")


# ✅ [DELETE] 성적 삭제
@router.delete("/{grade_id}")
def delete_grade(grade_id: int, user: StaffDep, grades: GradeService = Depends(get_grade_service)):
    grades.delete_grade(grade_id)
    return ok(message="Grade deleted successfully")
