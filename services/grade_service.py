import logging
from typing import List, Optional, Sequence

from sqlalchemy import select, update, delete, func, case, or_
from sqlalchemy.exc import IntegrityError

from database.db import Database
from models.grades import Grade
from models.students import Student
from models.users import User
from models.courses import Course
from models.classes import Class
from schemas.grades import GradeEntry, GradeRow, BatchResult, CourseStats
from services.access_policy import GradeFilter
from utils.errors import EmptyBatch, NotFoundError, InvalidGradeEntry

logger = logging.getLogger(__name__)

PASS_SCORE = 60


def _grade_rows_query():
    """Grade → Student → User, Grade → Course, Student → Class 조인 기본 쿼리"""
    return (
        select(
            Grade.id,
            Grade.score,
            Grade.semester,
            Grade.created_at,
            Student.id.label("student_id"),
            Student.student_code,
            User.name.label("student_name"),
            Course.id.label("course_id"),
            Course.name.label("course_name"),
            Class.id.label("class_id"),
            Class.name.label("class_name"),
        )
        .join(Student, Grade.student_id == Student.id)
        .join(User, Student.user_id == User.id)
        .join(Course, Grade.course_id == Course.id)
        .outerjoin(Class, Student.class_id == Class.id)
    )


def build_grade_query(filters: GradeFilter):
    stmt = _grade_rows_query()
    if filters.owner_user_id is not None:
        stmt = stmt.where(Student.user_id == filters.owner_user_id)
    if filters.keyword:
        pattern = f"%{filters.keyword}%"
        stmt = stmt.where(or_(User.name.like(pattern), Student.student_code.like(pattern)))
    if filters.course_id is not None:
        stmt = stmt.where(Grade.course_id == filters.course_id)
    if filters.class_id is not None:
        stmt = stmt.where(Student.class_id == filters.class_id)
    if filters.semester:
        stmt = stmt.where(Grade.semester == filters.semester)
    return stmt.order_by(Grade.created_at.desc(), Grade.id.desc())


def summarize_scores(total: int, average, max_score, min_score, pass_count, fail_count) -> CourseStats:
    total = total or 0
    pass_count = int(pass_count or 0)
    pass_rate = f"{pass_count / total * 100:.1f}" if total > 0 else 0
    return CourseStats(
        total=total,
        average=round(float(average), 1) if average is not None else 0,
        max=max_score or 0,
        min=min_score or 0,
        pass_count=pass_count,
        fail_count=int(fail_count or 0),
        pass_rate=pass_rate,
    )


class GradeService:
    """성적 조회 / 일괄 입력(upsert) / 수정·삭제 / 통계"""

    def __init__(self, db: Database):
        self.db = db

    # ==========================================================
    # [READ] 목록 (학생은 본인 성적만)
    # ==========================================================
    def list_grades(self, filters: GradeFilter) -> List[GradeRow]:
        with self.db.session() as session:
            rows = session.execute(build_grade_query(filters)).mappings().all()
        return [GradeRow(**row) for row in rows]

    # ==========================================================
    # [UPSERT] 일괄 입력: (학생, 과목, 학기) 가 있으면 수정, 없으면 추가
    # - 하나의 트랜잭션. 한 건이라도 실패하면 전체 롤백
    # ==========================================================
    def batch_upsert(self, course_id: int, semester: str, entries: Sequence[GradeEntry]) -> BatchResult:
        if not entries:
            raise EmptyBatch()

        inserted = updated = 0
        try:
            with self.db.transaction() as session:
                for entry in entries:
                    existing_id = session.execute(
                        select(Grade.id).where(
                            Grade.student_id == entry.student_id,
                            Grade.course_id == course_id,
                            Grade.semester == semester,
                        )
                    ).scalar()

                    if existing_id is not None:
                        session.execute(
                            update(Grade).where(Grade.id == existing_id).values(score=entry.score)
                        )
                        updated += 1
                    else:
                        session.add(Grade(
                            student_id=entry.student_id,
                            course_id=course_id,
                            score=entry.score,
                            semester=semester,
                        ))
                        session.flush()
                        inserted += 1
        except IntegrityError as e:
            logger.warning(f"Grade batch rolled back: course_id={course_id} semester={semester} ({e.orig})")
            raise InvalidGradeEntry()

        logger.info(f"Grade batch applied: course_id={course_id} semester={semester} inserted={inserted} updated={updated}")
        return BatchResult(inserted=inserted, updated=updated)

    # ==========================================================
    # [UPDATE] / [DELETE] 단건
    # ==========================================================
    def update_grade(self, grade_id: int, score: float) -> None:
        with self.db.transaction() as session:
            result = session.execute(update(Grade).where(Grade.id == grade_id).values(score=score))
            if result.rowcount == 0:
                raise NotFoundError("Grade not found")

    def delete_grade(self, grade_id: int) -> None:
        with self.db.transaction() as session:
            result = session.execute(delete(Grade).where(Grade.id == grade_id))
            if result.rowcount == 0:
                raise NotFoundError("Grade not found")

    # ==========================================================
    # [STATS] 과목별 통계
    # ==========================================================
    def course_stats(self, course_id: int) -> CourseStats:
        stmt = select(
            func.count(Grade.id).label("total"),
            func.avg(Grade.score).label("average"),
            func.max(Grade.score).label("max_score"),
            func.min(Grade.score).label("min_score"),
            func.sum(case((Grade.score >= PASS_SCORE, 1), else_=0)).label("pass_count"),
            func.sum(case((Grade.score < PASS_SCORE, 1), else_=0)).label("fail_count"),
        ).where(Grade.course_id == course_id)

        with self.db.session() as session:
            row = session.execute(stmt).one()
        return summarize_scores(row.total, row.average, row.max_score, row.min_score,
                                row.pass_count, row.fail_count)

    # ==========================================================
    # [LOW PERFORMERS] 기준 미달 목록 (낮은 점수 순)
    # ==========================================================
    def failed_students(self, course_id: Optional[int] = None, pass_score: float = PASS_SCORE) -> List[GradeRow]:
        stmt = _grade_rows_query().where(Grade.score < pass_score)
        if course_id is not None:
            stmt = stmt.where(Grade.course_id == course_id)
        stmt = stmt.order_by(Grade.score.asc(), Grade.id.asc())

        with self.db.session() as session:
            rows = session.execute(stmt).mappings().all()
        return [GradeRow(**row) for row in rows]
