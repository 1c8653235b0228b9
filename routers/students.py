from typing import Optional

from fastapi import APIRouter, Depends, Query

from dependencies.security import CurrentUserDep
from dependencies.services import get_directory_service
from schemas.common import ok
from services.directory_service import DirectoryService

router = APIRouter(prefix="/students", tags=["학생 정보"])


# ✅ [READ] 학생 목록 (class_id 로 반 필터, 로그인만 필요)
@router.get("")
def read_students(
    user: CurrentUserDep,
    class_id: Optional[int] = Query(default=None),
    directory: DirectoryService = Depends(get_directory_service),
):
    return ok(directory.list_students(class_id))
