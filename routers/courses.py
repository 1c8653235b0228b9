from fastapi import APIRouter, Depends

from dependencies.security import CurrentUserDep
from dependencies.services import get_directory_service
from schemas.common import ok
from services.directory_service import DirectoryService

router = APIRouter(prefix="/courses", tags=["과목"])


# ✅ [READ] 과목 목록
# - admin: 전체 / teacher: 본인 담당 과목 / student: 403
@router.get("")
def read_courses(user: CurrentUserDep, directory: DirectoryService = Depends(get_directory_service)):
    return ok(directory.list_courses(user))
