from fastapi import APIRouter, Depends

from dependencies.security import CurrentUserDep
from dependencies.services import get_directory_service
from schemas.common import ok
from services.directory_service import DirectoryService

router = APIRouter(prefix="/classes", tags=["학급"])


# ✅ [READ] 학급 목록 + 재적 학생 수
# - admin: 전체 / teacher: 본인 담당 반 / student: 403
@router.get("")
def read_classes(user: CurrentUserDep, directory: DirectoryService = Depends(get_directory_service)):
    return ok(directory.list_classes(user))
