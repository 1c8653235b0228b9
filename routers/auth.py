from fastapi import APIRouter, Depends

from dependencies.security import CurrentUserDep
from dependencies.services import get_auth_service
from schemas.auth import LoginRequest
from schemas.common import ok
from services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["인증"])


# ✅ [LOGIN] 로그인 (공개)
@router.post("/login")
def login(request: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    result = auth.login(request.username, request.password, request.role)
    return ok(result, "Login successful")


# ✅ [INFO] 내 정보 (학생이면 학번/반/전공 포함)
@router.get("/info")
def get_user_info(user: CurrentUserDep, auth: AuthService = Depends(get_auth_service)):
    return ok(auth.get_current_user(user.id))


# ✅ [LOGOUT] 서버 상태 없음: 클라이언트가 토큰을 버리면 끝
# - 발급된 토큰은 만료 시각까지 유효
@router.post("/logout")
def logout(user: CurrentUserDep):
    return ok(message="Logout successful")
