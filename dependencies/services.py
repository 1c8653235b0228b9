from fastapi import Request

from services.auth_service import AuthService
from services.directory_service import DirectoryService
from services.grade_service import GradeService
from services.setup_service import SetupService
from services.user_service import UserService


# ==========================================================
# create_app()에서 app.state 에 올려둔 서비스 인스턴스를 꺼내는 의존성
# ==========================================================
def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_directory_service(request: Request) -> DirectoryService:
    return request.app.state.directory_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_grade_service(request: Request) -> GradeService:
    return request.app.state.grade_service


def get_setup_service(request: Request) -> SetupService:
    return request.app.state.setup_service
