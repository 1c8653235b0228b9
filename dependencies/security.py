from typing import Optional, Annotated

from fastapi import Depends, Header, Request

from schemas.auth import CurrentUser
from utils.errors import Unauthenticated, Forbidden

AuthHeader = Annotated[Optional[str], Header(alias="Authorization")]


def get_current_user(request: Request, authorization: AuthHeader = None) -> CurrentUser:
    """
    Bearer 토큰을 검증하고 신원 정보를 요청 컨텍스트(request.state.user)에 부착
    - 헤더 없음/형식 오류 → 401 Unauthenticated
    - 서명 불일치/만료/페이로드 오류 → 401 InvalidToken
    """
    if not authorization:
        raise Unauthenticated()

    # "Bearer <token>" 파싱
    try:
        scheme, token = authorization.split(" ", 1)
    except ValueError:
        raise Unauthenticated("Invalid Authorization header format")

    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise Unauthenticated("Invalid auth scheme")

    user = request.app.state.auth_service.verify_token(token)
    request.state.user = user
    return user


def require_roles(*roles: str):
    """라우트 단위 역할 허용 목록. 목록에 없는 역할이면 403"""
    def checker(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in roles:
            raise Forbidden()
        return user
    return checker


CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
AdminDep = Annotated[CurrentUser, Depends(require_roles("admin"))]
StaffDep = Annotated[CurrentUser, Depends(require_roles("admin", "teacher"))]
