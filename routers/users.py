from typing import Optional

from fastapi import APIRouter, Depends, Query

from dependencies.security import AdminDep, CurrentUserDep
from dependencies.services import get_user_service
from schemas.auth import Role
from schemas.common import ok
from schemas.users import UserCreate, UserUpdate, PasswordChange
from services.user_service import UserService

router = APIRouter(prefix="/users", tags=["계정 관리"])


# ✅ [PASSWORD] 본인 비밀번호 변경 (로그인만 필요, /{user_id} 보다 먼저 등록)
@router.put("/password")
def change_password(body: PasswordChange, user: CurrentUserDep,
                    users: UserService = Depends(get_user_service)):
    users.change_password(user.id, body.old_password, body.new_password)
    return ok(message="Password changed successfully")

# ==========================================================
# 이하 관리자 전용
# ==========================================================

# ✅ [READ] 계정 목록
@router.get("")
def read_users(
    admin: AdminDep,
    keyword: Optional[str] = Query(default=None),
    role: Optional[Role] = Query(default=None),
    users: UserService = Depends(get_user_service),
):
    return ok(users.list_users(keyword, role))


# ✅ [CREATE] 계정 생성
@router.post("")
def create_user(body: UserCreate, admin: AdminDep, users: UserService = Depends(get_user_service)):
    user_id = users.create_user(body)
    return ok({"id": user_id}, "User created successfully")


# ✅ [UPDATE] 계정 수정
@router.put("/{user_id}")
def update_user(user_id: int, body: UserUpdate, admin: AdminDep,
                users: UserService = Depends(get_user_service)):
    users.update_user(user_id, body)
    return ok(message="User updated successfully")


# ✅ [DELETE] 계정 삭제 (본인 계정 불가)
@router.delete("/{user_id}")
def delete_user(user_id: int, admin: AdminDep, users: UserService = Depends(get_user_service)):
    users.delete_user(user_id, admin.id)
    return ok(message="User deleted successfully")
