"""
utils/errors.py

- 애플리케이션 예외 분류. 서비스 계층은 이 예외만 던지고,
  middlewares/error_handler.py가 {code, message} 응답으로 변환합니다.
- code 는 HTTP 상태 코드와 동일하게 사용.
"""


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# =========================================================
# 1) 분류별 기본 예외
# =========================================================

class ValidationError(AppError):
    status_code = 400
    default_message = "Validation failed"


class AuthenticationError(AppError):
    status_code = 401
    default_message = "Authentication required"


class AuthorizationError(AppError):
    status_code = 403
    default_message = "Permission denied"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(AppError):
    status_code = 400
    default_message = "Conflict"


class DatabaseError(AppError):
    status_code = 500
    default_message = "Database error"


class InternalError(AppError):
    status_code = 500
    default_message = "Internal server error"


# =========================================================
# 2) 연산별 예외
# =========================================================

class InvalidCredentials(AuthenticationError):
    default_message = "Invalid username or password"


class Unauthenticated(AuthenticationError):
    default_message = "Missing authentication token"


class InvalidToken(AuthenticationError):
    default_message = "Token is invalid or expired"


class AccountDisabled(AuthorizationError):
    default_message = "Account is disabled"


class Forbidden(AuthorizationError):
    default_message = "You do not have permission to access this resource"


class DuplicateUsername(ConflictError):
    default_message = "Username already exists"


class SelfDeletion(ConflictError):
    default_message = "You cannot delete your own account"


class InvalidOldPassword(ValidationError):
    default_message = "Old password is incorrect"


class EmptyBatch(ValidationError):
    default_message = "Grade entries must not be empty"


class InvalidGradeEntry(ValidationError):
    default_message = "Grade entry references an unknown student or course"
