import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from schemas.common import error_body
from utils.errors import AppError

logger = logging.getLogger(__name__)


def _field_errors(exc: RequestValidationError) -> list:
    errors = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()))
        errors.append({"field": field, "message": err.get("msg", "invalid value")})
    return errors


def add_error_handlers(app: FastAPI):
    # ✅ 서비스 계층 예외 → {code, message}
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.status_code, exc.message))

    # ✅ 입력 검증 실패 → 400 + 필드 단위 상세
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content=error_body(400, "Validation failed", _field_errors(exc)),
        )

    # ✅ 없는 경로 / 허용되지 않은 메서드
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = "Not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.status_code, message),
            headers=getattr(exc, "headers", None),
        )

    # ✅ DB 오류: 내부 정보는 로그로만
    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception(f"Database error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content=error_body(500, "Database error"))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content=error_body(500, "Internal server error"))
