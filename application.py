import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import Settings, get_settings
from database.db import Database

# ✅ 미들웨어 임포트
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ 라우터 임포트
from routers import auth, users, grades, courses, classes, students, setup, meta

# ✅ 서비스 임포트
from services.auth_service import AuthService
from services.directory_service import DirectoryService
from services.grade_service import GradeService
from services.setup_service import SetupService
from services.user_service import UserService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or get_settings()

    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    # basicConfig 는 첫 호출만 적용되므로 레벨은 매번 다시 지정
    logging.getLogger().setLevel(settings.LOG_LEVEL)
    # HTTP 라이브러리 디버그 로그 비활성화
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    app = FastAPI(
        title=settings.APP_TITLE,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
    )

    # ✅ DB 핸들(커넥션 풀)과 서비스는 여기서 한 번 만들어 app.state 로 공유
    db = database or Database(settings.DB_URL, settings.DB_POOL_SIZE, settings.DB_POOL_TIMEOUT)
    app.state.settings = settings
    app.state.db = db
    app.state.auth_service = AuthService(
        db,
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.JWT_EXPIRE_MINUTES,
        bcrypt_rounds=settings.BCRYPT_ROUNDS,
    )
    app.state.directory_service = DirectoryService(db)
    app.state.user_service = UserService(db, bcrypt_rounds=settings.BCRYPT_ROUNDS)
    app.state.grade_service = GradeService(db)
    app.state.setup_service = SetupService(db, bcrypt_rounds=settings.BCRYPT_ROUNDS)

    # ✅ CORS 설정 (SPA 연동)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ✅ 요청 로그 + 지연 측정 미들웨어 (응답 헤더 X-Latency-Ms 추가)
    app.add_middleware(TimingMiddleware)

    # ✅ 전역 에러 핸들러 등록 ({code, message} 포맷)
    add_error_handlers(app)

    # ✅ API 프리픽스 라우터 등록
    prefix = settings.API_PREFIX
    app.include_router(auth.router,     prefix=prefix)
    app.include_router(users.router,    prefix=prefix)
    app.include_router(grades.router,   prefix=prefix)
    app.include_router(courses.router,  prefix=prefix)
    app.include_router(classes.router,  prefix=prefix)
    app.include_router(students.router, prefix=prefix)
    app.include_router(setup.router,    prefix=prefix)
    app.include_router(meta.router)

    @app.on_event("startup")
    def _check_database():
        # DB 연결이 안 되면 서버를 띄우지 않음
        if not db.ping():
            raise RuntimeError("Database connection failed, check DB settings")
        if settings.AUTO_CREATE_TABLES:
            db.create_all()
        logger.info(f"{settings.APP_TITLE} started (env={settings.ENV})")

    @app.on_event("shutdown")
    def _close_database():
        db.dispose()

    return app
