from fastapi import APIRouter, Request

router = APIRouter(tags=["Meta"])


# ✅ 헬스체크 (DB 연결 포함)
@router.get("/health")
def health(request: Request):
    db_ok = request.app.state.db.ping()
    return {"status": "ok" if db_ok else "degraded", "database": "up" if db_ok else "down"}


# ✅ 루트: 엔드포인트 안내
@router.get("/")
def root(request: Request):
    settings = request.app.state.settings
    prefix = settings.API_PREFIX
    return {
        "message": settings.APP_TITLE,
        "version": settings.APP_VERSION,
        "endpoints": {
            "auth": f"{prefix}/auth",
            "users": f"{prefix}/users",
            "grades": f"{prefix}/grades",
            "courses": f"{prefix}/courses",
            "classes": f"{prefix}/classes",
            "students": f"{prefix}/students",
        },
    }
