from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from dependencies.services import get_setup_service
from schemas.common import ok
from services.setup_service import SetupService, DEMO_PASSWORD
from utils.errors import Forbidden
from utils.security import secrets_match

router = APIRouter(prefix="/setup", tags=["초기화"])


class InitDbRequest(BaseModel):
    secret: str


# ✅ [INIT] 테이블 생성 + 데모 데이터 (최초 배포용)
@router.post("/init-db")
def init_db(body: InitDbRequest, request: Request, setup: SetupService = Depends(get_setup_service)):
    if not secrets_match(body.secret, request.app.state.settings.INIT_DB_SECRET):
        raise Forbidden("Invalid secret")
    seeded = setup.init_db()
    return ok(seeded, f"Database initialized. Default password for demo accounts is {DEMO_PASSWORD}")
