from config.settings import get_settings
from database.db import Database
from services.setup_service import SetupService, DEMO_PASSWORD


def init_db():
    settings = get_settings()
    db = Database(settings.DB_URL, settings.DB_POOL_SIZE, settings.DB_POOL_TIMEOUT)
    try:
        seeded = SetupService(db, bcrypt_rounds=settings.BCRYPT_ROUNDS).init_db()
    finally:
        db.dispose()
    print(f"✅ DB 초기화 완료: {seeded or '추가된 데이터 없음'} (데모 계정 비밀번호: {DEMO_PASSWORD})")

if __name__ == "__main__":
    init_db()
