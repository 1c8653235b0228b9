import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event, text               # SQLAlchemy 엔진 생성 도구
from sqlalchemy.orm import Session, declarative_base, sessionmaker  # 세션 팩토리 / Base
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# ✅ 모델 정의 시 상속할 Base 클래스 (Declarative 방식 사용)
Base = declarative_base()


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


class Database:
    """
    엔진(커넥션 풀)과 세션 팩토리를 소유하는 DB 핸들.

    - create_app()에서 한 번 생성되어 각 서비스 생성자에 전달됨
    - 풀은 고정 크기(max_overflow=0): 소진되면 pool_timeout 동안 대기
    - SQLite(테스트용)는 연결마다 foreign_keys 프라그마를 켜서 CASCADE 동작을 MySQL과 맞춤
    """

    def __init__(self, url: str, pool_size: int = 10, pool_timeout: int = 30, echo: bool = False):
        self.url = url
        if _is_sqlite(url):
            kwargs = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in url or url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
                # 인메모리 DB는 커넥션 하나를 공유해야 테이블이 유지됨
                kwargs["poolclass"] = StaticPool
        else:
            kwargs = {
                "pool_size": pool_size,
                "max_overflow": 0,
                "pool_timeout": pool_timeout,
                "pool_recycle": 3600,
                "pool_pre_ping": True,
            }
        self.engine = create_engine(url, echo=echo, **kwargs)

        if _is_sqlite(url):
            @event.listens_for(self.engine, "connect")
            def _enable_foreign_keys(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        # ✅ 세션 팩토리: DB 연결에 사용할 세션 생성기 정의
        self.SessionLocal = sessionmaker(
            bind=self.engine, autocommit=False, autoflush=True, expire_on_commit=False
        )

    def session(self) -> Session:
        return self.SessionLocal()

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """하나의 풀 커넥션에 묶인 트랜잭션. 성공 시 commit, 예외 시 rollback 후 반환"""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_all(self):
        # 테이블 메타데이터 등록을 위해 모델 모듈을 먼저 불러옴
        from models import users, classes, courses, students, grades  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def drop_all(self):
        from models import users, classes, courses, students, grades  # noqa: F401
        Base.metadata.drop_all(bind=self.engine)

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            return False

    def dispose(self):
        self.engine.dispose()
