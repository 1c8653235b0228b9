import pytest
from sqlalchemy import select
from sqlalchemy.pool import QueuePool, StaticPool

from database.db import Database
from models.classes import Class


@pytest.fixture
def memory_db():
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


def _track_sessions(db, closed):
    factory = db.SessionLocal

    def tracking():
        session = factory()
        original_close = session.close

        def close():
            closed.append(session)
            original_close()

        session.close = close
        return session

    db.SessionLocal = tracking


def test_server_pool_is_fixed_size_and_waits_for_timeout():
    # 엔진 생성만 하므로 실제 MySQL 연결은 필요 없음
    db = Database("mysql+pymysql://u:p@h/x", pool_size=10, pool_timeout=30)
    pool = db.engine.pool
    assert isinstance(pool, QueuePool)
    assert pool.size() == 10
    assert pool._max_overflow == 0
    assert pool._timeout == 30
    db.dispose()


def test_in_memory_sqlite_shares_one_connection(memory_db):
    assert isinstance(memory_db.engine.pool, StaticPool)


def test_transaction_commits_and_closes(memory_db):
    closed = []
    _track_sessions(memory_db, closed)

    with memory_db.transaction() as session:
        session.add(Class(id=1, name="Computer Science 2301", major="Computer Science and Technology"))

    assert len(closed) == 1
    with memory_db.session() as session:
        assert session.get(Class, 1).name == "Computer Science 2301"


def test_transaction_rolls_back_and_closes_on_error(memory_db):
    closed = []
    _track_sessions(memory_db, closed)

    with pytest.raises(RuntimeError):
        with memory_db.transaction() as session:
            session.add(Class(id=1, name="Computer Science 2301", major="Computer Science and Technology"))
            session.flush()
            raise RuntimeError("boom")

    assert len(closed) == 1
    with memory_db.session() as session:
        assert session.execute(select(Class)).first() is None


def test_ping(memory_db):
    assert memory_db.ping() is True
