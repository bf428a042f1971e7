from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from pathlib import Path

from config.app_config import DATABASE_URL, SQL_ECHO, is_memory_database

_is_sqlite = DATABASE_URL.startswith('sqlite')
_engine_kwargs = {}

if _is_sqlite:
    _engine_kwargs['connect_args'] = {'check_same_thread': False}
    if is_memory_database(DATABASE_URL):
        # One shared connection, otherwise every session sees an empty database
        _engine_kwargs['poolclass'] = StaticPool
    else:
        db_path = DATABASE_URL.replace('sqlite:///', '', 1)
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
else:
    _engine_kwargs.update(
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,  # Verify connections are alive before using
        pool_recycle=3600
    )

engine = create_engine(DATABASE_URL, echo=SQL_ECHO, **_engine_kwargs)


@event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    if not _is_sqlite:
        return
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA busy_timeout=5000")  # Wait up to 5s for locks instead of failing immediately
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


SessionLocal = sessionmaker(bind=engine)
Base = declarative_base()


def get_db():
    """Dependency for FastAPI routes"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
