# estate_photos/db/session.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from estate_photos.core.config import settings
from estate_photos.db.base import Base  # <- use the single Base


def _make_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        eng = create_engine(url, connect_args={"check_same_thread": False})
        enable_sqlite_foreign_keys(eng)
        return eng
    return create_engine(url, pool_pre_ping=True)


def enable_sqlite_foreign_keys(eng: Engine) -> None:
    # SQLite ignores ON DELETE CASCADE unless asked per connection
    @event.listens_for(eng, "connect")
    def _fk_pragma(dbapi_conn, _record):
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()


engine = _make_engine(settings.sqlalchemy_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_models(bind: Engine | None = None):
    # Import ALL model modules so metadata is populated before create_all
    from estate_photos.models import property as prop, photo  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
