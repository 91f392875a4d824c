"""Shared fixtures: in-memory SQLite per test, storage under tmp_path.

Every test gets a fresh database; ``get_db`` and ``get_photo_storage`` are
overridden so HTTP tests and direct service calls see the same data.
"""
import os

# must be set before estate_photos.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from estate_photos.db.base import Base
from estate_photos.db.session import enable_sqlite_foreign_keys, get_db, init_models
from estate_photos.main import app
from estate_photos.services import catalog
from estate_photos.services.storage import PhotoStorage, get_photo_storage


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(eng)
    init_models(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture
def storage(tmp_path):
    return PhotoStorage(tmp_path)


@pytest.fixture
def client(session_factory, storage):
    """TestClient with DB and storage dependencies overridden."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_photo_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_property(db):
    """Create a property with ``photos`` auto-positioned photos named photo_<n>.jpg."""
    def _make(name="Sunny House", photos=0):
        prop = catalog.create_property(db, name)
        for n in range(1, photos + 1):
            catalog.create_photo(db, prop.id, f"photo_{n}.jpg", "image/jpeg", 150_000)
        return prop
    return _make


@pytest.fixture
def write_file(storage):
    """Put bytes on disk where the storage layer expects a photo's payload."""
    def _write(property_id, filename, content=b"fake image content"):
        folder = storage.property_dir(property_id)
        folder.mkdir(parents=True, exist_ok=True)
        (folder / filename).write_bytes(content)
        return folder / filename
    return _write
