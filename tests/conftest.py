import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Must be set before learnsense.core.config is imported
_DB_DIR = tempfile.mkdtemp(prefix="learnsense-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["ENV"] = "test"
os.environ["SECRET_KEY"] = "test-secret"

from factories import TEST_USER_ID, FakeStore  # noqa: E402


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def db_tables():
    from learnsense.db.base import engine
    from learnsense.models import Base

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(db_tables):
    from learnsense.db.base import SessionLocal

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(db_tables):
    from fastapi.testclient import TestClient

    from learnsense.core.dependencies import get_current_user_id, recommendation_cache
    from learnsense.main import app

    recommendation_cache.clear()
    app.dependency_overrides[get_current_user_id] = lambda: TEST_USER_ID
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    recommendation_cache.clear()
