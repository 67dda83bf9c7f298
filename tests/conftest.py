import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path before tests import modules
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from househunter.core.config import Settings  # noqa: E402
from househunter.main import create_app  # noqa: E402

TEST_SECRET = "test-secret"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'house_hunter.db'}",
        SECRET_KEY=TEST_SECRET,
        # bcrypt minimum, keeps the suite fast
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def db_session(app):
    from househunter.db.init_db import init_db

    init_db(app.state.engine)
    db = app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
        app.state.engine.dispose()


@pytest.fixture()
def register_payload():
    return {
        "fullName": "Alice Example",
        "role": "seeker",
        "phoneNumber": "+1-555-0100",
        "email": "a@x.com",
        "password": "p1",
    }
