"""Health endpoint tests."""
import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client():
    from apps.header_notice.main import app
    return TestClient(app)


def test_health(client: TestClient):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json().get("status") == "ok"


def test_ready_checks_database(client: TestClient):
    from sqlalchemy.orm import sessionmaker
    from apps.header_notice.database import get_test_engine
    from apps.header_notice.deps import get_db

    db = sessionmaker(bind=get_test_engine())()

    def _get_db():
        yield db

    client.app.dependency_overrides[get_db] = _get_db
    try:
        r = client.get("/ready")
    finally:
        client.app.dependency_overrides.pop(get_db, None)
        db.close()
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_app_starts_without_lifespan_hooks():
    from apps.header_notice.main import app
    from apps.header_notice.config import Settings

    with TestClient(app) as c:
        assert c.get("/health").status_code == 200
    assert not {"app_env", "secret_key", "debug", "public_base_url"} & set(Settings.model_fields)
