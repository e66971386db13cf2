"""Activation and uninstall of the notice record."""
from datetime import datetime, timezone

import pytest
from sqlalchemy.orm import sessionmaker

from apps.header_notice.database import Base, get_test_engine
from apps.header_notice.services.notice_lifecycle import activate, uninstall
from apps.header_notice.services.notice_settings import (
    DEFAULTS,
    OPTION_KEY,
    NoticeSettingsService,
    Principal,
)
from apps.header_notice.services.option_store import SqlOptionStore

ADMIN = Principal(subject="1", capabilities=frozenset({"manage_options"}))


@pytest.fixture
def test_db_session():
    engine = get_test_engine()
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def test_activate_writes_defaults_once(test_db_session):
    store = SqlOptionStore(test_db_session)
    assert activate(store) is True
    assert store.get(OPTION_KEY) == DEFAULTS.to_options()
    assert activate(store) is False


def test_activate_keeps_existing_settings(test_db_session):
    store = SqlOptionStore(test_db_session)
    service = NoticeSettingsService(store, tz=timezone.utc)
    service.update({"text": "Keep"}, ADMIN)
    assert activate(store) is False
    assert service.get().text == "Keep"


def test_uninstall_resets_all_fields(test_db_session):
    store = SqlOptionStore(test_db_session)
    service = NoticeSettingsService(store, tz=timezone.utc, clock=lambda: datetime(2024, 1, 1, tzinfo=timezone.utc))
    service.update(
        {
            "text": "Sale!",
            "type": "error",
            "scope": "home_only",
            "expires_at": "2030-01-01T00:00:00Z",
            "css_class": "promo",
        },
        ADMIN,
    )
    uninstall(store)
    assert service.get() == DEFAULTS
    assert store.get(OPTION_KEY)["notice_expires_at"] is None
