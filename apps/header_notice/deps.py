"""FastAPI dependencies."""
from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from apps.header_notice.database import get_session_factory
from apps.header_notice.services.notice_settings import NoticeSettingsService
from apps.header_notice.services.option_store import SqlOptionStore


def get_db() -> Generator[Session, None, None]:
    factory = get_session_factory()
    sess = factory()
    try:
        yield sess
    finally:
        sess.close()


def get_notice_service(db: Session = Depends(get_db)) -> NoticeSettingsService:
    return NoticeSettingsService(SqlOptionStore(db))
