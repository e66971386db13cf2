"""Key/value option store backed by the app_settings table."""
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from apps.header_notice.models.app_setting import AppSetting


class SqlOptionStore:
    """get/set over app_settings rows. Commit failures propagate to the caller."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, key: str, default: Any = None) -> Any:
        row = self.db.get(AppSetting, key)
        if not row or row.value_json is None:
            return default
        return row.value_json

    def set(self, key: str, value: Any) -> None:
        row = self.db.get(AppSetting, key)
        now = datetime.now(timezone.utc)
        if row:
            row.value_json = value
            row.updated_at = now
        else:
            self.db.add(AppSetting(key=key, value_json=value, updated_at=now))
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
