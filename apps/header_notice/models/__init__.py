"""SQLAlchemy models."""
from apps.header_notice.models.app_setting import AppSetting
from apps.header_notice.models.site_user import SiteUser

__all__ = [
    "AppSetting",
    "SiteUser",
]
