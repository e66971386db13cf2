"""Admin: header notice settings screen."""
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from apps.header_notice.auth import get_current_principal
from apps.header_notice.deps import get_notice_service
from apps.header_notice.services.notice_settings import (
    DEFAULTS,
    NoticeConfig,
    NoticeSettingsService,
    Principal,
)

router = APIRouter()


class NoticeSettingsResponse(BaseModel):
    text: str
    type: str
    scope: str
    expires_at: datetime | None
    css_class: str
    defaults: dict


class NoticeSettingsUpdate(BaseModel):
    # Loose types: the service validates and reports the failing field.
    text: str | None = None
    type: str | None = None
    scope: str | None = None
    expires_at: str | None = None
    css_class: str | None = None


def _to_response(config: NoticeConfig) -> NoticeSettingsResponse:
    return NoticeSettingsResponse(
        text=config.text,
        type=config.type.value,
        scope=config.scope.value,
        expires_at=config.expires_at,
        css_class=config.css_class,
        defaults=DEFAULTS.to_options(),
    )


@router.get("", response_model=NoticeSettingsResponse)
def get_notice_settings(
    _principal: Principal = Depends(get_current_principal),
    service: NoticeSettingsService = Depends(get_notice_service),
):
    """Current notice settings + defaults."""
    return _to_response(service.get())


@router.put("", response_model=NoticeSettingsResponse)
def put_notice_settings(
    payload: NoticeSettingsUpdate,
    principal: Principal = Depends(get_current_principal),
    service: NoticeSettingsService = Depends(get_notice_service),
):
    """Update notice settings. Omitted fields are kept; explicit null expires_at clears the expiry."""
    return _to_response(service.update(payload.model_dump(exclude_unset=True), principal))
