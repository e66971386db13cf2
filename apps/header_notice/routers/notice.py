"""Public: header notice for the page being built."""
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from apps.header_notice.deps import get_notice_service
from apps.header_notice.services.notice_render import notice_css_classes, render_if_displayable
from apps.header_notice.services.notice_settings import NoticeSettingsService, PageContext

router = APIRouter()


class NoticeRenderResponse(BaseModel):
    display: bool
    html: str
    type: str
    css_class: str


@router.get("", response_model=NoticeRenderResponse)
def get_notice(
    is_home: bool = Query(False, description="Whether the page being rendered is the home page"),
    service: NoticeSettingsService = Depends(get_notice_service),
):
    config = service.get()
    html = render_if_displayable(config, service.clock(), PageContext(is_home_page=is_home), service.tz)
    return NoticeRenderResponse(
        display=bool(html),
        html=html,
        type=config.type.value,
        css_class=notice_css_classes(config),
    )
