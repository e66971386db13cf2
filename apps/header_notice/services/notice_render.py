"""Front-end rendering of the header notice banner."""
from datetime import datetime, timezone, tzinfo
from html import escape

from apps.header_notice.services.notice_settings import (
    NoticeConfig,
    NoticeType,
    PageContext,
    should_display,
)

BASE_CLASS = "header-notice"


def notice_css_classes(config: NoticeConfig) -> str:
    return f"{BASE_CLASS} {BASE_CLASS}-{config.type.value} {config.css_class}".strip()


def render_notice(config: NoticeConfig) -> str:
    role = "alert" if config.type == NoticeType.ERROR else "status"
    body = escape(config.text).replace("\n", "<br>")
    return (
        f'<div class="{escape(notice_css_classes(config))}" role="{role}">'
        f'<p class="{BASE_CLASS}-text">{body}</p>'
        f'<button type="button" class="{BASE_CLASS}-dismiss" aria-label="Dismiss notice">&times;</button>'
        "</div>"
    )


def render_if_displayable(
    config: NoticeConfig,
    now: datetime,
    context: PageContext,
    tz: tzinfo = timezone.utc,
) -> str:
    """Banner HTML, or an empty string when the notice is not shown on this page."""
    if not should_display(config, now, context, tz):
        return ""
    return render_notice(config)
