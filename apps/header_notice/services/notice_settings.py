"""Header notice settings: stored in app_settings under a single key.

The record holds the banner text, its type, where it is shown and an optional
expiry. Text is kept as plain text at rest and escaped only by the renderer.
"""
from __future__ import annotations

import dataclasses
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from enum import Enum
from typing import Any, Callable, Mapping
from zoneinfo import ZoneInfo

from bs4 import BeautifulSoup  # type: ignore

from apps.header_notice.config import get_settings

logger = logging.getLogger(__name__)

OPTION_KEY = "header_notice"
ADMIN_CAPABILITY = "manage_options"
DEFAULT_CSS_CLASS = "default-notice"
RAW_TEXT_FACTOR = 4

_CSS_TOKEN_RE = re.compile(r"^-?[_a-zA-Z][_a-zA-Z0-9-]*$")


class NoticeType(str, Enum):
    GENERAL = "general"
    WARNING = "warning"
    ERROR = "error"


class NoticeScope(str, Enum):
    ALL_PAGES = "all"
    HOME_ONLY = "home_only"


@dataclass(frozen=True)
class NoticeConfig:
    text: str = ""
    type: NoticeType = NoticeType.GENERAL
    scope: NoticeScope = NoticeScope.ALL_PAGES
    expires_at: datetime | None = None
    css_class: str = DEFAULT_CSS_CLASS

    def to_options(self) -> dict[str, Any]:
        return {
            "notice_text": self.text,
            "notice_type": self.type.value,
            "notice_scope": self.scope.value,
            "notice_expires_at": (
                self.expires_at.astimezone(timezone.utc).isoformat() if self.expires_at else None
            ),
            "notice_css_class": self.css_class,
        }


DEFAULTS = NoticeConfig()


@dataclass(frozen=True)
class PageContext:
    is_home_page: bool = False


@dataclass(frozen=True)
class Principal:
    subject: str
    capabilities: frozenset[str] = frozenset()

    @classmethod
    def from_token_payload(cls, payload: Mapping[str, Any]) -> "Principal":
        caps = payload.get("caps") or []
        if isinstance(caps, str):
            caps = [caps]
        return cls(subject=str(payload.get("sub") or ""), capabilities=frozenset(str(c) for c in caps))


def actor_has_admin_capability(actor: Principal | None) -> bool:
    return bool(actor) and ADMIN_CAPABILITY in actor.capabilities


class ConfigError(Exception):
    def __init__(self, code: str, message: str = "", field: str | None = None) -> None:
        super().__init__(message or code)
        self.code = code
        self.message = message or code
        self.field = field


class Unauthorized(ConfigError):
    def __init__(self, message: str = "Administrator capability required") -> None:
        super().__init__("unauthorized", message)


class InvalidInput(ConfigError):
    def __init__(self, field: str, message: str) -> None:
        super().__init__("invalid_input", message, field=field)


def _tidy_lines(value: str) -> str:
    lines = [" ".join(line.split()) for line in value.splitlines()]
    return "\n".join(lines).strip()


def sanitize_notice_text(value: str) -> str:
    """Strip markup and decode entities. Line breaks are kept; other whitespace runs become one space."""
    if "<" not in value and "&" not in value:
        return _tidy_lines(value)
    soup = BeautifulSoup(value, "lxml")
    for tag in soup(["script", "style"]):
        tag.decompose()
    for br in soup.find_all("br"):
        br.replace_with("\n")
    return _tidy_lines(soup.get_text(" "))


def parse_instant(value: Any, tz: tzinfo) -> datetime:
    """datetime or ISO-8601 string -> aware datetime. Naive values are taken as `tz`."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        raw = value.strip()
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        dt = datetime.fromisoformat(raw)
    else:
        raise TypeError(f"unsupported instant type: {type(value).__name__}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz)
    return dt


def should_display(
    config: NoticeConfig,
    now: datetime,
    context: PageContext,
    tz: tzinfo = timezone.utc,
) -> bool:
    if not config.text:
        return False
    if config.expires_at is not None:
        if now.tzinfo is None:
            now = now.replace(tzinfo=tz)
        if now >= config.expires_at:
            return False
    if config.scope == NoticeScope.HOME_ONLY and not context.is_home_page:
        return False
    return True


def _coerce_enum(enum_cls, raw: Any):
    if isinstance(raw, enum_cls):
        return raw
    return enum_cls(str(raw).strip().lower())


def _enum_or_default(enum_cls, raw: Any, default):
    try:
        return _coerce_enum(enum_cls, raw)
    except ValueError:
        return default


class NoticeSettingsService:
    """Reads, updates and evaluates the header notice record.

    `store` needs get(key, default) and set(key, value); see SqlOptionStore.
    """

    def __init__(
        self,
        store,
        *,
        is_authorized: Callable[[Principal | None], bool] = actor_has_admin_capability,
        tz: tzinfo | None = None,
        max_text_length: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        s = get_settings()
        self.store = store
        self.is_authorized = is_authorized
        self.tz = tz or ZoneInfo(s.site_timezone)
        self.max_text_length = max_text_length if max_text_length is not None else s.notice_text_max_length
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def get(self) -> NoticeConfig:
        raw = self.store.get(OPTION_KEY)
        if not isinstance(raw, dict):
            return DEFAULTS
        text = raw.get("notice_text")
        css_class = raw.get("notice_css_class")
        expires_at = None
        if raw.get("notice_expires_at"):
            try:
                expires_at = parse_instant(raw["notice_expires_at"], self.tz)
            except (TypeError, ValueError):
                logger.warning("header_notice: ignoring unreadable expiry %r", raw["notice_expires_at"])
        return NoticeConfig(
            text=text if isinstance(text, str) else DEFAULTS.text,
            type=_enum_or_default(NoticeType, raw.get("notice_type"), DEFAULTS.type),
            scope=_enum_or_default(NoticeScope, raw.get("notice_scope"), DEFAULTS.scope),
            expires_at=expires_at,
            css_class=css_class if isinstance(css_class, str) and css_class else DEFAULTS.css_class,
        )

    def update(self, candidate: Mapping[str, Any], actor: Principal | None) -> NoticeConfig:
        if not self.is_authorized(actor):
            logger.warning(
                "header_notice: update rejected code=unauthorized actor=%s",
                getattr(actor, "subject", None),
            )
            raise Unauthorized()
        try:
            changes = self._validate(candidate)
        except InvalidInput as e:
            logger.warning(
                "header_notice: update rejected code=%s field=%s actor=%s",
                e.code, e.field, actor.subject,
            )
            raise
        merged = dataclasses.replace(self.get(), **changes)
        self.store.set(OPTION_KEY, merged.to_options())
        logger.info(
            "header_notice: updated actor=%s fields=%s",
            actor.subject, ",".join(sorted(changes)) or "-",
        )
        return merged

    def should_display(self, now: datetime, context: PageContext) -> bool:
        return should_display(self.get(), now, context, self.tz)

    def _validate(self, candidate: Mapping[str, Any]) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        if "text" in candidate:
            text = candidate["text"]
            if text is None:
                text = ""
            if not isinstance(text, str):
                raise InvalidInput("text", "Notice text must be a string")
            # markup allowance; larger bodies are refused before parsing
            if len(text) > self.max_text_length * RAW_TEXT_FACTOR:
                raise InvalidInput(
                    "text", f"Notice text must be at most {self.max_text_length} characters"
                )
            text = sanitize_notice_text(text)
            if len(text) > self.max_text_length:
                raise InvalidInput(
                    "text", f"Notice text must be at most {self.max_text_length} characters"
                )
            changes["text"] = text
        if "type" in candidate:
            raw_type = candidate["type"]
            try:
                changes["type"] = DEFAULTS.type if raw_type is None else _coerce_enum(NoticeType, raw_type)
            except ValueError:
                allowed = ", ".join(t.value for t in NoticeType)
                raise InvalidInput("type", f"Notice type must be one of: {allowed}")
        if "scope" in candidate:
            raw_scope = candidate["scope"]
            try:
                changes["scope"] = DEFAULTS.scope if raw_scope is None else _coerce_enum(NoticeScope, raw_scope)
            except ValueError:
                allowed = ", ".join(s.value for s in NoticeScope)
                raise InvalidInput("scope", f"Notice scope must be one of: {allowed}")
        if "expires_at" in candidate:
            changes["expires_at"] = self._validate_expiry(candidate["expires_at"])
        if "css_class" in candidate:
            changes["css_class"] = self._validate_css_class(candidate["css_class"])
        return changes

    def _validate_expiry(self, value: Any) -> datetime | None:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        try:
            expires_at = parse_instant(value, self.tz).astimezone(timezone.utc)
        except (TypeError, ValueError, OverflowError):
            raise InvalidInput("expires_at", "Expiry must be an ISO-8601 date and time")
        if expires_at <= self.clock():
            raise InvalidInput("expires_at", "Expiry must be in the future")
        return expires_at

    def _validate_css_class(self, value: Any) -> str:
        if value is None:
            return DEFAULT_CSS_CLASS
        if not isinstance(value, str):
            raise InvalidInput("css_class", "CSS class must be a string")
        tokens = value.split()
        if not tokens:
            return DEFAULT_CSS_CLASS
        for token in tokens:
            if not _CSS_TOKEN_RE.match(token):
                raise InvalidInput("css_class", f"Invalid CSS class name: {token[:40]}")
        return " ".join(tokens)
