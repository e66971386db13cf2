"""Unified API error envelope (compatible with legacy clients)."""
from __future__ import annotations

import uuid

TRACE_SCOPE_KEY = "trace_id"


def ensure_trace_id(scope: dict) -> str:
    """Get or set trace_id on the ASGI scope; stable for the request lifecycle."""
    tid = scope.get(TRACE_SCOPE_KEY)
    if tid and isinstance(tid, str):
        return tid
    tid = str(uuid.uuid4())[:16]
    scope[TRACE_SCOPE_KEY] = tid
    return tid


def error_envelope(
    *,
    code: str,
    message: str,
    trace_id: str,
    detail: str | None = None,
    field: str | None = None,
    legacy_error: bool = True,
) -> dict:
    out = {
        "code": code,
        "message": message,
        "trace_id": trace_id,
    }
    if detail:
        out["detail"] = detail
    if field:
        out["field"] = field
    # Backward compatibility: existing clients read `error`.
    if legacy_error:
        out["error"] = code
    return out
