"""FastAPI entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from apps.header_notice.routers import admin_notice, auth, health, notice
from apps.header_notice.services.notice_settings import ConfigError, Unauthorized
from apps.header_notice.utils.api_errors import ensure_trace_id, error_envelope

logger = logging.getLogger(__name__)


app = FastAPI(
    title="Header Notice",
    description="Dismissible site header notice with an admin settings screen",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, tags=["System"])
app.include_router(auth.router, prefix="/v1/admin/auth", tags=["Admin Auth"])
app.include_router(admin_notice.router, prefix="/v1/admin/notice", tags=["Admin Notice"])
app.include_router(notice.router, prefix="/v1/notice", tags=["Notice"])


@app.exception_handler(ConfigError)
async def config_error_handler(request: Request, exc: ConfigError):
    """Rejected settings update: report the failing rule back to the settings screen."""
    trace_id = ensure_trace_id(request.scope)
    status_code = 403 if isinstance(exc, Unauthorized) else 422
    payload = error_envelope(code=exc.code, message=exc.message, trace_id=trace_id, field=exc.field)
    resp = JSONResponse(content=payload, status_code=status_code)
    resp.headers["X-Trace-Id"] = trace_id
    return resp


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    if not isinstance(detail, str):
        detail = str(detail) if detail else "Error"
    return JSONResponse(content={"detail": detail}, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    trace_id = ensure_trace_id(request.scope)
    logger.exception("Unhandled exception trace_id=%s path=%s", trace_id, request.url.path)
    payload = error_envelope(code="internal_error", message="Internal server error", trace_id=trace_id)
    resp = JSONResponse(content=payload, status_code=500)
    resp.headers["X-Trace-Id"] = trace_id
    return resp
