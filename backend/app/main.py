from __future__ import annotations
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.config import Settings, settings
from app.errors import RateLimitExceeded
from app.logging_setup import configure_logging
from app.routes.system import router as system_router
from app.routes.submissions import router as submissions_router
from app.services.mailer import EmailTransport
from app.services.notifier import build_notifier
from app.services.rate_limit import FixedWindowLimiter
import structlog

configure_logging()
log = structlog.get_logger()

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    cfg: Settings = app.state.settings
    notifier = app.state.notifier
    log.info(
        "startup",
        env=cfg.environment,
        version=cfg.app_version,
        git_sha=cfg.git_sha,
        port=cfg.api_port,
        admin_email=cfg.admin_email,
        email_service="SendGrid configured" if notifier else "SendGrid NOT configured",
    )
    if notifier is not None:
        await notifier.transport.verify()
    yield
    # Shutdown
    if notifier is not None:
        await notifier.transport.aclose()
    log.info("shutdown")


def create_app(cfg: Settings | None = None, transport: EmailTransport | None = None) -> FastAPI:
    """
    Build the API. The email transport is created once here (from
    SENDGRID_API_KEY unless one is passed in) and shared by every request.
    """
    cfg = cfg or settings
    app = FastAPI(
        title="MVP Submission API",
        version=cfg.app_version,
        lifespan=lifespan,
        description=f"{cfg.event_name} MVP submission relay",
    )
    app.state.settings = cfg
    app.state.notifier = build_notifier(cfg, transport)
    app.state.submit_limiter = FixedWindowLimiter(cfg.submit_rate_limit, cfg.submit_rate_window_seconds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(system_router)
    app.include_router(submissions_router)

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        rid = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = rid
        structlog.contextvars.bind_contextvars(request_id=rid)
        try:
            response: Response = await call_next(request)
        finally:
            structlog.contextvars.clear_contextvars()
        response.headers["X-Request-ID"] = rid
        return response

    @app.exception_handler(RateLimitExceeded)
    async def rate_limited(request: Request, exc: RateLimitExceeded):
        return JSONResponse(
            status_code=429,
            content={"error": exc.message},
            headers={"Retry-After": str(exc.retry_after), "X-RateLimit-Limit": str(exc.limit)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        # unknown paths and unsupported methods are both reported as missing endpoints
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"success": False, "message": "Endpoint not found"})
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        log.exception("unhandled_error", path=request.url.path)
        content = {"success": False, "message": "Internal server error"}
        if not cfg.is_production:
            content["error"] = str(exc)
        return JSONResponse(status_code=500, content=content)

    return app


app = create_app()
