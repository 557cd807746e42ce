from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from .db.engine import Database
from .db.errors import DbConflict, DbError, DbNotFound, DbUnavailable, DbValidation
from .envelopes import error_response
from .middleware.access_log import AccessLogMiddleware
from .middleware.cors import build_allowed_origins
from .middleware.locale import LocaleMiddleware
from .middleware.normalize_path import NormalizePathMiddleware
from .middleware.request_context import RequestContextMiddleware
from .observability.logging import configure_logging, get_logger
from .repositories import describe_pattern
from .routers.articles import router as articles_router
from .routers.categories import router as categories_router
from .routers.health import router as health_router
from .settings import Settings, get_settings


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    # Logging must be configured before the app starts handling requests.
    configure_logging(level=settings.log_level)
    log = get_logger("startup")

    db = Database.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.db_auto_create:
            db.create_schema()
        log.info(
            "app_ready",
            pattern=db.pattern,
            description=describe_pattern(db.pattern),
            port=settings.port,
        )
        try:
            yield
        finally:
            db.dispose()
            log.info("app_stopped")

    app = FastAPI(
        title="Polyglot Blog API",
        version="1.0.0",
        default_response_class=ORJSONResponse,
        # Trailing slashes are normalized in-place (see NormalizePathMiddleware).
        redirect_slashes=False,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = db

    log.info("app_starting", settings=settings.to_log_safe_dict())

    # Middlewares (order matters; last added is outermost)
    app.add_middleware(LocaleMiddleware)
    app.add_middleware(AccessLogMiddleware, exclude_paths={"/health"})
    app.add_middleware(
        CORSMiddleware,
        allow_origins=build_allowed_origins(frontend_urls=settings.frontend_urls),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept-Language", "X-Request-Id"],
        expose_headers=["X-Request-Id", "Content-Language"],
        max_age=3000,
    )
    app.add_middleware(RequestContextMiddleware)
    # Outermost: path rewriting must happen before routing.
    app.add_middleware(NormalizePathMiddleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DbError, _db_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_exception_handler)

    # Routes
    app.include_router(health_router)
    app.include_router(articles_router, prefix="/api/articles")
    app.include_router(categories_router, prefix="/api/categories")

    return app


def _db_error_handler(request: Request, exc: DbError) -> Response:
    # Map storage-layer errors to stable HTTP semantics.
    status_code = 500
    error = "Storage Error"

    if isinstance(exc, DbValidation):
        status_code = 400
        error = "Bad Request"
    elif isinstance(exc, DbNotFound):
        status_code = 404
        error = exc.message or "Not Found"
    elif isinstance(exc, DbConflict):
        status_code = 409
        error = "Conflict"
    elif isinstance(exc, DbUnavailable):
        status_code = 503
        error = "Service Unavailable"

    if status_code >= 500:
        get_logger("db").error("db_error", operation=exc.operation, entity=exc.entity, error=str(exc))
        extra = None
    else:
        # Tells the client which record the failure is about.
        extra = {k: v for k, v in {"entity": exc.entity, "key": exc.key}.items() if v}

    return error_response(request=request, status_code=status_code, error=error, message=str(exc), extra=extra)


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    status_code = int(getattr(exc, "status_code", 500) or 500)
    detail = getattr(exc, "detail", None)

    # Routes raise HTTPException(detail={"error": ..., "message"?: ...}).
    error: str | None = None
    message: str | None = None
    extra: dict[str, object] | None = None

    if isinstance(detail, dict):
        if isinstance(detail.get("error"), str):
            error = detail["error"]
        msg = detail.get("message")
        if isinstance(msg, str) and msg.strip():
            message = msg.strip()
    elif detail is not None:
        error = str(detail)

    if status_code == 404 and not isinstance(detail, dict):
        # Unknown route
        error = "Not Found"
        extra = {"path": request.url.path}

    return error_response(request=request, status_code=status_code, error=error, message=message, extra=extra)


def _validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
    errors: list[dict[str, object]] = []
    for e in exc.errors():
        loc = e.get("loc") or ()
        loc_path = ".".join([str(x) for x in loc if x != "body"])
        errors.append(
            {
                "path": loc_path,
                "message": e.get("msg", "Invalid value"),
                "type": e.get("type"),
            }
        )
    return error_response(
        request=request,
        status_code=400,
        error="Validation Failed",
        message="Request validation failed",
        errors=errors,
    )


def _unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    # Full traceback goes to the logs; the response stays generic in production.
    get_logger("unhandled").exception(
        "unhandled_exception",
        request_id=getattr(request.state, "request_id", None),
        http_method=str(request.method or "").upper() or None,
        path=request.url.path,
    )
    return error_response(
        request=request,
        status_code=500,
        error="Something went wrong!",
        message=str(exc) if exc else None,
    )
