import logging
import re

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from docblog.core.config import Settings, get_settings
from docblog.core.errors import DocblogError, InternalError, StoreUnavailableError, ValidationError
from docblog.core.logging import configure_logging
from docblog.db.base import Base
from docblog.db.session import check_connection, engine
from docblog.routers import auth, blogs

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"]
CORS_HEADERS = [
    "Content-Type",
    "Authorization",
    "X-Requested-With",
    "X-CSRF-Token",
    "Accept",
    "Accept-Version",
    "Content-Length",
    "X-API-Version",
    "X-HTTP-Method-Override",
]
CORS_EXPOSE_HEADERS = ["set-cookie", "Authorization", "x-auth-token"]


def subdomain_origin_regex(parent_domain: str) -> str | None:
    if not parent_domain:
        return None
    return rf"https://([a-z0-9-]+\.)+{re.escape(parent_domain.lower())}"


def error_response(error: DocblogError, settings: Settings, cause: BaseException | None = None) -> JSONResponse:
    body: dict = {"success": False, "message": error.message, "error": error.code}
    if error.errors:
        body["errors"] = error.errors
    if not settings.is_production and cause is not None:
        body["detail"] = f"{type(cause).__name__}: {cause}"
    return JSONResponse(status_code=error.status_code, content=jsonable_encoder(body))


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(DocblogError)
    async def handle_domain_error(request: Request, exc: DocblogError) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("request_failed", extra={"path": request.url.path, "error_code": exc.code})
        return error_response(exc, settings, exc.__cause__)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        messages = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
            messages.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
        return error_response(ValidationError(errors=messages), settings)

    @app.exception_handler(OperationalError)
    @app.exception_handler(PoolTimeoutError)
    async def handle_store_unavailable(request: Request, exc: Exception) -> JSONResponse:
        logger.error("store_unavailable", extra={"path": request.url.path, "error": str(exc)})
        return error_response(StoreUnavailableError(), settings, exc)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging()
    app = FastAPI(title=settings.app_name, debug=settings.debug)

    # Registered before CORS so it runs inside it and 500s still carry CORS headers.
    @app.middleware("http")
    async def internal_error_middleware(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:  # noqa: BLE001
            logger.exception("unhandled_error", extra={"path": request.url.path})
            return error_response(InternalError(), settings, exc)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_origin_regex=subdomain_origin_regex(settings.cors_parent_domain),
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        expose_headers=CORS_EXPOSE_HEADERS,
        max_age=600,
    )
    register_exception_handlers(app, settings)

    app.include_router(auth.router)
    app.include_router(blogs.router)

    @app.on_event("startup")
    def startup() -> None:
        check_connection()
        if settings.auto_create_tables:
            Base.metadata.create_all(bind=engine)
        logger.info(
            "startup_complete",
            extra={"environment": settings.environment, "cors_origins": list(settings.cors_origins)},
        )

    @app.get("/api/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
