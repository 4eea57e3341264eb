# main.py
from dotenv import load_dotenv
load_dotenv()
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn
import logging

from auntrack_api.core.config import get_settings
from auntrack_api.core.database import init_db
from auntrack_api.core.exceptions import ApplicationException
from auntrack_api.api import (
    auth_router,
    categories_router,
    events_router,
    users_router,
    export_router,
    health_api_router,
)

logger = logging.getLogger("AUNTRACK_API")

APP_LOGGERS = [
    "AUNTRACK_API",
    "CORE_CONFIG",
    "CORE_DATABASE",
    "CORE_SECURITY",
    "PERMISSIONS",
    "AUTH_API",
    "CATEGORIES_API",
    "EVENTS_API",
    "USERS_API",
    "HEALTH_API_LOGGER",
    "EVENT_EXPORT_SERVICE",
    "auntrack_api.db.init_db",
]


def configure_logging(level: str) -> None:
    """Route the application loggers through uvicorn's handler at ``level``."""
    uvicorn_logger = logging.getLogger("uvicorn")
    for logger_name in APP_LOGGERS:
        app_logger = logging.getLogger(logger_name)
        app_logger.setLevel(level.upper())
        if not app_logger.handlers and uvicorn_logger.handlers:
            app_logger.addHandler(uvicorn_logger.handlers[0])


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(get_settings().log_level)
    init_db()
    yield


def _error_body(detail: str, error_code: str, details=None) -> dict:
    body = {"detail": detail, "error_code": error_code}
    if details:
        body["details"] = details
    return body


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    ctx_error = (first.get("ctx") or {}).get("error")
    if ctx_error is not None:
        return str(ctx_error)
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first.get('msg')}" if location else first.get("msg", "Invalid request")


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApplicationException)
    async def application_exception_handler(request: Request, exc: ApplicationException):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.error_code, exc.details or None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content=_error_body(_validation_message(exc), "VALIDATION_ERROR"),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail), "HTTP_ERROR"),
            headers=getattr(exc, "headers", None),
        )


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(auth_router, prefix="/api")
    app.include_router(categories_router, prefix="/api")
    app.include_router(events_router, prefix="/api")
    app.include_router(users_router, prefix="/api")
    app.include_router(export_router, prefix="/api")
    app.include_router(health_api_router, prefix="/api")

    @app.get("/")
    async def root():
        return {"message": f"Welcome to the {settings.app_name} API"}

    return app


app = create_app()


def run() -> None:
    settings = get_settings()

    if settings.environment.lower() == "production":
        # Production: Multiple workers, no reload
        uvicorn.run("auntrack_api.main:app", host=settings.api_host, port=settings.api_port, workers=4)
    else:
        # Development: Single worker with hot reload
        # Note: reload=True is incompatible with workers > 1
        uvicorn.run("auntrack_api.main:app", host=settings.api_host, port=settings.api_port, reload=True)


if __name__ == "__main__":
    run()
