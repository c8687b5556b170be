# ecommerce/main.py
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from ecommerce.shared.config import AppEnv, Settings, StorageBackend, settings as default_settings
from ecommerce.shared.container import Container, build_container
from ecommerce.shared.logging_config import configure_logging
from ecommerce.shared.telemetry import setup_telemetry, instrument_fastapi
from ecommerce.adapters.api.routers import auth, health, orders, products

logger = structlog.get_logger()


def _error_body(code: int, message) -> dict:
    return {"status": "error", "code": code, "message": message}


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Validation failed: malformed request"
    first = errors[0]
    # Drop the leading "body"/"path"/"query" segment.
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    reason = first.get("msg", "invalid value")
    return f"Validation failed: {field}: {reason}" if field else f"Validation failed: {reason}"


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[Container] = None,
) -> FastAPI:
    """
    Factory function to create the FastAPI application.

    `container` may be supplied pre-built (tests override providers on it);
    otherwise one is built from `settings`.
    """
    settings = settings or default_settings
    configure_logging(settings)

    if settings.APP_ENV == AppEnv.PRODUCTION and settings.uses_default_secret:
        raise RuntimeError("JWT_SECRET must be set in production")

    container = container or build_container(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        Application Lifecycle Manager.
        Handles startup (Telemetry, schema creation) and shutdown.
        """
        setup_telemetry(settings)
        logger.info(
            "app_startup",
            env=settings.APP_ENV.value,
            storage=settings.STORAGE_BACKEND.value,
        )

        if settings.STORAGE_BACKEND == StorageBackend.SQL:
            await container.database().create_all()

        yield

        logger.info("app_shutdown")
        if settings.STORAGE_BACKEND == StorageBackend.SQL:
            await container.database().dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        description="E-commerce backend: accounts, product catalog and orders",
        docs_url="/docs" if settings.APP_ENV != AppEnv.PRODUCTION else None,
        redoc_url="/redoc" if settings.APP_ENV != AppEnv.PRODUCTION else None,
        lifespan=lifespan,
    )
    app.state.container = container
    app.state.settings = settings

    # CORS: allow all in Dev
    origins = ["*"] if settings.APP_ENV != AppEnv.PRODUCTION else []

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    instrument_fastapi(app, settings)

    # Global Exception Handlers
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Standardizes HTTP errors (including 401 auth failures).
        """
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.status_code, exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Malformed bodies and path parameters are client errors (400)."""
        message = _first_validation_message(exc)
        logger.info("request_rejected", path=request.url.path, reason=message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(status.HTTP_400_BAD_REQUEST, message),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catches unhandled exceptions to avoid leaking stack traces in Prod.
        """
        logger.error("unhandled_exception", path=request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(
                500,
                "Internal Server Error" if not settings.DEBUG else str(exc),
            ),
        )

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(products.router)
    app.include_router(orders.router)

    return app


# Entry point for Uvicorn (`uvicorn ecommerce.main:app`)
app = create_app()


# Entry point for local debugging (e.g. `python -m ecommerce.main`)
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "ecommerce.main:create_app",
        host="0.0.0.0",
        port=8000,
        reload=default_settings.DEBUG,
        factory=True,
    )
