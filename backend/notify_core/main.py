"""
Notify Core - FastAPI application

Exposes the recipient and template resolution core over HTTP:

    /api/v1/recipients      users configuration validation and resolution
    /api/v1/templates       placeholder catalogue and rendering
    /api/v1/notifications   per-recipient preview of a notification
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config.settings import settings
from .api.routes import api_router
from .api.middleware import CorrelationIdMiddleware, register_error_handlers
from .domain.enums import DataResolverType
from .repositories.mongo_client import create_indexes, close_connection, health_check
from .utils.logger import setup_logging, get_logger

APP_NAME = "Notify Core"
APP_VERSION = "1.0.0"
API_PREFIX = "/api/v1"

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {APP_NAME} {APP_VERSION} ({settings.environment})")
    try:
        create_indexes()
    except Exception as e:
        # The API still serves parsing and rendering without the store
        logger.error(f"Failed to create indexes: {e}")

    yield

    close_connection()
    logger.info(f"{APP_NAME} stopped")


def create_app() -> FastAPI:
    """Build the application with middleware, error handlers and routes"""
    docs_enabled = settings.debug
    application = FastAPI(
        title=APP_NAME,
        description="Resolves notification recipients and renders message templates for workflow tasks",
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/api/docs" if docs_enabled else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if docs_enabled else None,
    )

    _add_middleware(application)
    register_error_handlers(application)

    application.include_router(api_router, prefix=API_PREFIX)
    _add_service_routes(application)
    return application


def _add_middleware(app: FastAPI) -> None:
    allow_all = settings.cors_origins.strip() == "*"
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_origins_list,
        # Credentials cannot be combined with a wildcard origin
        allow_credentials=not allow_all,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-Id"],
    )
    app.add_middleware(CorrelationIdMiddleware)


def _add_service_routes(app: FastAPI) -> None:

    @app.get("/health", tags=["Health"])
    async def health():
        """Liveness plus MongoDB connectivity; degraded when the store is down"""
        mongo = health_check()
        return {
            "status": "healthy" if mongo["status"] == "healthy" else "degraded",
            "version": APP_VERSION,
            "environment": settings.environment,
            "mongo": mongo,
        }

    @app.get("/", tags=["Health"])
    async def root():
        return {
            "name": APP_NAME,
            "version": APP_VERSION,
            "api": API_PREFIX,
            "placeholders": len(DataResolverType),
        }


app = create_app()
