# ============================================================================
# FILE: visual_learning/__init__.py
# ============================================================================
"""Visual Learning API - Application Factory"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
import logging

from visual_learning.core.config import Settings, settings, validate_runtime_config
from visual_learning.core.database import DocumentStore
from visual_learning.core.errors import register_exception_handlers
from visual_learning.core.payment_provider import PaymentProvider
from visual_learning.api.routes import router as api_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown"""
    # Startup
    try:
        logger.info("Starting application...")
        app.state.store.open()
        logger.info("✓ Document store ready")
    except Exception as e:
        logger.error(f"Failed to open document store: {e}")
        raise

    yield

    # Shutdown
    try:
        app.state.store.close()
    except Exception as e:
        logger.error(f"Error closing document store: {e}")


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application"""
    config = config or settings
    validate_runtime_config(config)

    app = FastAPI(
        title=config.API_TITLE,
        description="Course marketplace: users, classes, enrollments and payments",
        version=config.API_VERSION,
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
        lifespan=lifespan
    )
    app.state.settings = config
    app.state.store = DocumentStore(config.mongo_uri, config.DATABASE_NAME)
    app.state.payment_provider = PaymentProvider(
        secret_key=config.PAYMENT_SECRET_KEY,
        api_url=config.PAYMENT_API_URL,
        currency=config.PAYMENT_CURRENCY,
        timeout=config.PAYMENT_TIMEOUT_SECONDS,
    )

    # CORS Configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return config.WELCOME_MESSAGE

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        database_ok = await app.state.store.ping()
        return JSONResponse(
            status_code=200 if database_ok else 503,
            content={
                "status": "healthy" if database_ok else "unhealthy",
                "database": database_ok,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "version": config.API_VERSION
            },
        )

    logger.info("FastAPI application created")
    return app


# Create app instance
app = create_app()
