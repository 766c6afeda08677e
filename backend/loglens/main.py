from contextlib import asynccontextmanager
from fastapi import FastAPI
from loglens.api.routes import router
from loglens.core.config import settings
from loglens.core.cors import setup_cors
from loglens.core.logging import setup_logging, get_logger
from loglens.services.session import SessionHolder

# Setup logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    # Startup
    logger.info("Starting LogLens API...")
    logger.info(
        f"Top groups: {settings.top_n}, group key: {settings.group_key_policy.value}")

    yield

    # Shutdown
    logger.info("Shutting down LogLens API...")


def create_app() -> FastAPI:
    app = FastAPI(
        title="LogLens API",
        description="Error and warning analysis for multi-line text logs",
        version="1.0.0",
        lifespan=lifespan
    )

    # State lives in memory only and is dropped with the process
    app.state.session = SessionHolder()

    # Setup CORS
    setup_cors(app)

    # Include API routes
    app.include_router(router)

    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "LogLens API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/api/health"
        }

    return app


app = create_app()
