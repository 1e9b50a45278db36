"""
FastAPI main application.

Entry point for the XRPL liquidity-mining dashboard backend.
"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from xrpl_dashboard.config import settings
from xrpl_dashboard.config.database import MongoConnectionManager
from xrpl_dashboard.core.exception_handlers import app_exception_handler, validation_exception_handler
from xrpl_dashboard.core.middleware import RequestLoggingMiddleware
from xrpl_dashboard.shared.exceptions import AppException
from xrpl_dashboard.utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Creates the MongoDB connection manager at startup and closes it at
    shutdown. A failed startup connection is logged and the application
    keeps serving; the health endpoint reports the degraded state.
    """
    # Startup
    logger.info("Starting application...")

    manager = MongoConnectionManager.from_settings(settings)
    app.state.mongo = manager

    result = await manager.initialize_with_retry(
        max_attempts=settings.CONNECT_MAX_ATTEMPTS,
        base_delay_ms=settings.CONNECT_BASE_DELAY_MS,
        max_delay_ms=settings.CONNECT_MAX_DELAY_MS,
        attempt_timeout_seconds=settings.CONNECT_ATTEMPT_TIMEOUT_SECONDS,
    )
    if result.success:
        logger.info(f"Application started successfully (database: {result.database})")
    else:
        logger.error(
            f"Application started without MongoDB after {result.attempts} attempt(s): {result.error}"
        )

    yield

    # Shutdown
    logger.info("Shutting down application...")

    try:
        await manager.close()
        logger.info("Application shut down successfully")
    except Exception as e:
        logger.error(f"Error during shutdown: {str(e)}")


API_DESCRIPTION = """
Analytics API for the XRPL liquidity-mining program.

Serves program metrics, per-miner order and deposit/withdrawal history, and a
database inspection tool, from the MongoDB collections written by the ledger
ingestion pipeline.

List endpoints accept `page` (1-based) and `limit` and answer:

```json
{
  "success": true,
  "data": [...],
  "pagination": {"page": 1, "limit": 15, "totalPages": 4, "totalCount": 52}
}
```

Errors answer `{"success": false, "error": "..."}`; the database tool
endpoints answer `{"status": "error", "error": "..."}`.

There is no authentication. Run on a trusted network.
"""

# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=API_DESCRIPTION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

app.add_middleware(RequestLoggingMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
from xrpl_dashboard.modules.dashboard.router import router as dashboard_router
from xrpl_dashboard.modules.transactions.router import router as transactions_router
from xrpl_dashboard.modules.miners.router import router as miners_router
from xrpl_dashboard.modules.mongodb.router import router as mongodb_router, info_router as mongodb_info_router
from xrpl_dashboard.modules.health.router import router as health_router

app.include_router(dashboard_router, prefix="/api")
app.include_router(transactions_router, prefix="/api")
app.include_router(miners_router, prefix="/api")
app.include_router(mongodb_router, prefix="/api")
app.include_router(mongodb_info_router, prefix="/api")
app.include_router(health_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }
