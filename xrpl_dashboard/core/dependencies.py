"""
FastAPI dependencies.

The connection manager is created in the application lifespan and stored on
``app.state``; handlers reach the database only through these dependencies.
"""

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from xrpl_dashboard.config.database import MongoConnectionManager
from xrpl_dashboard.config.settings import settings
from xrpl_dashboard.repositories.order_repository import OrderRepository
from xrpl_dashboard.repositories.query_executor import QueryExecutor
from xrpl_dashboard.shared.exceptions import DatabaseUnavailable
from xrpl_dashboard.utils.logger import get_logger

logger = get_logger(__name__)


def get_connection_manager(request: Request) -> MongoConnectionManager:
    """
    Connection manager owned by the running application.

    Raises:
        DatabaseUnavailable: If the application was started without one
    """
    manager = getattr(request.app.state, "mongo", None)
    if manager is None:
        logger.error("No MongoDB connection manager on application state")
        raise DatabaseUnavailable("MongoDB connection manager is not initialized")
    return manager


async def get_database(
    manager: MongoConnectionManager = Depends(get_connection_manager)
) -> AsyncIOMotorDatabase:
    """
    FastAPI dependency to get the resolved database.

    Returns:
        AsyncIOMotorDatabase: Database chosen by the connection manager
    """
    return await manager.get_database()


async def get_query_executor(
    db: AsyncIOMotorDatabase = Depends(get_database)
) -> QueryExecutor:
    """Query executor bound to the resolved database."""
    return QueryExecutor(db, timeout_seconds=settings.QUERY_TIMEOUT_SECONDS)


async def get_order_repository(
    executor: QueryExecutor = Depends(get_query_executor)
) -> OrderRepository:
    return OrderRepository(executor)
