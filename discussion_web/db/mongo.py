"""
MongoDB Connection Module

Client creation and the database existence probe used before every
MongoDB repository context is handed out.
"""

import logging
from typing import Optional

from pymongo import AsyncMongoClient
from pymongo.errors import ConfigurationError, PyMongoError

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT_MS = 5000


def create_client(connection_string: str, timeout_ms: Optional[int] = None) -> AsyncMongoClient:
    """
    Create an async MongoDB client

    Args:
        connection_string: MongoDB URI; must name the database
        timeout_ms: Server selection timeout (driver default when None)
    """
    options = {}
    if timeout_ms is not None:
        options["serverSelectionTimeoutMS"] = timeout_ms
    return AsyncMongoClient(connection_string, **options)


async def database_exists(
    connection_string: str, timeout_ms: int = DEFAULT_PROBE_TIMEOUT_MS
) -> bool:
    """
    Check that the database named in the connection string exists

    Returns False when the URI names no database, the server cannot be
    reached, or the database is not among the server's databases.
    """
    try:
        client = create_client(connection_string, timeout_ms)
    except (ConfigurationError, ValueError) as e:
        logger.warning(f"Invalid MongoDB connection string: {e}")
        return False

    try:
        try:
            database_name = client.get_default_database().name
        except ConfigurationError:
            logger.warning("MongoDB connection string does not name a database")
            return False
        names = await client.list_database_names()
        return database_name in names
    except PyMongoError as e:
        logger.warning(f"MongoDB database probe failed: {e}")
        return False
    finally:
        await client.close()
