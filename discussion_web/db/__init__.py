"""
Database Module Initialization
"""

from discussion_web.db.mongo import create_client, database_exists

__all__ = [
    "create_client",
    "database_exists",
]
