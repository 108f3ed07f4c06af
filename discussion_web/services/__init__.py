"""
Service Layer Module Initialization
"""

from discussion_web.services.storage import (
    InMemoryStorageBackend,
    MongoStorageBackend,
    StorageBackend,
    add_data_services,
    has_connection_string,
)

__all__ = [
    "InMemoryStorageBackend",
    "MongoStorageBackend",
    "StorageBackend",
    "add_data_services",
    "has_connection_string",
]
