"""
Common Utilities Module
"""

from discussion_web.common.errors import (
    AppError,
    NotFoundError,
    StorageConfigurationError,
)

__all__ = [
    "AppError",
    "NotFoundError",
    "StorageConfigurationError",
]
