"""
Repository layer for data access operations.
Provides database operations with proper error handling and logging.
"""

from app.repositories.base import BaseRepository
from app.repositories.property import PropertyRepository
from app.repositories.review import ReviewRepository
from app.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "PropertyRepository",
    "ReviewRepository",
    "UserRepository"
]
