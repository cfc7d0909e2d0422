"""
Service layer for business logic implementation.
Contains services for authentication, listings, reviews, profiles, content
and error handling.
"""

from .auth import AuthService
from .content import BlogService, ContactService
from .error_handler import ErrorHandlerService
from .property import PropertyService
from .review import ReviewService
from .user import UserService

__all__ = [
    "AuthService",
    "BlogService",
    "ContactService",
    "ErrorHandlerService",
    "PropertyService",
    "ReviewService",
    "UserService"
]
