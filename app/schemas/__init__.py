"""
Pydantic schemas for request validation.
"""

from .base import CamelModel
from .property import PropertyCreate, PropertyUpdate
from .review import ReviewCreate
from .user import UserCreate, UserUpdate, LoginRequest
from .contact import ContactCreate
from .blog import BlogPostCreate

__all__ = [
    "CamelModel",
    "PropertyCreate",
    "PropertyUpdate",
    "ReviewCreate",
    "UserCreate",
    "UserUpdate",
    "LoginRequest",
    "ContactCreate",
    "BlogPostCreate",
]
