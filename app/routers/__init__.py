"""
API route handlers for the Rental Listing API.
"""

from .auth import router as auth_router
from .content import blog_router, contact_router
from .properties import router as properties_router
from .users import router as users_router

__all__ = ["auth_router", "blog_router", "contact_router", "properties_router", "users_router"]
