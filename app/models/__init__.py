"""
Database models for the Rental Listing API.
Includes User, Property, Review, ContactMessage and BlogPost models.
"""

from app.models.user import User
from app.models.property import Property
from app.models.review import Review
from app.models.contact import ContactMessage
from app.models.blog import BlogPost

# Export all models for easy importing
__all__ = [
    "User",
    "Property",
    "Review",
    "ContactMessage",
    "BlogPost",
]
