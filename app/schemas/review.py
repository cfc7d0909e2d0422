"""
Pydantic schemas for review requests.
"""

from pydantic import Field
from typing import Optional
import uuid

from app.schemas.base import CamelModel


class ReviewCreate(CamelModel):
    """Schema for adding a review to a property."""

    property_id: uuid.UUID = Field(..., description="ID of the reviewed property")
    user: Optional[uuid.UUID] = Field(None, description="ID of the review author")
    username: Optional[str] = Field(None, max_length=255)
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5")
    comment: Optional[str] = Field(None, max_length=5000)
