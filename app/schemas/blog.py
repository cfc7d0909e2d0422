"""
Pydantic schemas for blog posts.
"""

from pydantic import Field
from typing import Optional

from app.schemas.base import CamelModel


class BlogPostCreate(CamelModel):
    """Schema for publishing a blog post."""

    title: str = Field(..., min_length=3, max_length=255)
    content: str = Field(..., min_length=1)
    cover_image: Optional[str] = Field(None, max_length=1024)
