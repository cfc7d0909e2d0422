"""
Pydantic schemas for the contact form.
"""

from pydantic import Field, field_validator
from typing import Optional

from app.schemas.base import CamelModel
from app.models.user import User


class ContactCreate(CamelModel):
    """Schema for a contact form submission."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255)
    phone_number: Optional[str] = Field(None, max_length=32)
    subject: Optional[str] = Field(None, max_length=255)
    message: str = Field(..., min_length=1, max_length=5000)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        """Validate and normalize email."""
        return User.validate_email_format(v)
