"""
Pydantic schemas for user registration, login and profile updates.
"""

from pydantic import Field, field_validator
from typing import Optional

from app.schemas.base import CamelModel


class UserCreate(CamelModel):
    """Schema for registering a new user."""

    email: str = Field(..., max_length=255, description="User email address")
    password: str = Field(..., min_length=8, max_length=128, description="Plain text password")
    full_name: str = Field(..., min_length=1, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=32)

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v):
        """Validate and clean full name."""
        if not v or not v.strip():
            raise ValueError("Full name cannot be empty")
        return v.strip()


class LoginRequest(CamelModel):
    """Schema for user login."""

    email: str = Field(..., description="User email address")
    password: str = Field(..., description="User password")


class UserUpdate(CamelModel):
    """
    Schema for updating the current user's profile.
    Only keys present in the body are applied.
    """

    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=32)

    def provided_fields(self) -> dict:
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }
