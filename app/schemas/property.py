"""
Pydantic schemas for property requests.
Handles property creation, partial updates and the numeric field invariant.
"""

from pydantic import Field, field_validator
from typing import Optional
import math

from app.schemas.base import CamelModel


NUMERIC_FIELDS = ("rent", "security", "bhk", "square_feet_area")


def parse_number(value) -> Optional[float]:
    """
    Parse a form value into a finite, non-negative number.

    Returns None when the value is missing or is not such a number.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def parse_form_bool(value) -> bool:
    """Only the string ``"true"`` (any case) counts as true."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


class PropertyFields(CamelModel):
    """Free text fields shared by create and update."""

    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    owner_name: Optional[str] = Field(None, max_length=255)
    owners_contact_number: Optional[str] = Field(None, max_length=32)
    owners_alternate_contact_number: Optional[str] = Field(None, max_length=32)
    current_residence_of_owner: Optional[str] = Field(None, max_length=255)

    pincode: Optional[str] = Field(None, max_length=16)
    city: Optional[str] = Field(None, max_length=100)
    locality: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = None
    location_link: Optional[str] = Field(None, max_length=1024)
    nearest_landmark: Optional[str] = Field(None, max_length=255)

    space_type: Optional[str] = Field(None, max_length=100)
    property_type: Optional[str] = Field(None, max_length=100)
    type: Optional[str] = Field(None, max_length=100)
    floor: Optional[str] = Field(None, max_length=50)

    preference: Optional[str] = Field(None, max_length=100)
    bachelors: Optional[str] = Field(None, max_length=100)
    gender_preference: Optional[str] = Field(None, max_length=50)
    type_of_washroom: Optional[str] = Field(None, max_length=100)
    cooling_facility: Optional[str] = Field(None, max_length=100)
    appliances: Optional[str] = None
    amenities: Optional[str] = None

    about_the_property: Optional[str] = None
    comments: Optional[str] = None
    comment_by_analyst: Optional[str] = None


class PropertyCreate(PropertyFields):
    """Schema for a new listing after form values have been coerced."""

    bhk: int = Field(..., ge=0, description="Number of bedrooms, hall and kitchen")
    rent: float = Field(..., ge=0, allow_inf_nan=False, description="Monthly rent")
    security: float = Field(..., ge=0, allow_inf_nan=False, description="Security deposit")
    square_feet_area: float = Field(..., ge=0, allow_inf_nan=False, description="Area in square feet")
    concession: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    subscription_amount: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    pets_allowed: bool = False
    car_parking: bool = False

    @field_validator("bhk", mode="before")
    @classmethod
    def validate_bhk(cls, v):
        """Accept integral numbers given as floats or strings."""
        number = parse_number(v)
        if number is None or not number.is_integer():
            raise ValueError("bhk must be a non-negative whole number")
        return int(number)


class PropertyUpdate(PropertyFields):
    """
    Schema for a partial property update.

    A field counts as provided when its key is present in the body with a
    non-null value; ``0``, ``""`` and ``false`` are all applied.
    """

    bhk: Optional[int] = Field(None, ge=0)
    rent: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    security: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    square_feet_area: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    concession: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    subscription_amount: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    pets_allowed: Optional[bool] = None
    car_parking: Optional[bool] = None

    @field_validator("bhk", mode="before")
    @classmethod
    def validate_bhk(cls, v):
        """Accept integral numbers given as floats or strings."""
        if v is None:
            return v
        number = parse_number(v)
        if number is None or not number.is_integer():
            raise ValueError("bhk must be a non-negative whole number")
        return int(number)

    def provided_fields(self) -> dict:
        """Fields present in the request body with a non-null value."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }
