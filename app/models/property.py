"""
Property model for rental listings.
Handles owner contact data, location, classification, pricing and the
ordered image and review lists attached to a listing.
"""

from sqlalchemy import String, Text, Integer, Float, Boolean, JSON, Uuid, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
from app.database import Base
import uuid
from typing import List, Optional


class Property(Base):
    """
    Property model for managing rental listings.

    ``images`` holds hosted image URLs in upload order and ``review_ids``
    holds review identifiers in insertion order. Both are stored as JSON
    arrays and must be reassigned, not mutated in place, to be persisted.
    """

    __tablename__ = "properties"

    # Ownership
    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="ID of the user who listed this property"
    )

    slug: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Human readable unique identifier"
    )

    # Owner contact information
    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    owner_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    owners_contact_number: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    owners_alternate_contact_number: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    current_residence_of_owner: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Location information
    pincode: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        index=True,
        comment="City used by the city lookup and filter"
    )
    locality: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        index=True,
        comment="Locality used by the location lookup"
    )
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    location_link: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    nearest_landmark: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Classification
    space_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    property_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    bhk: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    floor: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Preferences and amenities
    preference: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    bachelors: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    gender_preference: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    type_of_washroom: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    cooling_facility: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    appliances: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    amenities: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    pets_allowed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    car_parking: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Pricing and size
    rent: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    security: Mapped[float] = mapped_column(Float, nullable=False)
    square_feet_area: Mapped[float] = mapped_column(Float, nullable=False)
    concession: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    subscription_amount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # Free text
    about_the_property: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    comment_by_analyst: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Ordered lists
    images: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Hosted image URLs in upload order"
    )

    review_ids: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Review identifiers in insertion order"
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, slug={self.slug}, rent={self.rent})>"

    def to_dict(self, reviews: Optional[list] = None) -> dict:
        """
        Convert property to dictionary.

        Args:
            reviews: Resolved review records to embed in place of the id list

        Returns:
            Dictionary representation of property
        """
        return {
            "id": str(self.id),
            "userId": str(self.user_id) if self.user_id else None,
            "slug": self.slug,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "ownerName": self.owner_name,
            "ownersContactNumber": self.owners_contact_number,
            "ownersAlternateContactNumber": self.owners_alternate_contact_number,
            "currentResidenceOfOwner": self.current_residence_of_owner,
            "pincode": self.pincode,
            "city": self.city,
            "locality": self.locality,
            "address": self.address,
            "locationLink": self.location_link,
            "nearestLandmark": self.nearest_landmark,
            "spaceType": self.space_type,
            "propertyType": self.property_type,
            "type": self.type,
            "bhk": self.bhk,
            "floor": self.floor,
            "preference": self.preference,
            "bachelors": self.bachelors,
            "genderPreference": self.gender_preference,
            "typeOfWashroom": self.type_of_washroom,
            "coolingFacility": self.cooling_facility,
            "appliances": self.appliances,
            "amenities": self.amenities,
            "petsAllowed": self.pets_allowed,
            "carParking": self.car_parking,
            "rent": self.rent,
            "security": self.security,
            "squareFeetArea": self.square_feet_area,
            "concession": self.concession,
            "subscriptionAmount": self.subscription_amount,
            "aboutTheProperty": self.about_the_property,
            "comments": self.comments,
            "commentByAnalyst": self.comment_by_analyst,
            "images": list(self.images or []),
            "reviews": reviews if reviews is not None else list(self.review_ids or []),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


# Composite index for the filter endpoint's most common facets
filter_index = Index(
    'idx_properties_city_bhk_type',
    Property.city,
    Property.bhk,
    Property.property_type
)
