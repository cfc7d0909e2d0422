"""
Review model for ratings and comments left on a property.
"""

from sqlalchemy import String, Text, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from app.database import Base
import uuid
from typing import Optional


class Review(Base):
    """
    Review attached to exactly one property.

    ``property_id`` is a plain reference rather than a foreign key: deleting a
    property leaves its reviews in place, still pointing at the old id.
    """

    __tablename__ = "reviews"

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True,
        comment="ID of the reviewed property"
    )

    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        nullable=True,
        index=True,
        comment="ID of the review author"
    )

    username: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, property_id={self.property_id}, rating={self.rating})>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "property": str(self.property_id),
            "user": str(self.user_id) if self.user_id else None,
            "username": self.username,
            "rating": self.rating,
            "comment": self.comment,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
