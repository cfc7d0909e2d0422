"""
Review service: adding and removing reviews on listings.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.review import Review
from app.repositories.property import PropertyRepository
from app.repositories.review import ReviewRepository
from app.schemas.review import ReviewCreate
from app.utils.exceptions import PropertyNotFoundError, ReviewNotFoundError
import uuid
import logging

logger = logging.getLogger(__name__)


class ReviewService:
    """Keeps a property's review id list in step with its review records."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)
        self.review_repo = ReviewRepository(db_session)

    async def add_review(self, review_data: ReviewCreate) -> Review:
        """
        Add a review to an existing property.

        Raises:
            PropertyNotFoundError: If the property does not exist; nothing is stored
        """
        property_obj = await self.property_repo.get_by_id(review_data.property_id)
        if not property_obj:
            raise PropertyNotFoundError()

        return await self.review_repo.create_for_property(
            property_obj,
            {
                "user_id": review_data.user,
                "username": review_data.username,
                "rating": review_data.rating,
                "comment": review_data.comment,
            }
        )

    async def delete_review(self, review_id: uuid.UUID) -> None:
        """
        Raises:
            ReviewNotFoundError: If the review does not exist
        """
        review = await self.get_review(review_id)
        await self.review_repo.delete_and_unlink(review)

    async def get_review(self, review_id: uuid.UUID) -> Review:
        review = await self.review_repo.get_by_id(review_id)
        if not review:
            raise ReviewNotFoundError()
        return review

    async def list_orphaned_reviews(self) -> List[Review]:
        """Reviews left behind by deleted properties."""
        reviews = await self.review_repo.get_orphaned()
        if reviews:
            logger.info(f"Found {len(reviews)} orphaned reviews")
        return reviews
