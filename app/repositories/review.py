"""
Review repository.

Adding or deleting a review also rewrites the owning property's review id
list. The property row is re-read under a row lock before the list is
rebuilt, and both writes are committed in one transaction.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.repositories.base import BaseRepository
from app.models.review import Review
from app.models.property import Property
from app.utils.exceptions import PropertyNotFoundError
from typing import List, Dict, Any, Optional
import uuid
import logging

logger = logging.getLogger(__name__)


class ReviewRepository(BaseRepository[Review]):
    """Repository for reviews and their linkage to properties."""

    def __init__(self, db: AsyncSession):
        super().__init__(Review, db)

    async def _lock_property(self, property_id: uuid.UUID) -> Optional[Property]:
        """Reload a property with the latest committed review list, locking its row."""
        query = (
            select(Property)
            .where(Property.id == property_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def create_for_property(self, property_obj: Property, review_data: Dict[str, Any]) -> Review:
        """
        Create a review and append its id to the property's review list.

        Args:
            property_obj: Loaded property being reviewed
            review_data: Review column values

        Returns:
            Created review
        """
        property_id = property_obj.id
        try:
            locked = await self._lock_property(property_id)
            if locked is None:
                raise PropertyNotFoundError()

            review = Review(property_id=locked.id, **review_data)
            self.db.add(review)
            await self.db.flush()

            locked.review_ids = list(locked.review_ids or []) + [str(review.id)]

            await self.db.commit()
            await self.db.refresh(review)
            await self.db.refresh(property_obj)

            logger.info(f"Added review {review.id} to property {property_id}")
            return review
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to add review to property {property_id}: {e}")
            raise

    async def delete_and_unlink(self, review: Review) -> None:
        """
        Delete a review and pull its id from the owning property's list.

        A missing owning property is not an error; the review is still removed.
        """
        review_id = str(review.id)
        property_id = review.property_id
        try:
            property_obj = await self._lock_property(property_id)
            if property_obj is not None:
                property_obj.review_ids = [
                    rid for rid in (property_obj.review_ids or []) if rid != review_id
                ]

            await self.db.delete(review)
            await self.db.commit()

            logger.info(f"Deleted review {review_id} from property {property_id}")
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete review {review_id}: {e}")
            raise

    async def get_by_ids(self, review_ids: List[str]) -> List[Review]:
        """
        Resolve review ids into review records, preserving the given order.

        Ids with no matching review are skipped.
        """
        ids = []
        for rid in review_ids:
            try:
                ids.append(uuid.UUID(str(rid)))
            except ValueError:
                logger.warning(f"Skipping malformed review id: {rid}")

        if not ids:
            return []

        result = await self.db.execute(select(Review).where(Review.id.in_(ids)))
        by_id = {review.id: review for review in result.scalars().all()}
        return [by_id[rid] for rid in ids if rid in by_id]

    async def get_orphaned(self) -> List[Review]:
        """Get reviews whose property no longer exists."""
        query = (
            select(Review)
            .outerjoin(Property, Review.property_id == Property.id)
            .where(Property.id.is_(None))
            .order_by(Review.created_at.asc(), Review.id)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())
