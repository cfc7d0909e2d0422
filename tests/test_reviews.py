"""
Tests for reviews and their linkage to properties.
"""

import uuid

import pytest
from sqlalchemy import func, select

from app.models.property import Property
from app.models.review import Review
from app.repositories.review import ReviewRepository
from app.schemas.review import ReviewCreate
from app.services.property import PropertyService
from app.services.review import ReviewService
from app.utils.exceptions import PropertyNotFoundError, ReviewNotFoundError


@pytest.fixture
def review_service(db_session) -> ReviewService:
    return ReviewService(db_session)


def review_for(property_id, rating: int = 4, **overrides) -> ReviewCreate:
    data = {"propertyId": str(property_id), "username": "tenant", "rating": rating, "comment": "Good"}
    data.update(overrides)
    return ReviewCreate.model_validate(data)


class TestAddReview:

    async def test_appends_id_to_property(self, review_service, test_property, property_repository, db_session):
        first = await review_service.add_review(review_for(test_property.id, rating=5))
        second = await review_service.add_review(review_for(test_property.id, rating=3))

        await db_session.refresh(test_property)
        assert test_property.review_ids == [str(first.id), str(second.id)]
        assert first.property_id == test_property.id

    async def test_missing_property_stores_nothing(self, review_service, db_session):
        with pytest.raises(PropertyNotFoundError):
            await review_service.add_review(review_for(uuid.uuid4()))

        result = await db_session.execute(select(func.count(Review.id)))
        assert result.scalar() == 0

    def test_rating_bounds(self):
        with pytest.raises(ValueError):
            review_for(uuid.uuid4(), rating=6)


class TestDeleteReview:

    async def test_removes_id_from_property(self, review_service, test_property, db_session):
        keep = await review_service.add_review(review_for(test_property.id))
        drop = await review_service.add_review(review_for(test_property.id))

        await review_service.delete_review(drop.id)

        await db_session.refresh(test_property)
        assert test_property.review_ids == [str(keep.id)]
        with pytest.raises(ReviewNotFoundError):
            await review_service.get_review(drop.id)

    async def test_missing_review(self, review_service):
        with pytest.raises(ReviewNotFoundError):
            await review_service.delete_review(uuid.uuid4())


class TestOrphanedReviews:
    """Deleting a property keeps its reviews."""

    async def test_property_delete_keeps_reviews(
        self, review_service, test_property, test_owner, db_session, fake_uploader
    ):
        review = await review_service.add_review(review_for(test_property.id))
        property_service = PropertyService(db_session, media_uploader=fake_uploader)

        await property_service.delete_property(test_property.id, test_owner.id)

        with pytest.raises(PropertyNotFoundError):
            await property_service.get_property_with_reviews(test_property.id)

        still_there = await review_service.get_review(review.id)
        assert still_there.property_id == test_property.id

        orphaned = await review_service.list_orphaned_reviews()
        assert [r.id for r in orphaned] == [review.id]

    async def test_no_orphans_while_property_exists(self, review_service, test_property):
        await review_service.add_review(review_for(test_property.id))
        assert await review_service.list_orphaned_reviews() == []

    async def test_deleting_orphaned_review(self, review_service, review_repository, db_session):
        orphan = Review(property_id=uuid.uuid4(), rating=2, comment="Gone")
        db_session.add(orphan)
        await db_session.commit()

        await review_service.delete_review(orphan.id)

        assert await review_service.list_orphaned_reviews() == []


class TestExpandedReviews:

    async def test_reviews_in_list_order(self, review_service, test_property, db_session, fake_uploader):
        first = await review_service.add_review(review_for(test_property.id, rating=1))
        second = await review_service.add_review(review_for(test_property.id, rating=2))
        property_service = PropertyService(db_session, media_uploader=fake_uploader)

        property_obj, reviews = await property_service.get_property_with_reviews(test_property.id)

        assert [r.id for r in reviews] == [first.id, second.id]
        assert property_obj.to_dict(reviews=[r.to_dict() for r in reviews])["reviews"][1]["rating"] == 2


class TestOverlappingReviewWrites:
    """Two sessions writing reviews for the same property."""

    async def test_interleaved_adds_keep_both_ids(self, session_factory, test_property):
        async with session_factory() as first_session, session_factory() as second_session:
            first_copy = await first_session.get(Property, test_property.id)
            second_copy = await second_session.get(Property, test_property.id)

            first = await ReviewRepository(first_session).create_for_property(first_copy, {"rating": 4})
            second = await ReviewRepository(second_session).create_for_property(second_copy, {"rating": 2})

        async with session_factory() as fresh:
            stored = await fresh.get(Property, test_property.id)
            assert sorted(stored.review_ids) == sorted([str(first.id), str(second.id)])

    async def test_interleaved_deletes_remove_both_ids(self, session_factory, review_service, test_property):
        first = await review_service.add_review(review_for(test_property.id))
        second = await review_service.add_review(review_for(test_property.id))

        async with session_factory() as first_session, session_factory() as second_session:
            await first_session.get(Property, test_property.id)
            await second_session.get(Property, test_property.id)
            first_review = await first_session.get(Review, first.id)
            second_review = await second_session.get(Review, second.id)

            await ReviewRepository(first_session).delete_and_unlink(first_review)
            await ReviewRepository(second_session).delete_and_unlink(second_review)

        async with session_factory() as fresh:
            stored = await fresh.get(Property, test_property.id)
            assert stored.review_ids == []
