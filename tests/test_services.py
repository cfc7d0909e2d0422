"""
Tests for the property service: form coercion, atomic create, updates,
owner-only deletion and the read lookups.
"""

import io
import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from starlette.datastructures import Headers, UploadFile

from app.models.property import Property
from app.schemas.property import PropertyUpdate
from app.services.property import PropertyService
from app.utils.exceptions import (
    NotFoundError,
    PropertyNotFoundError,
    PropertyOwnershipError,
    ServerError,
    UnsupportedFileTypeError,
    UploadError,
    ValidationError
)
from app.utils.file_utils import TempUploadStorage


def make_upload(content: bytes, filename: str = "photo.png", content_type: str = "image/png") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type})
    )


@pytest.fixture
def property_service(db_session, fake_uploader, tmp_path) -> PropertyService:
    return PropertyService(
        db_session,
        media_uploader=fake_uploader,
        temp_storage=TempUploadStorage(tmp_path / "uploads")
    )


async def count_properties(db_session) -> int:
    result = await db_session.execute(select(func.count(Property.id)))
    return result.scalar()


class TestParseCreateForm:
    """Coercion of multipart string fields."""

    def test_numeric_strings_become_numbers(self, property_form):
        data = PropertyService.parse_create_form(property_form)

        assert data.bhk == 3
        assert data.rent == 18000.0
        assert data.security == 36000.5
        assert data.square_feet_area == 1250.0

    def test_only_true_string_is_true(self, property_form):
        data = PropertyService.parse_create_form(property_form)

        assert data.pets_allowed is True
        assert data.car_parking is False

    @pytest.mark.parametrize("field,value", [
        ("rent", "abc"),
        ("security", "-5"),
        ("bhk", "2.5"),
        ("squareFeetArea", "inf"),
        ("rent", "nan"),
    ])
    def test_invalid_numbers_rejected(self, property_form, field, value):
        property_form[field] = value

        with pytest.raises(ValidationError, match="Numeric fields must be valid numbers"):
            PropertyService.parse_create_form(property_form)

    def test_missing_numeric_field_rejected(self, property_form):
        del property_form["squareFeetArea"]

        with pytest.raises(ValidationError, match="Numeric fields must be valid numbers"):
            PropertyService.parse_create_form(property_form)

    def test_optional_amounts(self, property_form):
        property_form["concession"] = ""
        property_form["subscriptionAmount"] = "499"

        data = PropertyService.parse_create_form(property_form)

        assert data.concession is None
        assert data.subscription_amount == 499.0


class TestCreateProperty:
    """Atomic upload and create."""

    async def test_create_stores_numbers_and_images_in_order(
        self, property_service, property_form, image_bytes, test_owner, fake_uploader
    ):
        images = [make_upload(image_bytes, f"{name}.png") for name in ("front", "hall", "kitchen")]

        created = await property_service.create_property(property_form, images, test_owner.id)

        assert created.user_id == test_owner.id
        assert created.rent == 18000.0
        assert isinstance(created.bhk, int)
        assert created.review_ids == []
        assert created.slug.startswith("3-bhk-apartment-baner-pune-")
        assert created.images == [
            fake_uploader.hosted[public_id].url
            for public_id in sorted(fake_uploader.hosted)
        ]

    async def test_zero_images_rejected(self, property_service, property_form, test_owner, db_session):
        with pytest.raises(ValidationError, match="Image files are required"):
            await property_service.create_property(property_form, [], test_owner.id)

        assert await count_properties(db_session) == 0

    async def test_numeric_check_runs_before_image_check(self, property_service, property_form, test_owner):
        property_form["rent"] = "lots"

        with pytest.raises(ValidationError, match="Numeric fields must be valid numbers"):
            await property_service.create_property(property_form, [], test_owner.id)

    async def test_partial_upload_failure_persists_nothing(
        self, property_service, property_form, image_bytes, test_owner, fake_uploader, db_session, tmp_path
    ):
        fake_uploader.fail_on = {2}
        images = [make_upload(image_bytes, f"{index}.png") for index in range(4)]

        with pytest.raises(UploadError):
            await property_service.create_property(property_form, images, test_owner.id)

        assert await count_properties(db_session) == 0
        assert fake_uploader.hosted == {}
        assert len(fake_uploader.deleted) == 3
        assert list((tmp_path / "uploads").iterdir()) == []

    async def test_failed_insert_removes_hosted_images(
        self, property_service, property_form, image_bytes, test_owner, fake_uploader, monkeypatch
    ):
        async def failing_create(property_data):
            raise SQLAlchemyError("disk I/O error")

        monkeypatch.setattr(property_service.property_repo, "create_property", failing_create)
        images = [make_upload(image_bytes, f"{index}.png") for index in range(2)]

        with pytest.raises(ServerError, match="Something went wrong while creating property") as exc_info:
            await property_service.create_property(property_form, images, test_owner.id)

        assert exc_info.value.status_code == 500
        assert fake_uploader.hosted == {}
        assert len(fake_uploader.deleted) == 2

    async def test_non_image_file_rejected_before_upload(
        self, property_service, property_form, test_owner, fake_uploader
    ):
        images = [make_upload(b"plain text", "notes.txt", "text/plain")]

        with pytest.raises(UnsupportedFileTypeError):
            await property_service.create_property(property_form, images, test_owner.id)

        assert fake_uploader.calls == 0


class TestUpdateProperty:
    """Presence-based partial updates."""

    async def test_falsy_values_are_applied(self, property_service, test_property, test_owner):
        update = PropertyUpdate.model_validate({"rent": 0, "carParking": False, "comments": ""})

        updated = await property_service.update_property(test_property.id, update, test_owner.id)

        assert updated.rent == 0
        assert updated.car_parking is False
        assert updated.comments == ""

    async def test_absent_and_null_fields_untouched(self, property_service, test_property, test_owner):
        update = PropertyUpdate.model_validate({"city": None, "locality": "Indiranagar"})

        updated = await property_service.update_property(test_property.id, update, test_owner.id)

        assert updated.city == "Bangalore"
        assert updated.locality == "Indiranagar"
        assert updated.rent == 25000.0

    async def test_missing_property(self, property_service, test_owner):
        with pytest.raises(PropertyNotFoundError):
            await property_service.update_property(uuid.uuid4(), PropertyUpdate(), test_owner.id)

    async def test_property_without_owner(self, property_service, property_repository, property_factory, test_owner):
        orphan = await property_factory.create_property(property_repository, None)

        with pytest.raises(NotFoundError, match="User associated with this property not found"):
            await property_service.update_property(orphan.id, PropertyUpdate(rent=1), test_owner.id)

    async def test_non_owner_allowed_by_default(self, property_service, test_property, other_user):
        updated = await property_service.update_property(
            test_property.id, PropertyUpdate(rent=30000), other_user.id
        )
        assert updated.rent == 30000

    async def test_non_owner_rejected_when_enforced(
        self, property_service, test_property, other_user, monkeypatch
    ):
        monkeypatch.setattr(property_service.settings, "enforce_update_ownership", True)

        with pytest.raises(PropertyOwnershipError):
            await property_service.update_property(test_property.id, PropertyUpdate(rent=1), other_user.id)

    def test_invalid_bhk_rejected_by_schema(self):
        with pytest.raises(ValueError):
            PropertyUpdate.model_validate({"bhk": "two"})


class TestDeleteProperty:
    """Owner-only deletion."""

    async def test_non_owner_cannot_delete(self, property_service, test_property, other_user, property_repository):
        with pytest.raises(PropertyOwnershipError):
            await property_service.delete_property(test_property.id, other_user.id)

        assert await property_repository.get_by_id(test_property.id) is not None

    async def test_owner_deletes(self, property_service, test_property, test_owner, db_session):
        await property_service.delete_property(test_property.id, test_owner.id)

        assert await count_properties(db_session) == 0

    async def test_missing_property(self, property_service, test_owner):
        with pytest.raises(PropertyNotFoundError):
            await property_service.delete_property(uuid.uuid4(), test_owner.id)


class TestReadOperations:
    """Lookups that treat an empty result as not found."""

    async def test_get_all_on_empty_store(self, property_service):
        with pytest.raises(NotFoundError, match="No Property found"):
            await property_service.get_all_properties()

    async def test_get_all(self, property_service, test_property):
        properties = await property_service.get_all_properties()
        assert [p.id for p in properties] == [test_property.id]

    async def test_by_city(self, property_service, test_property):
        assert len(await property_service.get_properties_by_city("Bangalore")) == 1

        with pytest.raises(PropertyNotFoundError):
            await property_service.get_properties_by_city("Chennai")

    async def test_by_location(self, property_service, test_property):
        assert len(await property_service.get_properties_by_location("Koramangala")) == 1

        with pytest.raises(NotFoundError, match="No properties found in Whitefield"):
            await property_service.get_properties_by_location("Whitefield")

    async def test_by_slug(self, property_service, test_property):
        found = await property_service.get_property_by_slug(test_property.slug)
        assert found.id == test_property.id

        with pytest.raises(PropertyNotFoundError):
            await property_service.get_property_by_slug("no-such-slug")
