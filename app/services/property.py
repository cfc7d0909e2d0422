"""
Property service for managing property listings.
Handles form coercion, atomic image upload and create, updates, owner-only
deletion, the read lookups and the filter endpoint.
"""

from typing import Optional, List, Dict, Any, Sequence, Tuple
from pydantic import ValidationError as PydanticValidationError
from fastapi import UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.config import get_settings
from app.models.property import Property
from app.models.review import Review
from app.repositories.property import PropertyRepository
from app.repositories.review import ReviewRepository
from app.repositories.user import UserRepository
from app.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    NUMERIC_FIELDS,
    parse_number,
    parse_form_bool
)
from app.services.media import MediaUploader, discard_media, get_media_uploader, upload_all
from app.utils.exceptions import (
    NotFoundError,
    ValidationError,
    PropertyNotFoundError,
    PropertyOwnershipError,
    ServerError
)
from app.utils.file_utils import TempUploadStorage
from app.utils.property_filters import PropertyFilter
from app.utils.slugs import unique_suffix_slug
from pydantic.alias_generators import to_camel
import uuid
import logging

logger = logging.getLogger(__name__)

BOOLEAN_FIELDS = ("pets_allowed", "car_parking")


class PropertyService:
    """
    Property service for managing listings.
    Every operation works on one request's database session.
    """

    def __init__(
        self,
        db_session: AsyncSession,
        media_uploader: Optional[MediaUploader] = None,
        temp_storage: Optional[TempUploadStorage] = None
    ):
        self.db = db_session
        self.settings = get_settings()
        self.property_repo = PropertyRepository(db_session)
        self.review_repo = ReviewRepository(db_session)
        self.user_repo = UserRepository(db_session)
        self.media_uploader = media_uploader or get_media_uploader()
        self.temp_storage = temp_storage or TempUploadStorage()

    @staticmethod
    def parse_create_form(form: Dict[str, Any]) -> PropertyCreate:
        """
        Coerce multipart form strings into a validated PropertyCreate.

        Form keys are camelCase. Numeric fields must be finite non-negative
        numbers (bhk a whole number); booleans are true only for ``"true"``.

        Raises:
            ValidationError: If a numeric field is invalid or another field fails validation
        """
        data: Dict[str, Any] = {}
        for field in PropertyCreate.model_fields:
            key = to_camel(field)
            if key in form:
                data[field] = form[key]

        numbers = {field: parse_number(form.get(to_camel(field))) for field in NUMERIC_FIELDS}
        if any(value is None for value in numbers.values()) or not numbers["bhk"].is_integer():
            raise ValidationError("Numeric fields must be valid numbers")

        data.update(numbers)
        data["bhk"] = int(numbers["bhk"])

        for field in ("concession", "subscription_amount"):
            if data.get(field) in (None, ""):
                data.pop(field, None)

        for field in BOOLEAN_FIELDS:
            data[field] = parse_form_bool(form.get(to_camel(field), "false"))

        try:
            return PropertyCreate.model_validate(data)
        except PydanticValidationError as e:
            field_errors = [
                {"field": ".".join(str(loc) for loc in err["loc"]), "message": err["msg"]}
                for err in e.errors()
            ]
            raise ValidationError("Invalid property data", field_errors=field_errors)

    async def create_property(
        self,
        form: Dict[str, Any],
        images: Sequence[UploadFile],
        actor_id: uuid.UUID
    ) -> Property:
        """
        Create a listing from form fields and image files.

        Every image is uploaded concurrently. If any upload fails, the ones
        that succeeded are removed from the media host and nothing is stored.

        Args:
            form: camelCase form fields
            images: Uploaded image files, in display order
            actor_id: Authenticated owner

        Returns:
            Created property

        Raises:
            ValidationError: Invalid numeric fields, missing or invalid images
            UploadError: If any image failed to upload
            ServerError: If the listing could not be stored
        """
        property_data = self.parse_create_form(form)

        if not images:
            raise ValidationError("Image files are required")

        slug = await self._generate_slug(property_data)

        temp_paths = []
        try:
            for image in images:
                temp_paths.append(await self.temp_storage.save(image, self.settings.max_image_size))

            uploaded = await upload_all(self.media_uploader, temp_paths)
        finally:
            await self.temp_storage.cleanup(temp_paths)

        create_data = property_data.model_dump()
        create_data.update({
            "user_id": actor_id,
            "slug": slug,
            "images": [media.url for media in uploaded],
            "review_ids": [],
        })

        try:
            property_obj = await self.property_repo.create_property(create_data)
        except SQLAlchemyError as e:
            await discard_media(self.media_uploader, uploaded)
            logger.error(f"Failed to store property for user {actor_id}: {e}")
            raise ServerError("Something went wrong while creating property") from e
        except Exception:
            await discard_media(self.media_uploader, uploaded)
            raise

        logger.info(f"Property {property_obj.id} created by user {actor_id} with {len(uploaded)} images")
        return property_obj

    async def update_property(
        self,
        property_id: uuid.UUID,
        property_data: PropertyUpdate,
        actor_id: uuid.UUID
    ) -> Property:
        """
        Apply a partial update.

        Raises:
            NotFoundError: If the property or its owner does not exist
            PropertyOwnershipError: If owner-only updates are enforced and the actor is not the owner
        """
        property_obj = await self._get_owned_property(property_id)

        if self.settings.enforce_update_ownership and property_obj.user_id != actor_id:
            raise PropertyOwnershipError()

        update_data = property_data.provided_fields()
        updated_property = await self.property_repo.update(property_obj, update_data)

        logger.info(f"Property {property_id} updated by user {actor_id}: {sorted(update_data)}")
        return updated_property

    async def delete_property(self, property_id: uuid.UUID, actor_id: uuid.UUID) -> None:
        """
        Delete a listing owned by the actor.

        Reviews of the property are kept; they keep referencing the deleted id
        and show up in ReviewService.list_orphaned_reviews.

        Raises:
            NotFoundError: If the property or its owner does not exist
            PropertyOwnershipError: If the actor is not the owner
        """
        property_obj = await self._get_owned_property(property_id)

        if property_obj.user_id != actor_id:
            raise PropertyOwnershipError()

        review_count = len(property_obj.review_ids or [])
        await self.property_repo.delete(property_id)
        logger.info(f"Property {property_id} deleted by user {actor_id}; {review_count} reviews left detached")

    async def get_all_properties(self) -> List[Property]:
        """
        Raises:
            NotFoundError: If there are no properties at all
        """
        properties = await self.property_repo.get_all()
        if not properties:
            raise NotFoundError("Property", detail="No Property found")
        return properties

    async def get_property_with_reviews(self, property_id: uuid.UUID) -> Tuple[Property, List[Review]]:
        """Get a property and its reviews in display order."""
        property_obj = await self.property_repo.get_by_id(property_id)
        if not property_obj:
            raise PropertyNotFoundError()

        reviews = await self.review_repo.get_by_ids(property_obj.review_ids or [])
        return property_obj, reviews

    async def get_properties_by_city(self, city: str) -> List[Property]:
        properties = await self.property_repo.get_by_city(city)
        if not properties:
            raise PropertyNotFoundError()
        return properties

    async def get_properties_by_location(self, location: str) -> List[Property]:
        if not location or not location.strip():
            raise ValidationError("Location is required")

        properties = await self.property_repo.get_by_locality(location)
        if not properties:
            raise NotFoundError("Property", detail=f"No properties found in {location}")
        return properties

    async def get_property_by_slug(self, slug: str) -> Property:
        property_obj = await self.property_repo.get_by_slug(slug)
        if not property_obj:
            raise PropertyNotFoundError()
        return property_obj

    async def filter_properties(self, property_filter: PropertyFilter) -> List[Property]:
        """Get one page of properties matching the filter; an empty page is not an error."""
        return await self.property_repo.filter_properties(property_filter)

    async def _get_owned_property(self, property_id: uuid.UUID) -> Property:
        """Load a property and make sure its owner still exists."""
        property_obj = await self.property_repo.get_by_id(property_id)
        if not property_obj:
            raise PropertyNotFoundError()

        owner = await self.user_repo.get_by_id(property_obj.user_id) if property_obj.user_id else None
        if not owner:
            raise NotFoundError("User", detail="User associated with this property not found")

        return property_obj

    async def _generate_slug(self, property_data: PropertyCreate) -> str:
        parts = [
            f"{property_data.bhk} bhk",
            property_data.type or property_data.property_type or "property",
            property_data.locality or "",
            property_data.city or "",
        ]
        while True:
            slug = unique_suffix_slug(" ".join(parts), fallback="property")
            if not await self.property_repo.slug_exists(slug):
                return slug
