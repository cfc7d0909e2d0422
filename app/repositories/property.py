"""
Property repository for managing property listings with filtering.
Provides database operations for listing management and the filter endpoint.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_
from app.repositories.base import BaseRepository
from app.models.property import Property
from app.utils.property_filters import PropertyFilter
from typing import Optional, List, Dict, Any
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.
    Translates PropertyFilter facets into SQLAlchemy conditions.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def create_property(self, property_data: Dict[str, Any]) -> Property:
        """
        Create a new property.

        Args:
            property_data: Dictionary containing property column values

        Returns:
            Created property instance
        """
        created_property = await self.create(property_data)
        logger.info(f"Created property: {created_property.slug} (ID: {created_property.id})")
        return created_property

    async def get_all(self) -> List[Property]:
        """Get every property in insertion order."""
        return await self.get_multi()

    async def get_by_city(self, city: str) -> List[Property]:
        """Get properties whose city matches exactly."""
        return await self.get_multi(filters={"city": city})

    async def get_by_locality(self, locality: str) -> List[Property]:
        """Get properties whose locality matches exactly."""
        return await self.get_multi(filters={"locality": locality})

    async def get_by_slug(self, slug: str) -> Optional[Property]:
        """Get a property by its slug."""
        return await self.get_by_field("slug", slug)

    async def slug_exists(self, slug: str) -> bool:
        """Check whether a slug is already taken."""
        return await self.count(filters={"slug": slug}) > 0

    async def filter_properties(self, property_filter: PropertyFilter) -> List[Property]:
        """
        Get one page of properties matching a filter.

        Args:
            property_filter: Facets and pagination built from query parameters

        Returns:
            Matching properties for the requested page
        """
        try:
            query = select(Property)

            conditions = self._build_filter_conditions(property_filter)
            if conditions:
                query = query.where(and_(*conditions))

            query = (
                query
                .order_by(Property.created_at.asc(), Property.id)
                .offset(property_filter.skip)
                .limit(property_filter.limit)
            )

            result = await self.db.execute(query)
            properties = list(result.scalars().all())

            logger.debug(f"Property filter {property_filter!r} returned {len(properties)} results")
            return properties
        except Exception as e:
            logger.error(f"Failed to filter properties: {e}")
            raise

    def _build_filter_conditions(self, property_filter: PropertyFilter) -> List:
        """
        Build SQLAlchemy filter conditions from a PropertyFilter.

        Args:
            property_filter: PropertyFilter instance

        Returns:
            List of SQLAlchemy conditions
        """
        conditions = []

        if property_filter.bhk is not None:
            conditions.append(Property.bhk.in_(property_filter.bhk))

        if property_filter.property_types is not None:
            conditions.append(Property.property_type.in_(property_filter.property_types))

        if property_filter.preference is not None:
            conditions.append(Property.preference == property_filter.preference)

        if property_filter.gender_preference is not None:
            conditions.append(Property.gender_preference == property_filter.gender_preference)

        if property_filter.house_types is not None:
            conditions.append(Property.type.in_(property_filter.house_types))

        if property_filter.city is not None:
            conditions.append(Property.city == property_filter.city)

        return conditions
