"""
Property listing API endpoints: create, update, delete, lookups, filtering
and reviews.
"""

from fastapi import APIRouter, Depends, Request, status, Query
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile as StarletteUploadFile
from typing import Optional
from uuid import UUID

from app.schemas.error import get_crud_error_responses, get_error_responses
from app.schemas.property import PropertyUpdate
from app.schemas.review import ReviewCreate
from app.services.property import PropertyService
from app.services.review import ReviewService
from app.utils.dependencies import (
    get_current_actor,
    get_property_service,
    get_review_service
)
from app.utils.property_filters import build_property_filter

IMAGE_FIELDS = ("images", "images[]")

router = APIRouter(prefix="/property", tags=["Properties"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create property",
    description="Create a listing from multipart form fields and one or more images.",
    responses=get_crud_error_responses()
)
async def create_property(
    request: Request,
    actor_id: UUID = Depends(get_current_actor),
    property_service: PropertyService = Depends(get_property_service)
):
    """
    Create a new property listing.

    Text fields arrive as camelCase form fields; images under ``images`` or
    ``images[]``, in display order.
    """
    form = await request.form()
    fields = {}
    images = []
    for key, value in form.multi_items():
        if isinstance(value, StarletteUploadFile):
            if key in IMAGE_FIELDS:
                images.append(value)
        else:
            fields[key] = value

    property_obj = await property_service.create_property(fields, images, actor_id)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={
            "statusCode": status.HTTP_201_CREATED,
            "property": property_obj.to_dict(),
            "msg": "Property registered successfully."
        }
    )


@router.get(
    "",
    summary="List all properties",
    responses=get_error_responses(404, 500)
)
async def get_properties(property_service: PropertyService = Depends(get_property_service)):
    properties = await property_service.get_all_properties()
    return [property_obj.to_dict() for property_obj in properties]


@router.get(
    "/filter",
    summary="Filter properties",
    description=(
        "Facets combine with AND; comma-separated values inside one facet combine with OR. "
        "preferenceHousing=Any disables the preference facet and genderPreference is "
        "ignored for family listings."
    ),
    responses=get_error_responses(400, 500)
)
async def filter_properties(
    bhk: Optional[str] = Query(None, description="Comma-separated bhk values, e.g. 2,3"),
    residential: Optional[str] = Query(None, description="Comma-separated residential types"),
    commercial: Optional[str] = Query(None, description="Comma-separated commercial types"),
    preference_housing: Optional[str] = Query(None, alias="preferenceHousing"),
    gender_preference: Optional[str] = Query(None, alias="genderPreference"),
    house_type: Optional[str] = Query(None, alias="houseType"),
    city: Optional[str] = Query(None),
    page: Optional[int] = Query(None, ge=1, description="Page number (starts from 1)"),
    limit: Optional[int] = Query(None, ge=1, description="Number of properties per page"),
    property_service: PropertyService = Depends(get_property_service)
):
    property_filter = build_property_filter(
        bhk=bhk,
        residential=residential,
        commercial=commercial,
        preference_housing=preference_housing,
        gender_preference=gender_preference,
        house_type=house_type,
        city=city,
        page=page,
        limit=limit
    )
    properties = await property_service.filter_properties(property_filter)
    return {
        "success": True,
        "data": [property_obj.to_dict() for property_obj in properties],
        "page": property_filter.page,
        "limit": property_filter.limit
    }


@router.get(
    "/city/{city}",
    summary="Properties in a city",
    responses=get_error_responses(404, 500)
)
async def get_properties_by_city(
    city: str,
    property_service: PropertyService = Depends(get_property_service)
):
    properties = await property_service.get_properties_by_city(city)
    return {"success": True, "data": [property_obj.to_dict() for property_obj in properties]}


@router.get(
    "/location/{location}",
    summary="Properties in a locality",
    responses=get_error_responses(400, 404, 500)
)
async def get_properties_by_location(
    location: str,
    property_service: PropertyService = Depends(get_property_service)
):
    properties = await property_service.get_properties_by_location(location)
    return {"success": True, "data": [property_obj.to_dict() for property_obj in properties]}


@router.get(
    "/slug/{slug}",
    summary="Property by slug",
    responses=get_error_responses(404, 500)
)
async def get_property_by_slug(
    slug: str,
    property_service: PropertyService = Depends(get_property_service)
):
    property_obj = await property_service.get_property_by_slug(slug)
    return property_obj.to_dict()


@router.post(
    "/review",
    status_code=status.HTTP_201_CREATED,
    summary="Add review",
    responses=get_error_responses(400, 404, 500)
)
async def add_review(
    review_data: ReviewCreate,
    review_service: ReviewService = Depends(get_review_service)
):
    review = await review_service.add_review(review_data)
    return {"success": True, "data": review.to_dict()}


@router.get(
    "/review/{review_id}",
    summary="Get review",
    responses=get_error_responses(400, 404, 500)
)
async def get_review(
    review_id: UUID,
    review_service: ReviewService = Depends(get_review_service)
):
    review = await review_service.get_review(review_id)
    return {"success": True, "data": review.to_dict()}


@router.delete(
    "/review/{review_id}",
    summary="Delete review",
    responses=get_error_responses(400, 404, 500)
)
async def delete_review(
    review_id: UUID,
    review_service: ReviewService = Depends(get_review_service)
):
    await review_service.delete_review(review_id)
    return {"success": True, "message": "Review deleted successfully"}


@router.get(
    "/{property_id}",
    summary="Property with reviews",
    responses=get_error_responses(400, 404, 500)
)
async def get_property(
    property_id: UUID,
    property_service: PropertyService = Depends(get_property_service)
):
    property_obj, reviews = await property_service.get_property_with_reviews(property_id)
    return property_obj.to_dict(reviews=[review.to_dict() for review in reviews])


@router.put(
    "/{property_id}",
    summary="Update property",
    description="Apply the fields present in the body; absent or null fields are left untouched.",
    responses=get_crud_error_responses()
)
async def update_property(
    property_id: UUID,
    property_data: PropertyUpdate,
    actor_id: UUID = Depends(get_current_actor),
    property_service: PropertyService = Depends(get_property_service)
):
    property_obj = await property_service.update_property(property_id, property_data, actor_id)
    return {
        "statusCode": status.HTTP_200_OK,
        "property": property_obj.to_dict(),
        "message": "Property updated successfully"
    }


@router.delete(
    "/{property_id}",
    summary="Delete property",
    description="Owner only. Reviews of the property are kept.",
    responses=get_crud_error_responses()
)
async def delete_property(
    property_id: UUID,
    actor_id: UUID = Depends(get_current_actor),
    property_service: PropertyService = Depends(get_property_service)
):
    await property_service.delete_property(property_id, actor_id)
    return {"statusCode": status.HTTP_200_OK, "message": "Property deleted successfully"}
