"""
Endpoints for the authenticated user's own profile.
"""

from fastapi import APIRouter, Depends, File, UploadFile
from uuid import UUID

from app.models.user import User
from app.schemas.error import get_error_responses
from app.schemas.user import UserUpdate
from app.services.user import UserService
from app.utils.dependencies import get_current_actor, get_current_user, get_user_service


router = APIRouter(prefix="/user", tags=["Users"])


@router.get("/testToken", summary="Check a token", responses=get_error_responses(401))
async def test_token(actor_id: UUID = Depends(get_current_actor)):
    return {"message": "Token is valid", "userId": str(actor_id)}


@router.get("/info", summary="Current user profile", responses=get_error_responses(401, 404))
async def get_user_info(current_user: User = Depends(get_current_user)):
    return current_user.to_dict()


@router.put("/update", summary="Update profile", responses=get_error_responses(400, 401, 404))
async def update_user(
    user_data: UserUpdate,
    actor_id: UUID = Depends(get_current_actor),
    user_service: UserService = Depends(get_user_service)
):
    user = await user_service.update_user(actor_id, user_data)
    return user.to_dict()


@router.post(
    "/uploadProfilePicture",
    summary="Upload profile picture",
    description="Image files only, at most 5 MB.",
    responses=get_error_responses(400, 401, 404)
)
async def upload_profile_picture(
    profile_picture: UploadFile = File(..., alias="profilePicture"),
    actor_id: UUID = Depends(get_current_actor),
    user_service: UserService = Depends(get_user_service)
):
    user = await user_service.upload_profile_picture(actor_id, profile_picture)
    return {"message": "Profile picture uploaded successfully", "profilePicture": user.profile_picture}
