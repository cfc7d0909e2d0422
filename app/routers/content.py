"""
Contact form and blog endpoints.
"""

from fastapi import APIRouter, Depends, status
from uuid import UUID

from app.schemas.blog import BlogPostCreate
from app.schemas.contact import ContactCreate
from app.schemas.error import get_error_responses
from app.services.content import BlogService, ContactService
from app.utils.dependencies import get_blog_service, get_contact_service, get_current_actor


contact_router = APIRouter(prefix="/contact", tags=["Contact"])
blog_router = APIRouter(prefix="/blog", tags=["Blog"])


@contact_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Send a contact message",
    responses=get_error_responses(400, 500)
)
async def submit_contact(
    contact_data: ContactCreate,
    contact_service: ContactService = Depends(get_contact_service)
):
    message = await contact_service.submit(contact_data)
    return {"success": True, "data": message.to_dict()}


@contact_router.get("", summary="List contact messages", responses=get_error_responses(401, 500))
async def list_contacts(
    actor_id: UUID = Depends(get_current_actor),
    contact_service: ContactService = Depends(get_contact_service)
):
    messages = await contact_service.list_messages()
    return {"success": True, "data": [message.to_dict() for message in messages]}


@blog_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Publish a blog post",
    responses=get_error_responses(400, 401, 500)
)
async def create_post(
    post_data: BlogPostCreate,
    actor_id: UUID = Depends(get_current_actor),
    blog_service: BlogService = Depends(get_blog_service)
):
    post = await blog_service.create_post(post_data, actor_id)
    return {"success": True, "data": post.to_dict()}


@blog_router.get("", summary="List blog posts", responses=get_error_responses(500))
async def list_posts(blog_service: BlogService = Depends(get_blog_service)):
    posts = await blog_service.list_posts()
    return {"success": True, "data": [post.to_dict() for post in posts]}


@blog_router.get("/{slug}", summary="Blog post by slug", responses=get_error_responses(404, 500))
async def get_post(slug: str, blog_service: BlogService = Depends(get_blog_service)):
    post = await blog_service.get_post(slug)
    return {"success": True, "data": post.to_dict()}
