"""
Services for the contact form and the blog.
"""

from typing import List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.blog import BlogPost
from app.models.contact import ContactMessage
from app.repositories.base import BaseRepository
from app.schemas.blog import BlogPostCreate
from app.schemas.contact import ContactCreate
from app.utils.exceptions import NotFoundError
from app.utils.slugs import unique_suffix_slug
import uuid
import logging

logger = logging.getLogger(__name__)


class ContactService:
    """Stores and lists contact form submissions."""

    def __init__(self, db_session: AsyncSession):
        self.repo = BaseRepository(ContactMessage, db_session)

    async def submit(self, contact_data: ContactCreate) -> ContactMessage:
        message = await self.repo.create(contact_data.model_dump())
        logger.info(f"Contact message {message.id} received from {message.email}")
        return message

    async def list_messages(self) -> List[ContactMessage]:
        return await self.repo.get_multi(order_by="-created_at")


class BlogService:
    """Publishes and reads blog posts."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.repo = BaseRepository(BlogPost, db_session)

    async def create_post(self, post_data: BlogPostCreate, author_id: uuid.UUID) -> BlogPost:
        slug = unique_suffix_slug(post_data.title, fallback="post")
        while await self.repo.get_by_field("slug", slug):
            slug = unique_suffix_slug(post_data.title, fallback="post")

        post = await self.repo.create({**post_data.model_dump(), "slug": slug, "author_id": author_id})
        logger.info(f"Blog post {post.slug} published by {author_id}")
        return post

    async def list_posts(self) -> List[BlogPost]:
        """Newest posts first."""
        result = await self.db.execute(
            select(BlogPost).order_by(BlogPost.created_at.desc(), BlogPost.id)
        )
        return list(result.scalars().all())

    async def get_post(self, slug: str) -> BlogPost:
        post = await self.repo.get_by_field("slug", slug)
        if not post:
            raise NotFoundError("Blog post", detail="Blog post not found")
        return post
