"""Tag service implementation."""

from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..repositories.tag_repository import TagRepository
from ..schemas.notes import TagCreate, TagResponse
from .interfaces import ITagService


class TagService(ITagService):
    """Tag service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.tag_repo = TagRepository(session)

    async def list_tags(self, user_id: UUID) -> List[TagResponse]:
        tags = await self.tag_repo.list_for_owner(user_id)
        return [TagResponse.model_validate(tag) for tag in tags]

    async def create_tag(self, user_id: UUID, request: TagCreate) -> TagResponse:
        """Create a tag; an existing tag with the same normalized name is returned."""
        tag = await self.tag_repo.get_or_create(user_id, request.name)
        return TagResponse.model_validate(tag)

    async def get_tag(self, tag_id: UUID, user_id: UUID) -> TagResponse:
        tag = await self.tag_repo.get_by_id(tag_id, user_id)
        response = TagResponse.model_validate(tag)
        response.note_count = await self.tag_repo.note_count_for_tag(tag.id, user_id)
        return response

    async def delete_tag(self, tag_id: UUID, user_id: UUID) -> None:
        await self.tag_repo.delete(tag_id, user_id)
