"""Note service implementation."""

from typing import Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import InvalidInput
from ..models.note import Note
from ..models.tag import Tag
from ..repositories.access_control import AccessControlEvaluator, AccessLevel
from ..repositories.note_repository import NoteRepository
from ..repositories.tag_repository import TagRepository
from ..schemas.common import PaginatedResponse
from ..schemas.notes import NoteCreate, NoteResponse, NoteSearchRequest, NoteUpdate
from .interfaces import INoteService


class NoteService(INoteService):
    """Note service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)
        self.tag_repo = TagRepository(session)
        self.access = AccessControlEvaluator(session)

    async def create_note(self, user_id: UUID, request: NoteCreate) -> NoteResponse:
        """Create new note."""
        note = await self.note_repo.create(
            owner_id=user_id,
            title=request.title,
            content=request.content,
            workspace_id=request.workspace_id,
            tags=request.tags,
        )
        return await self._note_to_response(note, AccessLevel.EDIT, user_id)

    async def get_note(self, note_id: UUID, user_id: UUID) -> NoteResponse:
        """Get note by ID.

        Owners and grantees see the note; everyone else gets the same
        not-found as for a missing note.
        """
        note, access = await self.note_repo.get_with_access(note_id, user_id)
        return await self._note_to_response(note, access, user_id)

    async def list_notes(
        self, user_id: UUID, page: int, limit: int
    ) -> PaginatedResponse[NoteResponse]:
        notes, total = await self.note_repo.list(user_id, page, limit)
        return PaginatedResponse[NoteResponse].create(
            await self._owned_responses(notes, user_id), total, page, limit
        )

    async def update_note(self, note_id: UUID, user_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Update existing note."""
        note = await self.note_repo.update(note_id, user_id, request)
        return await self._note_to_response(note, AccessLevel.EDIT, user_id)

    async def delete_note(self, note_id: UUID, user_id: UUID) -> None:
        await self.note_repo.delete(note_id, user_id)

    async def search_notes(
        self, user_id: UUID, request: NoteSearchRequest, page: int, limit: int
    ) -> PaginatedResponse[NoteResponse]:
        notes, total = await self.note_repo.search(user_id, request, page, limit)
        return PaginatedResponse[NoteResponse].create(
            await self._owned_responses(notes, user_id), total, page, limit
        )

    async def add_tags(self, note_id: UUID, user_id: UUID, names: Sequence[str]) -> NoteResponse:
        """Attach tags; requires edit access.

        Tags go into the note owner's vocabulary even when a grantee adds
        them, so owner-scoped tag search keeps finding the note.
        """
        if not any(Tag.normalize_name(name) for name in names):
            raise InvalidInput("At least one tag name is required")

        note = await self.access.require(note_id, user_id, AccessLevel.EDIT, lock=True)
        await self.tag_repo.attach_to_note(note.id, note.owner_id, names)
        return await self._note_to_response(note, AccessLevel.EDIT, user_id)

    async def remove_tag(self, note_id: UUID, user_id: UUID, name: str) -> None:
        await self.tag_repo.detach_from_note(note_id, user_id, name)

    async def _owned_responses(self, notes: List[Note], user_id: UUID) -> List[NoteResponse]:
        tag_map = await self.tag_repo.names_for_notes(note.id for note in notes)
        return [
            self._build_response(note, AccessLevel.EDIT, user_id, tag_map.get(note.id, []))
            for note in notes
        ]

    async def _note_to_response(
        self, note: Note, access: AccessLevel, user_id: UUID, tags: Optional[List[str]] = None
    ) -> NoteResponse:
        if tags is None:
            tag_map: Dict[UUID, List[str]] = await self.tag_repo.names_for_notes([note.id])
            tags = tag_map.get(note.id, [])
        return self._build_response(note, access, user_id, tags)

    @staticmethod
    def _build_response(
        note: Note, access: AccessLevel, user_id: UUID, tags: List[str]
    ) -> NoteResponse:
        return NoteResponse(
            id=note.id,
            title=note.title,
            content=note.content,
            owner_id=note.owner_id,
            workspace_id=note.workspace_id,
            tags=tags,
            permission=access.value,
            is_owner=note.owner_id == user_id,
            can_edit=access.can_edit,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )
