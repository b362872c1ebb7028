"""Note repository: access-controlled CRUD and search."""

from typing import Any, Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import and_, distinct, func, literal_column, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import InvalidInput, NotFoundOrDenied
from ..logging import get_logger
from ..models.note import Note, note_search_vector
from ..models.tag import NoteTag, Tag
from ..models.types import utcnow
from ..models.workspace import Workspace
from ..schemas.notes import NoteSearchRequest, NoteUpdate
from .access_control import AccessControlEvaluator, AccessLevel
from .dialect import dialect_name
from .tag_repository import TagRepository

logger = get_logger("repositories.notes")


def _required_text(field: str, value: Optional[str]) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise InvalidInput(f"{field.capitalize()} cannot be empty")
    return cleaned


class NoteRepository:
    """Repository for note database operations.

    Every method re-resolves the requester's access against current rows.
    Mutations lock the note row for the rest of the transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.access = AccessControlEvaluator(session)
        self.tags = TagRepository(session)

    async def _ensure_workspace(self, workspace_id: UUID, owner_id: UUID) -> None:
        stmt = select(Workspace.id).where(
            Workspace.id == workspace_id, Workspace.owner_id == owner_id
        )
        if (await self.session.execute(stmt)).scalar_one_or_none() is None:
            logger.warning(
                "Workspace rejected",
                extra={"workspace_id": str(workspace_id), "owner_id": str(owner_id)},
            )
            raise NotFoundOrDenied("Workspace not found")

    async def create(
        self,
        owner_id: UUID,
        title: str,
        content: str,
        workspace_id: Optional[UUID] = None,
        tags: Optional[Sequence[str]] = None,
    ) -> Note:
        """Create a note; tags land in the owner's vocabulary."""
        title = _required_text("title", title)
        content = _required_text("content", content)
        if workspace_id is not None:
            await self._ensure_workspace(workspace_id, owner_id)

        note = Note(owner_id=owner_id, title=title, content=content, workspace_id=workspace_id)
        self.session.add(note)
        await self.session.flush()

        if tags:
            await self.tags.attach_to_note(note.id, owner_id, tags, commit=False)

        await self.session.commit()
        await self.session.refresh(note)
        logger.info("Note created", extra={"note_id": str(note.id), "owner_id": str(owner_id)})
        return note

    async def get_with_access(self, note_id: UUID, requester_id: UUID) -> Tuple[Note, AccessLevel]:
        """Visible note plus the requester's access level."""
        note, access = await self.access.load_note_with_access(note_id, requester_id)
        if note is None or not access.can_read:
            raise NotFoundOrDenied("Note not found")
        return note, access

    async def get_by_id(self, note_id: UUID, requester_id: UUID) -> Note:
        note, _ = await self.get_with_access(note_id, requester_id)
        return note

    async def list(self, owner_id: UUID, page: int, limit: int) -> Tuple[List[Note], int]:
        """Owner's live notes, most recently updated first."""
        return await self._paginate(self._owned_live(owner_id), page, limit)

    async def update(self, note_id: UUID, requester_id: UUID, patch: NoteUpdate) -> Note:
        """Apply a partial update; requires edit access.

        Every provided field is validated before any is applied, so a
        rejected update leaves the note untouched.
        """
        note = await self.access.require(note_id, requester_id, AccessLevel.EDIT, lock=True)

        changes: Dict[str, Any] = {}
        provided = patch.model_fields_set
        if "title" in provided:
            changes["title"] = _required_text("title", patch.title)
        if "content" in provided:
            changes["content"] = _required_text("content", patch.content)
        if "workspace_id" in provided:
            # workspaces belong to the note's owner even when a grantee edits
            if patch.workspace_id is not None:
                await self._ensure_workspace(patch.workspace_id, note.owner_id)
            changes["workspace_id"] = patch.workspace_id

        for field, value in changes.items():
            setattr(note, field, value)
        note.updated_at = utcnow()

        await self.session.commit()
        await self.session.refresh(note)
        logger.info(
            "Note updated",
            extra={
                "note_id": str(note_id),
                "requester_id": str(requester_id),
                "fields": sorted(changes),
            },
        )
        return note

    async def delete(self, note_id: UUID, owner_id: UUID) -> None:
        """Soft delete; only the owner may delete, grantees never."""
        note = await self.access.require_owner(note_id, owner_id, lock=True)
        note.mark_deleted()
        await self.session.commit()
        logger.info("Note deleted", extra={"note_id": str(note_id), "owner_id": str(owner_id)})

    async def search(
        self, owner_id: UUID, filters: NoteSearchRequest, page: int, limit: int
    ) -> Tuple[List[Note], int]:
        """Search the owner's live notes. Filters are ANDed together.

        Shared-with-me notes are never included. With no filters the result
        is identical to ``list``.
        """
        conditions = self._owned_live(owner_id)

        query = (filters.query or "").strip()
        if query:
            conditions.append(self._text_condition(query))

        if filters.workspace_id is not None:
            conditions.append(Note.workspace_id == filters.workspace_id)
        if filters.start_date is not None:
            conditions.append(Note.created_at >= filters.start_date)
        if filters.end_date is not None:
            conditions.append(Note.created_at <= filters.end_date)

        tag_names = sorted({Tag.normalize_name(t) for t in filters.tags or []} - {""})
        if tag_names:
            # notes carrying every requested tag from the owner's vocabulary
            carrying_all = (
                select(NoteTag.note_id)
                .join(Tag, Tag.id == NoteTag.tag_id)
                .where(Tag.owner_id == owner_id, Tag.name.in_(tag_names))
                .group_by(NoteTag.note_id)
                .having(func.count(distinct(Tag.id)) == len(tag_names))
            )
            conditions.append(Note.id.in_(carrying_all))

        return await self._paginate(conditions, page, limit)

    def _owned_live(self, owner_id: UUID) -> List[Any]:
        return [Note.owner_id == owner_id, Note.is_deleted.is_(False)]

    def _text_condition(self, query: str):
        if dialect_name(self.session) == "postgresql":
            return note_search_vector().op("@@")(
                func.plainto_tsquery(literal_column("'english'"), query)
            )
        # no full-text engine: every term must appear in title or content
        terms = [
            or_(
                func.lower(Note.title).contains(term, autoescape=True),
                func.lower(Note.content).contains(term, autoescape=True),
            )
            for term in query.lower().split()
        ]
        return and_(*terms)

    async def _paginate(self, conditions: List[Any], page: int, limit: int) -> Tuple[List[Note], int]:
        count_stmt = select(func.count()).select_from(Note).where(*conditions)
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            select(Note)
            .where(*conditions)
            .order_by(Note.updated_at.desc(), Note.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        notes = (await self.session.execute(stmt)).scalars().all()
        return list(notes), total
