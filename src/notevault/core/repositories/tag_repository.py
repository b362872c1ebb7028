"""Tag repository: per-user vocabulary and note links."""

from typing import Dict, Iterable, List
from uuid import UUID

from sqlalchemy import delete, distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import InvalidInput, NotFoundOrDenied
from ..logging import get_logger
from ..models.note import Note
from ..models.tag import NoteTag, Tag
from .access_control import AccessControlEvaluator, AccessLevel
from .dialect import upsert_insert

logger = get_logger("repositories.tags")


class TagRepository:
    """Repository for tag database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.access = AccessControlEvaluator(session)

    async def list_for_owner(self, owner_id: UUID) -> List[Tag]:
        """Owner's tags, alphabetical."""
        stmt = select(Tag).where(Tag.owner_id == owner_id).order_by(Tag.name)
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def get_by_id(self, tag_id: UUID, owner_id: UUID) -> Tag:
        stmt = select(Tag).where(Tag.id == tag_id, Tag.owner_id == owner_id)
        tag = (await self.session.execute(stmt)).scalar_one_or_none()
        if tag is None:
            raise NotFoundOrDenied("Tag not found")
        return tag

    async def get_or_create(self, owner_id: UUID, name: str, commit: bool = True) -> Tag:
        """Return the owner's tag called ``name``, creating it if needed.

        Names are trimmed and lower-cased first, so "Work" and " work " are
        the same tag. Concurrent creators race on the (owner, name) unique
        constraint and both end up with the single surviving row.
        """
        normalized = Tag.normalize_name(name)
        if not normalized:
            raise InvalidInput("Tag name cannot be empty")

        stmt = (
            upsert_insert(self.session, Tag)
            .values(owner_id=owner_id, name=normalized)
            .on_conflict_do_nothing(index_elements=["owner_id", "name"])
        )
        await self.session.execute(stmt)

        tag = (
            await self.session.execute(
                select(Tag).where(Tag.owner_id == owner_id, Tag.name == normalized)
            )
        ).scalar_one()
        if commit:
            await self.session.commit()
        return tag

    async def attach_to_note(
        self, note_id: UUID, owner_id: UUID, names: Iterable[str], commit: bool = True
    ) -> List[Tag]:
        """Link tags (from ``owner_id``'s vocabulary) to a note.

        Re-attaching an existing tag is a no-op and blank names are skipped.
        No access check happens here; callers authorize the note first.
        """
        attached: List[Tag] = []
        seen = set()
        for raw in names:
            normalized = Tag.normalize_name(raw)
            if not normalized or normalized in seen:
                continue
            seen.add(normalized)

            tag = await self.get_or_create(owner_id, normalized, commit=False)
            await self.session.execute(
                upsert_insert(self.session, NoteTag)
                .values(note_id=note_id, tag_id=tag.id)
                .on_conflict_do_nothing(index_elements=["note_id", "tag_id"])
            )
            attached.append(tag)

        if commit:
            await self.session.commit()
        if attached:
            logger.info(
                "Tags attached",
                extra={"note_id": str(note_id), "tags": [t.name for t in attached]},
            )
        return attached

    async def detach_from_note(self, note_id: UUID, requester_id: UUID, name: str) -> bool:
        """Remove a tag from a note; requires edit access.

        Returns False when the tag or the link does not exist.
        """
        note = await self.access.require(note_id, requester_id, AccessLevel.EDIT, lock=True)

        normalized = Tag.normalize_name(name)
        tag_id = (
            await self.session.execute(
                select(Tag.id).where(Tag.owner_id == note.owner_id, Tag.name == normalized)
            )
        ).scalar_one_or_none()
        if tag_id is None:
            await self.session.commit()
            return False

        result = await self.session.execute(
            delete(NoteTag).where(NoteTag.note_id == note_id, NoteTag.tag_id == tag_id)
        )
        await self.session.commit()
        return result.rowcount > 0

    async def delete(self, tag_id: UUID, owner_id: UUID) -> None:
        """Delete one of the owner's tags together with its note links."""
        tag = await self.get_by_id(tag_id, owner_id)
        await self.session.execute(delete(NoteTag).where(NoteTag.tag_id == tag.id))
        await self.session.delete(tag)
        await self.session.commit()
        logger.info("Tag deleted", extra={"tag_id": str(tag_id), "owner_id": str(owner_id)})

    async def note_count_for_tag(self, tag_id: UUID, owner_id: UUID) -> int:
        """Live notes owned by ``owner_id`` carrying the tag."""
        stmt = (
            select(func.count(distinct(Note.id)))
            .select_from(NoteTag)
            .join(Note, Note.id == NoteTag.note_id)
            .where(
                NoteTag.tag_id == tag_id,
                Note.owner_id == owner_id,
                Note.is_deleted.is_(False),
            )
        )
        return (await self.session.execute(stmt)).scalar_one()

    async def names_for_notes(self, note_ids: Iterable[UUID]) -> Dict[UUID, List[str]]:
        """Tag names per note id, each list alphabetical."""
        ids = list(note_ids)
        names: Dict[UUID, List[str]] = {note_id: [] for note_id in ids}
        if not ids:
            return names

        stmt = (
            select(NoteTag.note_id, Tag.name)
            .join(Tag, Tag.id == NoteTag.tag_id)
            .where(NoteTag.note_id.in_(ids))
            .order_by(Tag.name)
        )
        for note_id, name in (await self.session.execute(stmt)).all():
            names[note_id].append(name)
        return names
