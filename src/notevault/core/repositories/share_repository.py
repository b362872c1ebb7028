"""Share repository: read/edit grants from a note's owner to other users."""

from typing import List, NamedTuple
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import InvalidInput, NotFoundOrDenied
from ..logging import get_logger
from ..models.note import Note
from ..models.shared_note import SharedNote, SharePermission
from ..models.types import utcnow
from ..models.user import User
from .access_control import AccessControlEvaluator
from .dialect import upsert_insert

logger = get_logger("repositories.shares")


class SharedNoteView(NamedTuple):
    """A grant joined with its note and the other party's username."""

    share: SharedNote
    note_title: str
    note_content: str
    counterpart_username: str


class NoteGrant(NamedTuple):
    share: SharedNote
    grantee_username: str


class ShareRepository:
    """Repository for share grant operations. Only owners grant or revoke."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.access = AccessControlEvaluator(session)

    async def share_note(
        self,
        note_id: UUID,
        granter_id: UUID,
        grantee_id: UUID,
        permission: SharePermission,
    ) -> SharedNote:
        """Grant ``permission`` on a note, or overwrite an existing grant.

        Edit-share recipients cannot re-share: the granter must own the note.
        """
        await self.access.require_owner(note_id, granter_id, lock=True)

        if grantee_id == granter_id:
            raise InvalidInput("Cannot share a note with yourself")

        grantee = (
            await self.session.execute(select(User.id).where(User.id == grantee_id))
        ).scalar_one_or_none()
        if grantee is None:
            raise NotFoundOrDenied("User not found")

        permission = SharePermission(permission)
        stmt = (
            upsert_insert(self.session, SharedNote)
            .values(
                note_id=note_id,
                shared_with_user_id=grantee_id,
                shared_by_user_id=granter_id,
                permission=permission.value,
            )
            .on_conflict_do_update(
                index_elements=["note_id", "shared_with_user_id"],
                set_={
                    "permission": permission.value,
                    "shared_by_user_id": granter_id,
                    "updated_at": utcnow(),
                },
            )
        )
        await self.session.execute(stmt)

        share = (
            await self.session.execute(
                select(SharedNote)
                .where(
                    SharedNote.note_id == note_id,
                    SharedNote.shared_with_user_id == grantee_id,
                )
                .execution_options(populate_existing=True)
            )
        ).scalar_one()
        await self.session.commit()

        logger.info(
            "Note shared",
            extra={
                "note_id": str(note_id),
                "granter_id": str(granter_id),
                "grantee_id": str(grantee_id),
                "permission": permission.value,
            },
        )
        return share

    async def revoke(self, note_id: UUID, owner_id: UUID, grantee_id: UUID) -> bool:
        """Remove a grant. Missing grants are not an error; returns whether one existed."""
        await self.access.require_owner(note_id, owner_id, lock=True)

        result = await self.session.execute(
            delete(SharedNote).where(
                SharedNote.note_id == note_id, SharedNote.shared_with_user_id == grantee_id
            )
        )
        await self.session.commit()

        removed = result.rowcount > 0
        logger.info(
            "Share revoked",
            extra={"note_id": str(note_id), "grantee_id": str(grantee_id), "removed": removed},
        )
        return removed

    async def list_shared_with_me(self, user_id: UUID) -> List[SharedNoteView]:
        """Grants received by ``user_id``; counterpart is the granter."""
        stmt = (
            select(SharedNote, Note.title, Note.content, User.username)
            .join(Note, Note.id == SharedNote.note_id)
            .join(User, User.id == SharedNote.shared_by_user_id)
            .where(SharedNote.shared_with_user_id == user_id, Note.is_deleted.is_(False))
            .order_by(SharedNote.created_at.desc(), SharedNote.id.desc())
        )
        return [SharedNoteView(*row) for row in (await self.session.execute(stmt)).all()]

    async def list_shared_by_me(self, user_id: UUID) -> List[SharedNoteView]:
        """Grants given by ``user_id``; counterpart is the grantee."""
        stmt = (
            select(SharedNote, Note.title, Note.content, User.username)
            .join(Note, Note.id == SharedNote.note_id)
            .join(User, User.id == SharedNote.shared_with_user_id)
            .where(
                SharedNote.shared_by_user_id == user_id,
                Note.owner_id == user_id,
                Note.is_deleted.is_(False),
            )
            .order_by(SharedNote.created_at.desc(), SharedNote.id.desc())
        )
        return [SharedNoteView(*row) for row in (await self.session.execute(stmt)).all()]

    async def list_grants_for_note(self, note_id: UUID, owner_id: UUID) -> List[NoteGrant]:
        """Owner-only view of every grantee on one note."""
        await self.access.require_owner(note_id, owner_id)

        stmt = (
            select(SharedNote, User.username)
            .join(User, User.id == SharedNote.shared_with_user_id)
            .where(SharedNote.note_id == note_id)
            .order_by(SharedNote.created_at.desc(), SharedNote.id.desc())
        )
        return [NoteGrant(*row) for row in (await self.session.execute(stmt)).all()]
