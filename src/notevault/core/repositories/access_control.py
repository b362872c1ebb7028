"""Access-control evaluator for notes.

Every repository call that reads or mutates a note resolves access through
here immediately before acting. Results are never cached.
"""

from enum import Enum
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import NotFoundOrDenied
from ..logging import get_logger
from ..models.note import Note
from ..models.shared_note import SharedNote, SharePermission

logger = get_logger("access")


class AccessLevel(str, Enum):
    """What a user may do with a note."""

    NONE = "none"
    READ = "read"
    EDIT = "edit"

    @property
    def can_read(self) -> bool:
        return self is not AccessLevel.NONE

    @property
    def can_edit(self) -> bool:
        return self is AccessLevel.EDIT

    def satisfies(self, required: "AccessLevel") -> bool:
        order = (AccessLevel.NONE, AccessLevel.READ, AccessLevel.EDIT)
        return order.index(self) >= order.index(required)


def access_from_share(note: Note, user_id: UUID, permission: Optional[str]) -> AccessLevel:
    """Owner implies edit; otherwise the grant decides."""
    if note.is_deleted:
        return AccessLevel.NONE
    if note.is_owned_by(user_id):
        return AccessLevel.EDIT
    if permission == SharePermission.EDIT.value:
        return AccessLevel.EDIT
    if permission == SharePermission.READ.value:
        return AccessLevel.READ
    return AccessLevel.NONE


class AccessControlEvaluator:
    """Resolves {none, read, edit} for a (note, user) pair from live rows."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def load_note_with_access(
        self, note_id: UUID, user_id: UUID, lock: bool = False
    ) -> Tuple[Optional[Note], AccessLevel]:
        """Fetch the live note and the user's access in one query.

        With ``lock=True`` the note row is locked (``FOR UPDATE``) until the
        surrounding transaction ends, so a concurrent revoke or delete cannot
        slip in between the check and the caller's write. Dialects without
        row locks (SQLite) ignore the clause.
        """
        stmt = (
            select(Note, SharedNote.permission)
            .outerjoin(
                SharedNote,
                and_(SharedNote.note_id == Note.id, SharedNote.shared_with_user_id == user_id),
            )
            .where(Note.id == note_id, Note.is_deleted.is_(False))
        )
        if lock:
            stmt = stmt.with_for_update(of=Note)

        row = (await self.session.execute(stmt)).first()
        if row is None:
            return None, AccessLevel.NONE

        note, permission = row
        return note, access_from_share(note, user_id, permission)

    async def resolve_access(self, note_id: UUID, user_id: UUID) -> AccessLevel:
        """Return the access level of ``user_id`` on ``note_id``."""
        _, access = await self.load_note_with_access(note_id, user_id)
        return access

    async def require(
        self, note_id: UUID, user_id: UUID, required: AccessLevel, lock: bool = False
    ) -> Note:
        """Load the note or raise NotFoundOrDenied if access is insufficient."""
        note, access = await self.load_note_with_access(note_id, user_id, lock=lock)
        if note is None or not access.satisfies(required):
            logger.warning(
                "Access denied",
                extra={
                    "note_id": str(note_id),
                    "user_id": str(user_id),
                    "required": required.value,
                    "actual": access.value,
                },
            )
            raise NotFoundOrDenied("Note not found")
        return note

    async def require_owner(self, note_id: UUID, user_id: UUID, lock: bool = False) -> Note:
        """Load a live note owned by ``user_id`` or raise NotFoundOrDenied."""
        stmt = select(Note).where(
            Note.id == note_id, Note.owner_id == user_id, Note.is_deleted.is_(False)
        )
        if lock:
            stmt = stmt.with_for_update()
        note = (await self.session.execute(stmt)).scalar_one_or_none()
        if note is None:
            logger.warning(
                "Owner check failed", extra={"note_id": str(note_id), "user_id": str(user_id)}
            )
            raise NotFoundOrDenied("Note not found")
        return note
