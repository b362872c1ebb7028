# Note sharing between users
import uuid
from enum import Enum

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel
from .types import GUID


class SharePermission(str, Enum):
    """Permission a grant gives its recipient."""

    READ = "read"
    EDIT = "edit"


class SharedNote(BaseModel):
    """Read or edit grant from a note's owner to another user.

    The owner never has a row here; ownership implies edit.
    """

    __tablename__ = "shared_notes"

    note_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("notes.id", ondelete="CASCADE"), nullable=False
    )
    shared_with_user_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    shared_by_user_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    permission: Mapped[str] = mapped_column(
        String(10), default=SharePermission.READ.value, nullable=False
    )

    __table_args__ = (
        UniqueConstraint("note_id", "shared_with_user_id", name="uq_shared_notes_note_grantee"),
        CheckConstraint("permission IN ('read', 'edit')", name="ck_shared_notes_permission"),
        CheckConstraint(
            "shared_with_user_id <> shared_by_user_id", name="ck_shared_notes_no_self_share"
        ),
        Index("idx_shared_notes_grantee", "shared_with_user_id", "created_at"),
        Index("idx_shared_notes_granter", "shared_by_user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<SharedNote(note_id={self.note_id}, shared_with={self.shared_with_user_id}, "
            f"permission={self.permission})>"
        )
