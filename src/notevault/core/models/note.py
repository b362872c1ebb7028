# Note model for user content
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, func, literal_column
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel
from .types import GUID, UTCDateTime, utcnow


class Note(BaseModel):
    """Note owned by a single user; removed only by soft delete."""

    __tablename__ = "notes"

    owner_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    workspace_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        GUID(), ForeignKey("workspaces.id", ondelete="SET NULL"), nullable=True
    )

    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    deleted_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)

    __table_args__ = (
        Index("idx_notes_owner_updated", "owner_id", "is_deleted", "updated_at"),
        Index("idx_notes_owner_created", "owner_id", "created_at"),
        Index("idx_notes_workspace_id", "workspace_id"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', owner_id={self.owner_id})>"

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.owner_id == user_id

    def mark_deleted(self) -> None:
        """Soft delete; the row stays but every read path skips it."""
        now = utcnow()
        self.is_deleted = True
        self.deleted_at = now
        self.updated_at = now


def note_search_vector():
    """``to_tsvector('english', title || ' ' || content)`` for PostgreSQL.

    Literals are inlined so queries match the GIN index expression exactly.
    """
    return func.to_tsvector(
        literal_column("'english'"),
        Note.title.concat(literal_column("' '")).concat(Note.content),
    )


# PostgreSQL only; other dialects fall back to LIKE matching
Index("idx_notes_search_vector", note_search_vector(), postgresql_using="gin").ddl_if(
    dialect="postgresql"
)
