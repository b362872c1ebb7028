# Tag models for organizing notes
import uuid

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, UniqueConstraint, event
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel
from .types import GUID


class Tag(BaseModel):
    """Tag in a single user's vocabulary."""

    __tablename__ = "tags"

    owner_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_tags_owner_name"),
        CheckConstraint("name = lower(name)", name="ck_tags_name_lowercase"),
        Index("idx_tags_owner_id", "owner_id"),
    )

    def __repr__(self) -> str:
        return f"<Tag(name='{self.name}', owner_id={self.owner_id})>"

    @classmethod
    def normalize_name(cls, name: str) -> str:
        """Clean up tag name: trim and lowercase. May return ''."""
        return (name or "").strip().lower()


# names are stored normalized no matter which code path writes them
@event.listens_for(Tag, "before_insert", propagate=True)
def _normalize_tag_name_before_insert(mapper, connection, target: Tag):
    target.name = Tag.normalize_name(target.name)


@event.listens_for(Tag, "before_update", propagate=True)
def _normalize_tag_name_before_update(mapper, connection, target: Tag):
    target.name = Tag.normalize_name(target.name)


class NoteTag(BaseModel):
    """Links notes to tags."""

    __tablename__ = "note_tags"

    note_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("notes.id", ondelete="CASCADE"), nullable=False
    )
    tag_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("tags.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("note_id", "tag_id", name="uq_note_tags_note_tag"),
        Index("idx_note_tags_tag_id", "tag_id"),
    )

    def __repr__(self) -> str:
        return f"<NoteTag(note_id={self.note_id}, tag_id={self.tag_id})>"
