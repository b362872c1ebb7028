# Per-user containers for notes
import uuid

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel
from .types import GUID


class Workspace(BaseModel):
    """Named group of notes owned by one user. Never shared."""

    __tablename__ = "workspaces"

    owner_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (Index("idx_workspaces_owner_created", "owner_id", "created_at"),)

    def __repr__(self) -> str:
        return f"<Workspace(name='{self.name}', owner_id={self.owner_id})>"
