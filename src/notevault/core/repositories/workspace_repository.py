"""Workspace repository. Workspaces are owner-scoped and never shared."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import InvalidInput, NotFoundOrDenied
from ..logging import get_logger
from ..models.note import Note
from ..models.types import utcnow
from ..models.workspace import Workspace
from ..schemas.notes import WorkspaceUpdate

logger = get_logger("repositories.workspaces")


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidInput("Workspace name cannot be empty")
    return cleaned


def _clean_description(description: Optional[str]) -> Optional[str]:
    if description is None:
        return None
    return description.strip() or None


class WorkspaceRepository:
    """Repository for workspace database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self, owner_id: UUID, name: str, description: Optional[str] = None
    ) -> Workspace:
        workspace = Workspace(
            owner_id=owner_id, name=_clean_name(name), description=_clean_description(description)
        )
        self.session.add(workspace)
        await self.session.commit()
        await self.session.refresh(workspace)
        logger.info(
            "Workspace created",
            extra={"workspace_id": str(workspace.id), "owner_id": str(owner_id)},
        )
        return workspace

    async def get_by_id(self, workspace_id: UUID, owner_id: UUID, lock: bool = False) -> Workspace:
        stmt = select(Workspace).where(
            Workspace.id == workspace_id, Workspace.owner_id == owner_id
        )
        if lock:
            stmt = stmt.with_for_update()
        workspace = (await self.session.execute(stmt)).scalar_one_or_none()
        if workspace is None:
            raise NotFoundOrDenied("Workspace not found")
        return workspace

    async def list(self, owner_id: UUID) -> List[Workspace]:
        """Owner's workspaces, newest first."""
        stmt = (
            select(Workspace)
            .where(Workspace.owner_id == owner_id)
            .order_by(Workspace.created_at.desc(), Workspace.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def update(self, workspace_id: UUID, owner_id: UUID, patch: WorkspaceUpdate) -> Workspace:
        """Partial update; only fields present in ``patch`` change."""
        workspace = await self.get_by_id(workspace_id, owner_id, lock=True)

        provided = patch.model_fields_set
        name = _clean_name(patch.name) if "name" in provided else workspace.name
        if "description" in provided:
            workspace.description = _clean_description(patch.description)
        workspace.name = name
        workspace.updated_at = utcnow()

        await self.session.commit()
        await self.session.refresh(workspace)
        return workspace

    async def delete(self, workspace_id: UUID, owner_id: UUID) -> None:
        """Delete a workspace; its notes stay and lose the reference."""
        workspace = await self.get_by_id(workspace_id, owner_id, lock=True)

        # detaching is not an edit, so updated_at is kept as is
        await self.session.execute(
            update(Note)
            .where(Note.workspace_id == workspace.id)
            .values(workspace_id=None, updated_at=Note.updated_at)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.delete(workspace)
        await self.session.commit()
        logger.info(
            "Workspace deleted",
            extra={"workspace_id": str(workspace_id), "owner_id": str(owner_id)},
        )

    async def note_count(self, workspace_id: UUID, owner_id: UUID) -> int:
        """Live notes in the workspace owned by ``owner_id``."""
        stmt = select(func.count(Note.id)).where(
            Note.workspace_id == workspace_id,
            Note.owner_id == owner_id,
            Note.is_deleted.is_(False),
        )
        return (await self.session.execute(stmt)).scalar_one()
