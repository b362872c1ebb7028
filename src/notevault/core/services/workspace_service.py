"""Workspace service implementation."""

from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..repositories.workspace_repository import WorkspaceRepository
from ..schemas.notes import WorkspaceCreate, WorkspaceResponse, WorkspaceUpdate
from .interfaces import IWorkspaceService


class WorkspaceService(IWorkspaceService):
    """Workspace service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.workspace_repo = WorkspaceRepository(session)

    async def list_workspaces(self, user_id: UUID) -> List[WorkspaceResponse]:
        workspaces = await self.workspace_repo.list(user_id)
        return [WorkspaceResponse.model_validate(ws) for ws in workspaces]

    async def create_workspace(self, user_id: UUID, request: WorkspaceCreate) -> WorkspaceResponse:
        workspace = await self.workspace_repo.create(user_id, request.name, request.description)
        return WorkspaceResponse.model_validate(workspace)

    async def get_workspace(self, workspace_id: UUID, user_id: UUID) -> WorkspaceResponse:
        """Get workspace together with its live note count."""
        workspace = await self.workspace_repo.get_by_id(workspace_id, user_id)
        response = WorkspaceResponse.model_validate(workspace)
        response.note_count = await self.workspace_repo.note_count(workspace.id, user_id)
        return response

    async def update_workspace(
        self, workspace_id: UUID, user_id: UUID, request: WorkspaceUpdate
    ) -> WorkspaceResponse:
        workspace = await self.workspace_repo.update(workspace_id, user_id, request)
        return WorkspaceResponse.model_validate(workspace)

    async def delete_workspace(self, workspace_id: UUID, user_id: UUID) -> None:
        await self.workspace_repo.delete(workspace_id, user_id)
