"""Workspace API endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import ApiResponse
from ..core.schemas.notes import WorkspaceCreate, WorkspaceResponse, WorkspaceUpdate
from ..core.services import WorkspaceService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id

router = APIRouter(prefix="/workspaces", tags=["workspaces"])


@router.get("", response_model=ApiResponse[List[WorkspaceResponse]])
async def list_workspaces(
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    workspace_service = WorkspaceService(session)
    return ApiResponse(data=await workspace_service.list_workspaces(current_user_id))


@router.post(
    "", response_model=ApiResponse[WorkspaceResponse], status_code=status.HTTP_201_CREATED
)
async def create_workspace(
    request: WorkspaceCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    workspace_service = WorkspaceService(session)
    workspace = await workspace_service.create_workspace(current_user_id, request)
    return ApiResponse(data=workspace, message="Workspace created successfully")


@router.get("/{workspace_id}", response_model=ApiResponse[WorkspaceResponse])
async def get_workspace(
    workspace_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Get a workspace with its note count."""
    workspace_service = WorkspaceService(session)
    return ApiResponse(data=await workspace_service.get_workspace(workspace_id, current_user_id))


@router.put("/{workspace_id}", response_model=ApiResponse[WorkspaceResponse])
async def update_workspace(
    workspace_id: UUID,
    request: WorkspaceUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    workspace_service = WorkspaceService(session)
    workspace = await workspace_service.update_workspace(workspace_id, current_user_id, request)
    return ApiResponse(data=workspace, message="Workspace updated successfully")


@router.delete("/{workspace_id}", response_model=ApiResponse[None])
async def delete_workspace(
    workspace_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a workspace; its notes are kept without a workspace."""
    workspace_service = WorkspaceService(session)
    await workspace_service.delete_workspace(workspace_id, current_user_id)
    return ApiResponse(message="Workspace deleted successfully")
