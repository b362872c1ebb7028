"""Sharing API endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import ApiResponse
from ..core.schemas.sharing import (
    NoteGrantResponse,
    SharedNoteResponse,
    ShareRequest,
    ShareResponse,
)
from ..core.services import SharingService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id

router = APIRouter(prefix="/sharing", tags=["sharing"])


@router.post("/notes/{note_id}/share", response_model=ApiResponse[ShareResponse])
async def share_note(
    note_id: UUID,
    request: ShareRequest,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Share a note with another user; re-sharing updates the permission."""
    sharing_service = SharingService(session)
    share = await sharing_service.share_note(note_id, current_user_id, request)
    return ApiResponse(data=share, message="Note shared successfully")


@router.delete("/notes/{note_id}/share/{user_id}", response_model=ApiResponse[None])
async def unshare_note(
    note_id: UUID,
    user_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Revoke a user's access to a note."""
    sharing_service = SharingService(session)
    await sharing_service.revoke_share(note_id, current_user_id, user_id)
    return ApiResponse(message="Note unshared successfully")


@router.get("/shared-with-me", response_model=ApiResponse[List[SharedNoteResponse]])
async def shared_with_me(
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    sharing_service = SharingService(session)
    return ApiResponse(data=await sharing_service.get_shared_with_me(current_user_id))


@router.get("/shared-by-me", response_model=ApiResponse[List[SharedNoteResponse]])
async def shared_by_me(
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    sharing_service = SharingService(session)
    return ApiResponse(data=await sharing_service.get_shared_by_me(current_user_id))


@router.get("/notes/{note_id}/shares", response_model=ApiResponse[List[NoteGrantResponse]])
async def note_shares(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List every grant on one of the caller's notes."""
    sharing_service = SharingService(session)
    return ApiResponse(data=await sharing_service.get_note_shares(note_id, current_user_id))
