"""Notes API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import ApiResponse, PaginatedResponse
from ..core.schemas.notes import (
    NoteCreate,
    NoteResponse,
    NoteSearchRequest,
    NoteUpdate,
    TagNamesRequest,
)
from ..core.services import NoteService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id
from .deps import Pagination, get_pagination

router = APIRouter(prefix="/notes", tags=["notes"])


@router.post("", response_model=ApiResponse[NoteResponse], status_code=status.HTTP_201_CREATED)
async def create_note(
    request: NoteCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a new note."""
    note_service = NoteService(session)
    note = await note_service.create_note(current_user_id, request)
    return ApiResponse(data=note, message="Note created successfully")


@router.get("", response_model=PaginatedResponse[NoteResponse])
async def list_notes(
    pagination: Pagination = Depends(get_pagination),
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List the caller's own notes, most recently updated first."""
    note_service = NoteService(session)
    return await note_service.list_notes(current_user_id, pagination.page, pagination.limit)


@router.post("/search", response_model=PaginatedResponse[NoteResponse])
async def search_notes(
    request: NoteSearchRequest,
    pagination: Pagination = Depends(get_pagination),
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Search the caller's own notes by text, workspace, date range and tags."""
    note_service = NoteService(session)
    return await note_service.search_notes(
        current_user_id, request, pagination.page, pagination.limit
    )


@router.get("/{note_id}", response_model=ApiResponse[NoteResponse])
async def get_note(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Get a note the caller owns or has been shared."""
    note_service = NoteService(session)
    return ApiResponse(data=await note_service.get_note(note_id, current_user_id))


@router.put("/{note_id}", response_model=ApiResponse[NoteResponse])
async def update_note(
    note_id: UUID,
    request: NoteUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Update a note (owner or edit grant)."""
    note_service = NoteService(session)
    note = await note_service.update_note(note_id, current_user_id, request)
    return ApiResponse(data=note, message="Note updated successfully")


@router.delete("/{note_id}", response_model=ApiResponse[None])
async def delete_note(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a note (owner only)."""
    note_service = NoteService(session)
    await note_service.delete_note(note_id, current_user_id)
    return ApiResponse(message="Note deleted successfully")


@router.post("/{note_id}/tags", response_model=ApiResponse[NoteResponse])
async def add_tags(
    note_id: UUID,
    request: TagNamesRequest,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Attach tags to a note."""
    note_service = NoteService(session)
    note = await note_service.add_tags(note_id, current_user_id, request.tags)
    return ApiResponse(data=note, message="Tags added successfully")


@router.delete("/{note_id}/tags/{tag_name}", response_model=ApiResponse[None])
async def remove_tag(
    note_id: UUID,
    tag_name: str,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Detach a tag from a note."""
    note_service = NoteService(session)
    await note_service.remove_tag(note_id, current_user_id, tag_name)
    return ApiResponse(message="Tag removed successfully")
