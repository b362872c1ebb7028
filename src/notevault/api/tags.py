"""Tag API endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import ApiResponse
from ..core.schemas.notes import TagCreate, TagResponse
from ..core.services import TagService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=ApiResponse[List[TagResponse]])
async def list_tags(
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    tag_service = TagService(session)
    return ApiResponse(data=await tag_service.list_tags(current_user_id))


@router.post("", response_model=ApiResponse[TagResponse], status_code=status.HTTP_201_CREATED)
async def create_tag(
    request: TagCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a tag, or return the existing one with the same name."""
    tag_service = TagService(session)
    return ApiResponse(data=await tag_service.create_tag(current_user_id, request))


@router.get("/{tag_id}", response_model=ApiResponse[TagResponse])
async def get_tag(
    tag_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    tag_service = TagService(session)
    return ApiResponse(data=await tag_service.get_tag(tag_id, current_user_id))


@router.delete("/{tag_id}", response_model=ApiResponse[None])
async def delete_tag(
    tag_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    tag_service = TagService(session)
    await tag_service.delete_tag(tag_id, current_user_id)
    return ApiResponse(message="Tag deleted successfully")
