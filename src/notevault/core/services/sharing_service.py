"""Sharing service implementation."""

from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..repositories.share_repository import SharedNoteView, ShareRepository
from ..schemas.sharing import NoteGrantResponse, SharedNoteResponse, ShareRequest, ShareResponse
from .interfaces import ISharingService


def _view_to_response(view: SharedNoteView) -> SharedNoteResponse:
    share = view.share
    return SharedNoteResponse(
        id=share.id,
        note_id=share.note_id,
        shared_with_user_id=share.shared_with_user_id,
        shared_by_user_id=share.shared_by_user_id,
        permission=share.permission,
        created_at=share.created_at,
        note_title=view.note_title,
        note_content=view.note_content,
        counterpart_username=view.counterpart_username,
    )


class SharingService(ISharingService):
    """Sharing service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.share_repo = ShareRepository(session)

    async def share_note(self, note_id: UUID, user_id: UUID, request: ShareRequest) -> ShareResponse:
        """Share a note; sharing again with the same user replaces the permission."""
        share = await self.share_repo.share_note(
            note_id, user_id, request.user_id, request.permission
        )
        return ShareResponse.model_validate(share)

    async def revoke_share(self, note_id: UUID, user_id: UUID, grantee_id: UUID) -> None:
        await self.share_repo.revoke(note_id, user_id, grantee_id)

    async def get_shared_with_me(self, user_id: UUID) -> List[SharedNoteResponse]:
        views = await self.share_repo.list_shared_with_me(user_id)
        return [_view_to_response(view) for view in views]

    async def get_shared_by_me(self, user_id: UUID) -> List[SharedNoteResponse]:
        views = await self.share_repo.list_shared_by_me(user_id)
        return [_view_to_response(view) for view in views]

    async def get_note_shares(self, note_id: UUID, user_id: UUID) -> List[NoteGrantResponse]:
        grants = await self.share_repo.list_grants_for_note(note_id, user_id)
        return [
            NoteGrantResponse(
                id=grant.share.id,
                note_id=grant.share.note_id,
                shared_with_user_id=grant.share.shared_with_user_id,
                shared_by_user_id=grant.share.shared_by_user_id,
                permission=grant.share.permission,
                created_at=grant.share.created_at,
                shared_with_username=grant.grantee_username,
            )
            for grant in grants
        ]
