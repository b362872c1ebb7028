"""
Note sharing schemas.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..models.shared_note import SharePermission


class ShareRequest(BaseModel):
    """Grant or update access on a note for one user."""

    user_id: uuid.UUID = Field(description="Grantee user ID")
    permission: SharePermission = Field(
        default=SharePermission.READ, description="Permission level: read or edit"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"user_id": "123e4567-e89b-12d3-a456-426614174000", "permission": "read"}
        }
    )


class ShareResponse(BaseModel):
    """A single grant row."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(description="Share record ID")
    note_id: uuid.UUID
    shared_with_user_id: uuid.UUID
    shared_by_user_id: uuid.UUID
    permission: str
    created_at: datetime


class NoteGrantResponse(ShareResponse):
    """Grant on one note as listed to its owner."""

    shared_with_username: str


class SharedNoteResponse(ShareResponse):
    """Grant joined with its note and the other party's username.

    ``counterpart_username`` is the granter for shared-with-me listings and
    the grantee for shared-by-me listings.
    """

    note_title: str
    note_content: str
    counterpart_username: str
