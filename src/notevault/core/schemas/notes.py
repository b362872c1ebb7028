"""
Note, tag and workspace schemas.

Blank titles, contents and names are rejected by the repositories (after
trimming) rather than here, so they all come back as ``invalid_input``.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class NoteCreate(BaseModel):
    """Note creation request schema."""

    title: str = Field(max_length=500, description="Note title")
    content: str = Field(description="Note content")
    workspace_id: Optional[uuid.UUID] = Field(default=None, description="Owning workspace")
    tags: List[str] = Field(default_factory=list, max_length=50, description="Tag names")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Draft",
                "content": "hello",
                "tags": ["work"],
            }
        }
    )


class NoteUpdate(BaseModel):
    """Partial note update. Only fields present in the request are applied.

    ``workspace_id: null`` moves the note out of its workspace; omitting the
    key leaves it where it is.
    """

    title: Optional[str] = Field(default=None, max_length=500, description="Note title")
    content: Optional[str] = Field(default=None, description="Note content")
    workspace_id: Optional[uuid.UUID] = Field(default=None, description="Target workspace")


class NoteSearchRequest(BaseModel):
    """Search filters; every provided filter must match."""

    model_config = ConfigDict(populate_by_name=True)

    query: Optional[str] = Field(default=None, max_length=500, description="Full-text query")
    workspace_id: Optional[uuid.UUID] = Field(default=None, alias="workspaceId")
    start_date: Optional[datetime] = Field(
        default=None, alias="startDate", description="Created at or after (inclusive)"
    )
    end_date: Optional[datetime] = Field(
        default=None, alias="endDate", description="Created at or before (inclusive)"
    )
    tags: Optional[List[str]] = Field(
        default=None, max_length=50, description="Note must carry all of these tags"
    )


class NoteResponse(BaseModel):
    """Note as seen by a specific requester."""

    id: uuid.UUID = Field(description="Note unique identifier")
    title: str
    content: str
    owner_id: uuid.UUID = Field(description="Note owner ID")
    workspace_id: Optional[uuid.UUID] = None
    tags: List[str] = Field(default_factory=list, description="Tag names, alphabetical")

    permission: str = Field(description="Requester access: read or edit")
    is_owner: bool = Field(description="Whether the requester owns the note")
    can_edit: bool = Field(description="Whether the requester may edit the note")

    created_at: datetime
    updated_at: datetime


class TagNamesRequest(BaseModel):
    """Tags to add to a note."""

    tags: List[str] = Field(min_length=1, max_length=50)


class TagCreate(BaseModel):
    name: str = Field(max_length=100)


class TagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    created_at: datetime
    note_count: Optional[int] = Field(default=None, description="Live notes carrying this tag")


class WorkspaceCreate(BaseModel):
    name: str = Field(max_length=255)
    description: Optional[str] = Field(default=None)


class WorkspaceUpdate(BaseModel):
    """Partial workspace update; ``description: null`` clears it."""

    name: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None)


class WorkspaceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    note_count: Optional[int] = Field(default=None, description="Live notes in the workspace")
