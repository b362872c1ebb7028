"""
Pydantic schemas for validating and documenting API requests and responses.
"""

from .auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from .common import ApiResponse, HealthCheckResponse, PaginatedResponse, PaginationMeta
from .notes import (
    NoteCreate,
    NoteResponse,
    NoteSearchRequest,
    NoteUpdate,
    TagCreate,
    TagNamesRequest,
    TagResponse,
    WorkspaceCreate,
    WorkspaceResponse,
    WorkspaceUpdate,
)
from .sharing import NoteGrantResponse, SharedNoteResponse, ShareRequest, ShareResponse

__all__ = [
    # Auth schemas
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserResponse",
    # Note, tag and workspace schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    "NoteSearchRequest",
    "TagCreate",
    "TagNamesRequest",
    "TagResponse",
    "WorkspaceCreate",
    "WorkspaceUpdate",
    "WorkspaceResponse",
    # Sharing schemas
    "ShareRequest",
    "ShareResponse",
    "NoteGrantResponse",
    "SharedNoteResponse",
    # Common schemas
    "ApiResponse",
    "PaginatedResponse",
    "PaginationMeta",
    "HealthCheckResponse",
]
