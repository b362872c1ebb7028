"""
Service interfaces for NoteVault.

Every method takes the authenticated user id explicitly; services never
read it from ambient request state.
"""

from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from ..schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from ..schemas.common import HealthCheckResponse, PaginatedResponse
from ..schemas.notes import (
    NoteCreate,
    NoteResponse,
    NoteSearchRequest,
    NoteUpdate,
    TagCreate,
    TagResponse,
    WorkspaceCreate,
    WorkspaceResponse,
    WorkspaceUpdate,
)
from ..schemas.sharing import NoteGrantResponse, SharedNoteResponse, ShareRequest, ShareResponse


class IAuthService(ABC):
    """Auth service for user management."""

    @abstractmethod
    async def register_user(self, request: RegisterRequest) -> TokenResponse:
        """Register new user and sign them in."""

    @abstractmethod
    async def authenticate_user(self, request: LoginRequest) -> TokenResponse:
        """Login user and return a JWT."""

    @abstractmethod
    async def verify_credentials(self, email: str, password: str) -> UUID:
        """Return the user id for valid credentials or raise Unauthenticated."""

    @abstractmethod
    async def get_current_user(self, user_id: UUID) -> UserResponse:
        """Get user by ID."""

    @abstractmethod
    async def logout_user(self, access_token: str) -> bool:
        """Revoke the presented token."""


class INoteService(ABC):
    """Note service for CRUD, search and tagging."""

    @abstractmethod
    async def create_note(self, user_id: UUID, request: NoteCreate) -> NoteResponse:
        """Create new note."""

    @abstractmethod
    async def get_note(self, note_id: UUID, user_id: UUID) -> NoteResponse:
        """Get note by ID if owned or shared."""

    @abstractmethod
    async def list_notes(
        self, user_id: UUID, page: int, limit: int
    ) -> PaginatedResponse[NoteResponse]:
        """List the user's own notes."""

    @abstractmethod
    async def update_note(self, note_id: UUID, user_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Update existing note."""

    @abstractmethod
    async def delete_note(self, note_id: UUID, user_id: UUID) -> None:
        """Soft delete note."""

    @abstractmethod
    async def search_notes(
        self, user_id: UUID, request: NoteSearchRequest, page: int, limit: int
    ) -> PaginatedResponse[NoteResponse]:
        """Search the user's own notes."""

    @abstractmethod
    async def add_tags(self, note_id: UUID, user_id: UUID, names: List[str]) -> NoteResponse:
        """Attach tags to a note."""

    @abstractmethod
    async def remove_tag(self, note_id: UUID, user_id: UUID, name: str) -> None:
        """Detach a tag from a note."""


class ITagService(ABC):
    """Per-user tag vocabulary."""

    @abstractmethod
    async def list_tags(self, user_id: UUID) -> List[TagResponse]:
        """Alphabetical list of the user's tags."""

    @abstractmethod
    async def create_tag(self, user_id: UUID, request: TagCreate) -> TagResponse:
        """Create or return an existing tag."""

    @abstractmethod
    async def get_tag(self, tag_id: UUID, user_id: UUID) -> TagResponse:
        """Get tag with its note count."""

    @abstractmethod
    async def delete_tag(self, tag_id: UUID, user_id: UUID) -> None:
        """Delete a tag."""


class IWorkspaceService(ABC):
    """Per-user workspaces."""

    @abstractmethod
    async def list_workspaces(self, user_id: UUID) -> List[WorkspaceResponse]:
        """List the user's workspaces."""

    @abstractmethod
    async def create_workspace(self, user_id: UUID, request: WorkspaceCreate) -> WorkspaceResponse:
        """Create a workspace."""

    @abstractmethod
    async def get_workspace(self, workspace_id: UUID, user_id: UUID) -> WorkspaceResponse:
        """Get workspace with its note count."""

    @abstractmethod
    async def update_workspace(
        self, workspace_id: UUID, user_id: UUID, request: WorkspaceUpdate
    ) -> WorkspaceResponse:
        """Update a workspace."""

    @abstractmethod
    async def delete_workspace(self, workspace_id: UUID, user_id: UUID) -> None:
        """Delete a workspace."""


class ISharingService(ABC):
    """Sharing service for note permissions."""

    @abstractmethod
    async def share_note(self, note_id: UUID, user_id: UUID, request: ShareRequest) -> ShareResponse:
        """Grant or update access to a note."""

    @abstractmethod
    async def revoke_share(self, note_id: UUID, user_id: UUID, grantee_id: UUID) -> None:
        """Remove a grant."""

    @abstractmethod
    async def get_shared_with_me(self, user_id: UUID) -> List[SharedNoteResponse]:
        """Notes other users shared with this user."""

    @abstractmethod
    async def get_shared_by_me(self, user_id: UUID) -> List[SharedNoteResponse]:
        """Grants this user has given."""

    @abstractmethod
    async def get_note_shares(self, note_id: UUID, user_id: UUID) -> List[NoteGrantResponse]:
        """Grants on one note, owner only."""


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
