"""
Service layer: interfaces and implementations.
"""

from .interfaces import (
    IAuthService,
    IHealthService,
    INoteService,
    ISharingService,
    ITagService,
    IWorkspaceService,
)

from .auth_service import AuthService
from .health_service import HealthService
from .note_service import NoteService
from .sharing_service import SharingService
from .tag_service import TagService
from .workspace_service import WorkspaceService

__all__ = [
    # Interfaces
    "IAuthService",
    "INoteService",
    "ITagService",
    "IWorkspaceService",
    "ISharingService",
    "IHealthService",
    # Implementations
    "AuthService",
    "NoteService",
    "TagService",
    "WorkspaceService",
    "SharingService",
    "HealthService",
]
