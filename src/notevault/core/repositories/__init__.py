"""Repository layer for data access."""

from .access_control import AccessControlEvaluator, AccessLevel
from .note_repository import NoteRepository
from .share_repository import NoteGrant, SharedNoteView, ShareRepository
from .tag_repository import TagRepository
from .user_repository import UserRepository
from .workspace_repository import WorkspaceRepository

__all__ = [
    "AccessControlEvaluator",
    "AccessLevel",
    "UserRepository",
    "NoteRepository",
    "TagRepository",
    "WorkspaceRepository",
    "ShareRepository",
    "SharedNoteView",
    "NoteGrant",
]
