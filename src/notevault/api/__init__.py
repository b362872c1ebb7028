"""API routers for NoteVault."""

from .auth import router as auth_router
from .health import router as health_router
from .notes import router as notes_router
from .sharing import router as sharing_router
from .tags import router as tags_router
from .workspaces import router as workspaces_router

__all__ = [
    "auth_router",
    "notes_router",
    "tags_router",
    "workspaces_router",
    "sharing_router",
    "health_router",
]
