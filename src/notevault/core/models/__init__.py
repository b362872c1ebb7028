"""
Database models for NoteVault.

Models included:
    - User: account with email/username/password authentication
    - Workspace: per-user note container
    - Note: note content, soft-deletable
    - Tag / NoteTag: per-user tag vocabulary and note links
    - SharedNote: read/edit grants on a note
"""

from .base import BaseModel
from .note import Note
from .shared_note import SharedNote, SharePermission
from .tag import NoteTag, Tag
from .user import User
from .workspace import Workspace

__all__ = [
    "BaseModel",
    "User",
    "Workspace",
    "Note",
    "Tag",
    "NoteTag",
    "SharedNote",
    "SharePermission",
]
