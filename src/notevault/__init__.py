"""
NoteVault Backend - Multi-tenant Note Keeping Service

Notes, tags, workspaces and read/edit sharing behind an authorization-aware
data-access layer.
"""

__version__ = "1.0.0"
