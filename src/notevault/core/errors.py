"""Domain exceptions raised by repositories and services.

Each exception carries a machine-readable ``kind`` and an optional detail
string. The API layer maps kinds to HTTP status codes; nothing below the
API layer formats transport responses.
"""
from typing import Any, Dict, Optional


class NoteVaultError(Exception):
    """Base exception for all NoteVault errors.

    Attributes:
        kind: Machine-readable error kind
        detail: Human-readable detail, safe to show to the caller
    """

    kind = "error"
    status_code = 500
    default_detail = "Internal error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "error": self.kind, "message": self.detail}

    def __str__(self) -> str:
        return f"[{self.kind}] {self.detail}"


class InvalidInput(NoteVaultError):
    """Empty required field, malformed email, bad password or username length."""

    kind = "invalid_input"
    status_code = 400
    default_detail = "Invalid input"


class NotFoundOrDenied(NoteVaultError):
    """Resource absent, soft-deleted, or not accessible to the requester.

    The three cases are reported identically so callers cannot probe for
    resources they are not allowed to see.
    """

    kind = "not_found"
    status_code = 404
    default_detail = "Resource not found"


class Conflict(NoteVaultError):
    kind = "conflict"
    status_code = 409
    default_detail = "Resource already exists"


class Unauthenticated(NoteVaultError):
    kind = "unauthenticated"
    status_code = 401
    default_detail = "Could not validate credentials"


class Unverified(NoteVaultError):
    kind = "unverified"
    status_code = 403
    default_detail = "Account is not verified"


class UpstreamFailure(NoteVaultError):
    """Store or identity backend unreachable."""

    kind = "upstream_failure"
    status_code = 503
    default_detail = "Service temporarily unavailable"
