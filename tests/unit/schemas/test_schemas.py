"""Envelope, pagination and request schemas."""

import uuid

from notevault.core.models import SharePermission
from notevault.core.schemas.common import ApiResponse, PaginatedResponse
from notevault.core.schemas.notes import NoteSearchRequest, NoteUpdate, WorkspaceUpdate
from notevault.core.schemas.sharing import ShareRequest


def test_total_pages_is_ceiling():
    assert PaginatedResponse.create([], total=0, page=1, limit=20).pagination.total_pages == 0
    assert PaginatedResponse.create([], total=20, page=1, limit=20).pagination.total_pages == 1
    assert PaginatedResponse.create([], total=21, page=1, limit=20).pagination.total_pages == 2


def test_pagination_serializes_camel_case_total_pages():
    dumped = PaginatedResponse.create(["a"], total=3, page=2, limit=2).model_dump(by_alias=True)
    assert dumped == {
        "success": True,
        "data": ["a"],
        "pagination": {"page": 2, "limit": 2, "total": 3, "totalPages": 2},
    }


def test_api_response_defaults_to_success():
    response = ApiResponse(data={"x": 1}, message="done")
    assert response.success is True
    assert response.error is None
    assert response.model_dump()["data"] == {"x": 1}


def test_note_update_tracks_provided_fields():
    assert NoteUpdate().model_fields_set == set()
    assert NoteUpdate(title="x").model_fields_set == {"title"}

    cleared = NoteUpdate.model_validate({"workspace_id": None})
    assert cleared.model_fields_set == {"workspace_id"}
    assert cleared.workspace_id is None


def test_workspace_update_explicit_null_description():
    assert WorkspaceUpdate.model_validate({"description": None}).model_fields_set == {"description"}


def test_search_request_accepts_camel_case():
    workspace_id = uuid.uuid4()
    request = NoteSearchRequest.model_validate(
        {"workspaceId": str(workspace_id), "startDate": "2024-01-01T00:00:00Z", "tags": ["a"]}
    )

    assert request.workspace_id == workspace_id
    assert request.start_date.year == 2024
    assert request.tags == ["a"]


def test_share_request_defaults_to_read():
    assert ShareRequest(user_id=uuid.uuid4()).permission is SharePermission.READ
