"""NoteService: per-requester responses and tag endpoints."""

import pytest

from notevault.core.errors import InvalidInput, NotFoundOrDenied
from notevault.core.models import SharePermission
from notevault.core.repositories import ShareRepository, TagRepository
from notevault.core.schemas.notes import NoteCreate, NoteSearchRequest, NoteUpdate
from notevault.core.services import NoteService


@pytest.fixture
def service(session):
    return NoteService(session)


@pytest.fixture
async def shared_note(session, service, alice, bob, carol):
    """Alice's note, edit-shared with Bob and read-shared with Carol."""
    note = await service.create_note(
        alice.id, NoteCreate(title="Plan", content="Body", tags=["Work"])
    )
    shares = ShareRepository(session)
    await shares.share_note(note.id, alice.id, bob.id, SharePermission.EDIT)
    await shares.share_note(note.id, alice.id, carol.id, SharePermission.READ)
    return note


@pytest.mark.asyncio
async def test_owner_response(shared_note, alice):
    assert shared_note.is_owner is True
    assert shared_note.can_edit is True
    assert shared_note.permission == "edit"
    assert shared_note.tags == ["work"]
    assert shared_note.owner_id == alice.id


@pytest.mark.asyncio
async def test_grantee_responses(service, shared_note, bob, carol):
    as_bob = await service.get_note(shared_note.id, bob.id)
    as_carol = await service.get_note(shared_note.id, carol.id)

    assert (as_bob.permission, as_bob.is_owner, as_bob.can_edit) == ("edit", False, True)
    assert (as_carol.permission, as_carol.is_owner, as_carol.can_edit) == ("read", False, False)
    assert as_carol.tags == ["work"]


@pytest.mark.asyncio
async def test_grantee_update_response_keeps_owner(service, shared_note, alice, bob):
    updated = await service.update_note(shared_note.id, bob.id, NoteUpdate(title="Edited"))

    assert updated.title == "Edited"
    assert updated.owner_id == alice.id
    assert updated.is_owner is False


@pytest.mark.asyncio
async def test_list_and_search_wrap_pagination(service, alice):
    for i in range(3):
        await service.create_note(alice.id, NoteCreate(title=f"Note {i}", content="x"))

    listed = await service.list_notes(alice.id, page=1, limit=2)
    searched = await service.search_notes(alice.id, NoteSearchRequest(), page=1, limit=2)

    assert listed.pagination.total == 3
    assert listed.pagination.total_pages == 2
    assert [n.id for n in listed.data] == [n.id for n in searched.data]
    assert all(n.is_owner for n in listed.data)


@pytest.mark.asyncio
async def test_edit_grantee_tags_land_in_owner_vocabulary(session, service, shared_note, alice, bob):
    response = await service.add_tags(shared_note.id, bob.id, ["Urgent"])

    assert response.tags == ["urgent", "work"]
    tags = TagRepository(session)
    assert [t.name for t in await tags.list_for_owner(alice.id)] == ["urgent", "work"]
    assert await tags.list_for_owner(bob.id) == []


@pytest.mark.asyncio
async def test_read_grantee_cannot_tag(service, shared_note, carol):
    with pytest.raises(NotFoundOrDenied):
        await service.add_tags(shared_note.id, carol.id, ["nope"])


@pytest.mark.asyncio
async def test_add_tags_needs_a_real_name(service, shared_note, alice):
    with pytest.raises(InvalidInput):
        await service.add_tags(shared_note.id, alice.id, ["  ", ""])


@pytest.mark.asyncio
async def test_remove_tag(service, shared_note, alice, bob):
    await service.remove_tag(shared_note.id, bob.id, "WORK")
    assert (await service.get_note(shared_note.id, alice.id)).tags == []


@pytest.mark.asyncio
async def test_deleted_note_gone_for_everyone(service, shared_note, alice, bob):
    await service.delete_note(shared_note.id, alice.id)
    for user in (alice, bob):
        with pytest.raises(NotFoundOrDenied):
            await service.get_note(shared_note.id, user.id)
