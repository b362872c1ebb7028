"""ShareRepository: owner-only grants, upsert semantics and joined views."""

import uuid
from datetime import datetime, timezone

import pytest
from sqlalchemy import func, select

from notevault.core.errors import InvalidInput, NotFoundOrDenied
from notevault.core.models import SharedNote, SharePermission
from notevault.core.repositories import NoteRepository, ShareRepository


@pytest.fixture
def shares(session):
    return ShareRepository(session)


@pytest.fixture
async def note(session, alice):
    return await NoteRepository(session).create(alice.id, "Shared title", "Shared body")


async def _share_rows(session):
    return (await session.execute(select(func.count()).select_from(SharedNote))).scalar_one()


@pytest.mark.asyncio
async def test_share_creates_grant(shares, note, alice, bob):
    share = await shares.share_note(note.id, alice.id, bob.id, SharePermission.READ)

    assert share.note_id == note.id
    assert share.shared_with_user_id == bob.id
    assert share.shared_by_user_id == alice.id
    assert share.permission == "read"


@pytest.mark.asyncio
async def test_resharing_updates_in_place(session, shares, note, alice, bob):
    first = await shares.share_note(note.id, alice.id, bob.id, SharePermission.READ)
    second = await shares.share_note(note.id, alice.id, bob.id, SharePermission.EDIT)

    assert second.id == first.id
    assert second.permission == "edit"
    assert await _share_rows(session) == 1


@pytest.mark.asyncio
async def test_self_share_rejected(shares, note, alice):
    with pytest.raises(InvalidInput):
        await shares.share_note(note.id, alice.id, alice.id, SharePermission.READ)


@pytest.mark.asyncio
async def test_unknown_grantee(shares, note, alice):
    with pytest.raises(NotFoundOrDenied):
        await shares.share_note(note.id, alice.id, uuid.uuid4(), SharePermission.READ)


@pytest.mark.asyncio
async def test_edit_grantee_cannot_reshare(session, shares, note, alice, bob, carol):
    await shares.share_note(note.id, alice.id, bob.id, SharePermission.EDIT)

    with pytest.raises(NotFoundOrDenied):
        await shares.share_note(note.id, bob.id, carol.id, SharePermission.READ)
    assert await _share_rows(session) == 1


@pytest.mark.asyncio
async def test_cannot_share_deleted_note(session, shares, note, alice, bob):
    await NoteRepository(session).delete(note.id, alice.id)
    with pytest.raises(NotFoundOrDenied):
        await shares.share_note(note.id, alice.id, bob.id, SharePermission.READ)


@pytest.mark.asyncio
async def test_revoke_is_idempotent(session, shares, note, alice, bob):
    await shares.share_note(note.id, alice.id, bob.id, SharePermission.READ)

    assert await shares.revoke(note.id, alice.id, bob.id) is True
    assert await shares.revoke(note.id, alice.id, bob.id) is False
    assert await _share_rows(session) == 0


@pytest.mark.asyncio
async def test_only_owner_revokes(shares, note, alice, bob):
    await shares.share_note(note.id, alice.id, bob.id, SharePermission.EDIT)
    with pytest.raises(NotFoundOrDenied):
        await shares.revoke(note.id, bob.id, bob.id)


@pytest.mark.asyncio
async def test_views_carry_counterpart_and_note(shares, note, alice, bob):
    await shares.share_note(note.id, alice.id, bob.id, SharePermission.EDIT)

    (received,) = await shares.list_shared_with_me(bob.id)
    assert received.note_title == "Shared title"
    assert received.note_content == "Shared body"
    assert received.counterpart_username == "alice"
    assert received.share.permission == "edit"

    (given,) = await shares.list_shared_by_me(alice.id)
    assert given.counterpart_username == "bob"

    assert await shares.list_shared_with_me(alice.id) == []
    assert await shares.list_shared_by_me(bob.id) == []


@pytest.mark.asyncio
async def test_views_newest_grant_first(session, shares, alice, bob):
    notes = NoteRepository(session)
    old_note = await notes.create(alice.id, "Old", "x")
    new_note = await notes.create(alice.id, "New", "x")
    old_share = await shares.share_note(old_note.id, alice.id, bob.id, SharePermission.READ)
    await shares.share_note(new_note.id, alice.id, bob.id, SharePermission.READ)
    old_share.created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
    await session.commit()

    titles = [view.note_title for view in await shares.list_shared_with_me(bob.id)]
    assert titles == ["New", "Old"]


@pytest.mark.asyncio
async def test_views_skip_deleted_notes(session, shares, note, alice, bob):
    await shares.share_note(note.id, alice.id, bob.id, SharePermission.READ)
    await NoteRepository(session).delete(note.id, alice.id)

    assert await shares.list_shared_with_me(bob.id) == []
    assert await shares.list_shared_by_me(alice.id) == []


@pytest.mark.asyncio
async def test_grants_for_note_owner_only(shares, note, alice, bob, carol):
    await shares.share_note(note.id, alice.id, bob.id, SharePermission.READ)
    await shares.share_note(note.id, alice.id, carol.id, SharePermission.EDIT)

    grants = await shares.list_grants_for_note(note.id, alice.id)
    assert {(g.grantee_username, g.share.permission) for g in grants} == {
        ("bob", "read"),
        ("carol", "edit"),
    }

    with pytest.raises(NotFoundOrDenied):
        await shares.list_grants_for_note(note.id, bob.id)
