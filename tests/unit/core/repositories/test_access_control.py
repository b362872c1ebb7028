"""Access resolution for owners, grantees, strangers and deleted notes."""

import uuid

import pytest

from notevault.core.errors import NotFoundOrDenied
from notevault.core.models import SharePermission
from notevault.core.repositories import (
    AccessControlEvaluator,
    AccessLevel,
    NoteRepository,
    ShareRepository,
)


@pytest.fixture
async def note(session, alice):
    return await NoteRepository(session).create(alice.id, "Plan", "Quarterly plan")


def test_access_level_ordering():
    assert AccessLevel.EDIT.satisfies(AccessLevel.READ)
    assert AccessLevel.READ.satisfies(AccessLevel.READ)
    assert not AccessLevel.READ.satisfies(AccessLevel.EDIT)
    assert not AccessLevel.NONE.satisfies(AccessLevel.READ)
    assert AccessLevel.READ.can_read and not AccessLevel.READ.can_edit
    assert not AccessLevel.NONE.can_read


@pytest.mark.asyncio
async def test_owner_has_edit(session, alice, note):
    access = await AccessControlEvaluator(session).resolve_access(note.id, alice.id)
    assert access is AccessLevel.EDIT


@pytest.mark.asyncio
async def test_stranger_has_none(session, bob, note):
    access = await AccessControlEvaluator(session).resolve_access(note.id, bob.id)
    assert access is AccessLevel.NONE


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "permission,expected",
    [(SharePermission.READ, AccessLevel.READ), (SharePermission.EDIT, AccessLevel.EDIT)],
)
async def test_grant_decides_access(session, alice, bob, note, permission, expected):
    await ShareRepository(session).share_note(note.id, alice.id, bob.id, permission)

    access = await AccessControlEvaluator(session).resolve_access(note.id, bob.id)
    assert access is expected


@pytest.mark.asyncio
async def test_grant_for_someone_else_does_not_leak(session, alice, bob, carol, note):
    await ShareRepository(session).share_note(note.id, alice.id, bob.id, SharePermission.EDIT)

    access = await AccessControlEvaluator(session).resolve_access(note.id, carol.id)
    assert access is AccessLevel.NONE


@pytest.mark.asyncio
async def test_deleted_note_has_no_access_even_for_owner(session, alice, bob, note):
    await ShareRepository(session).share_note(note.id, alice.id, bob.id, SharePermission.EDIT)
    await NoteRepository(session).delete(note.id, alice.id)

    evaluator = AccessControlEvaluator(session)
    assert await evaluator.resolve_access(note.id, alice.id) is AccessLevel.NONE
    assert await evaluator.resolve_access(note.id, bob.id) is AccessLevel.NONE


@pytest.mark.asyncio
async def test_missing_note_has_no_access(session, alice):
    access = await AccessControlEvaluator(session).resolve_access(uuid.uuid4(), alice.id)
    assert access is AccessLevel.NONE


@pytest.mark.asyncio
async def test_require_raises_not_found_for_read_grantee_wanting_edit(session, alice, bob, note):
    await ShareRepository(session).share_note(note.id, alice.id, bob.id, SharePermission.READ)
    evaluator = AccessControlEvaluator(session)

    loaded = await evaluator.require(note.id, bob.id, AccessLevel.READ)
    assert loaded.id == note.id
    with pytest.raises(NotFoundOrDenied):
        await evaluator.require(note.id, bob.id, AccessLevel.EDIT, lock=True)


@pytest.mark.asyncio
async def test_require_owner_rejects_edit_grantee(session, alice, bob, note):
    await ShareRepository(session).share_note(note.id, alice.id, bob.id, SharePermission.EDIT)
    evaluator = AccessControlEvaluator(session)

    assert (await evaluator.require_owner(note.id, alice.id, lock=True)).id == note.id
    with pytest.raises(NotFoundOrDenied):
        await evaluator.require_owner(note.id, bob.id)


@pytest.mark.asyncio
async def test_revoked_grant_takes_effect_immediately(session, alice, bob, note):
    shares = ShareRepository(session)
    evaluator = AccessControlEvaluator(session)
    await shares.share_note(note.id, alice.id, bob.id, SharePermission.EDIT)
    assert await evaluator.resolve_access(note.id, bob.id) is AccessLevel.EDIT

    await shares.revoke(note.id, alice.id, bob.id)
    assert await evaluator.resolve_access(note.id, bob.id) is AccessLevel.NONE
