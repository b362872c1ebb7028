"""WorkspaceRepository: owner-scoped containers and cascade on delete."""

from datetime import datetime, timedelta, timezone

import pytest

from notevault.core.errors import InvalidInput, NotFoundOrDenied
from notevault.core.repositories import NoteRepository, WorkspaceRepository
from notevault.core.schemas.notes import WorkspaceUpdate


@pytest.fixture
def workspaces(session):
    return WorkspaceRepository(session)


@pytest.mark.asyncio
async def test_create_and_list_newest_first(session, workspaces, alice, bob):
    older = await workspaces.create(alice.id, " Older ", "desc")
    newer = await workspaces.create(alice.id, "Newer")
    older.created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
    await session.commit()
    await workspaces.create(bob.id, "Bob's")

    listed = await workspaces.list(alice.id)

    assert [w.id for w in listed] == [newer.id, older.id]
    assert older.name == "Older"
    assert older.description == "desc"


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "  "])
async def test_blank_name_rejected(workspaces, alice, name):
    with pytest.raises(InvalidInput):
        await workspaces.create(alice.id, name)


@pytest.mark.asyncio
async def test_get_by_id_owner_scoped(workspaces, alice, bob):
    workspace = await workspaces.create(alice.id, "Mine")
    with pytest.raises(NotFoundOrDenied):
        await workspaces.get_by_id(workspace.id, bob.id)


@pytest.mark.asyncio
async def test_partial_update(workspaces, alice, bob):
    workspace = await workspaces.create(alice.id, "Name", "Description")

    renamed = await workspaces.update(workspace.id, alice.id, WorkspaceUpdate(name="Renamed"))
    assert renamed.name == "Renamed"
    assert renamed.description == "Description"

    cleared = await workspaces.update(workspace.id, alice.id, WorkspaceUpdate(description=None))
    assert cleared.name == "Renamed"
    assert cleared.description is None

    with pytest.raises(InvalidInput):
        await workspaces.update(workspace.id, alice.id, WorkspaceUpdate(name="  "))
    with pytest.raises(NotFoundOrDenied):
        await workspaces.update(workspace.id, bob.id, WorkspaceUpdate(name="Hijack"))


@pytest.mark.asyncio
async def test_delete_detaches_notes_without_touching_them(session, workspaces, alice):
    notes = NoteRepository(session)
    workspace = await workspaces.create(alice.id, "Temp")
    note = await notes.create(alice.id, "T", "C", workspace_id=workspace.id)
    stamp = datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)
    note.updated_at = stamp
    await session.commit()

    await workspaces.delete(workspace.id, alice.id)

    survivor = await notes.get_by_id(note.id, alice.id)
    assert survivor.workspace_id is None
    assert survivor.updated_at == stamp
    with pytest.raises(NotFoundOrDenied):
        await workspaces.get_by_id(workspace.id, alice.id)


@pytest.mark.asyncio
async def test_only_owner_deletes(workspaces, alice, bob):
    workspace = await workspaces.create(alice.id, "Keep")
    with pytest.raises(NotFoundOrDenied):
        await workspaces.delete(workspace.id, bob.id)
    assert (await workspaces.get_by_id(workspace.id, alice.id)).name == "Keep"


@pytest.mark.asyncio
async def test_note_count_skips_deleted(session, workspaces, alice):
    notes = NoteRepository(session)
    workspace = await workspaces.create(alice.id, "Counted")
    await notes.create(alice.id, "A", "C", workspace_id=workspace.id)
    doomed = await notes.create(alice.id, "B", "C", workspace_id=workspace.id)
    await notes.create(alice.id, "Elsewhere", "C")
    await notes.delete(doomed.id, alice.id)

    assert await workspaces.note_count(workspace.id, alice.id) == 1
