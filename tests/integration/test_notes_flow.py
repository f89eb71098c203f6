"""
Integration Tests for the note flow.

The shell runs against a real LocalNoteRepository on in-memory SQLite,
so ids, ordering and persistence come from the database.
"""

from notepad.repositories.local import LocalNoteRepository
from notepad.state.shell import NotesShell, ShellStatus


async def _create(shell: NotesShell, name: str, description: str):
    shell.on_field_change("name", name)
    shell.on_field_change("description", description)
    return await shell.on_submit()


async def test_create_then_refresh(local_repository: LocalNoteRepository):
    shell = NotesShell(local_repository)
    await shell.load()
    assert shell.notes == ()

    created = await _create(shell, "test note", "test note description")
    assert shell.notes == (created,)

    refreshed = NotesShell(local_repository)
    await refreshed.load()

    assert refreshed.status is ShellStatus.READY
    assert [(n.name, n.description) for n in refreshed.notes] == [
        ("test note", "test note description")
    ]
    assert refreshed.notes[0].id == created.id


async def test_refresh_preserves_relative_order(local_repository: LocalNoteRepository):
    shell = NotesShell(local_repository)
    await shell.load()
    for index in range(3):
        await _create(shell, f"note {index}", f"body {index}")

    refreshed = NotesShell(local_repository)
    await refreshed.load()

    assert refreshed.notes == shell.notes


async def test_delete_persists(local_repository: LocalNoteRepository):
    shell = NotesShell(local_repository)
    await shell.load()
    first = await _create(shell, "first", "1")
    second = await _create(shell, "second", "2")

    assert await shell.on_delete(first.id) is True
    assert shell.notes == (second,)

    refreshed = NotesShell(local_repository)
    await refreshed.load()
    assert refreshed.notes == (second,)


async def test_stale_delete_is_treated_as_success(local_repository: LocalNoteRepository):
    first_window = NotesShell(local_repository)
    await first_window.load()
    note = await _create(first_window, "shared", "note")

    second_window = NotesShell(local_repository)
    await second_window.load()

    assert await first_window.on_delete(note.id) is True
    assert await second_window.on_delete(note.id) is True
    assert second_window.notes == ()
    assert second_window.last_error is None
