"""
NoteApp Backend — Note Repository
===================================

What:  CRUD over one user's note collection (data/<username>.json).
Why:   Encapsulates the per-user file path and the note-name rules,
       independent of HTTP concerns.
How:   Every mutation loads the full collection, changes it in memory and
       rewrites the whole file while holding that user's file lock.
Who:   Called by the /notes, /edit and /delete route handlers.

Semantics:
    add()     → DuplicateNameError if the name exists; nothing is written
    edit()    → first match is renamed/rewritten in place; no match is a
                silent no-op (the unchanged collection is still persisted)
    delete()  → first match is removed; no match is a silent no-op
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from noteapp.exceptions import DuplicateNameError, ValidationError
from noteapp.schemas.note import Note
from noteapp.services.file_store import FileStore, PathLike
from noteapp.services.user_service import validate_username

logger = logging.getLogger(__name__)


def _require_name(name: str, field: str = "name") -> None:
    if not name:
        raise ValidationError(message="Note name is required", field=field)


class NoteRepository:
    """
    Business logic layer for note operations.

    Args:
        store: Shared FileStore (owns the per-file locks)
        data_dir: Directory that holds one <username>.json per user
        reserved: File stems that may never be used as note files
    """

    def __init__(self, store: FileStore, data_dir: PathLike, reserved: Sequence[str] = ("users",)):
        self.store = store
        self.data_dir = Path(data_dir)
        self.reserved = tuple(reserved)

    def path_for(self, username: str) -> Path:
        """
        Derive the note file of `username`.

        Raises:
            ValidationError: username could escape data_dir or clash with a
                reserved file
        """
        validate_username(username, self.reserved)
        return self.data_dir / f"{username}.json"

    async def load(self, username: str) -> List[Note]:
        return await self.store.read(self.path_for(username), Note)

    async def save(self, username: str, notes: Sequence[Note]) -> None:
        await self.store.write(self.path_for(username), notes)

    async def get(self, username: str, name: str) -> Optional[Note]:
        """Return the first note called `name`, or None."""
        for note in await self.load(username):
            if note.name == name:
                return note
        return None

    async def add(self, username: str, name: str, content: str) -> Note:
        """
        Append a new note.

        Raises:
            ValidationError: empty name
            DuplicateNameError: the user already has a note called `name`
        """
        _require_name(name)
        path = self.path_for(username)

        async with self.store.lock(path):
            notes = await self.load(username)

            for note in notes:
                if note.name == name:
                    logger.info("Note %r already exists for %s", name, username)
                    raise DuplicateNameError(name, username)

            note = Note(name=name, content=content)
            notes.append(note)
            await self.save(username, notes)

        logger.info("Created note %r for %s (%d total)", name, username, len(notes))
        return note

    async def edit(self, username: str, old_name: str, new_name: str, new_content: str) -> bool:
        """
        Replace name and content of the first note called `old_name`.

        Uniqueness of `new_name` is not checked.

        Returns:
            True if a note matched, False for the silent no-op case.
        """
        _require_name(new_name)
        path = self.path_for(username)

        async with self.store.lock(path):
            notes = await self.load(username)

            found = False
            for note in notes:
                if note.name == old_name:
                    note.name = new_name
                    note.content = new_content
                    found = True
                    break

            await self.save(username, notes)

        if found:
            logger.info("Edited note %r → %r for %s", old_name, new_name, username)
        else:
            logger.info("Edit of missing note %r for %s ignored", old_name, username)
        return found

    async def delete(self, username: str, name: str) -> bool:
        """
        Remove the first note called `name`.

        Returns:
            True if a note was removed, False for the silent no-op case.
        """
        path = self.path_for(username)

        async with self.store.lock(path):
            notes = await self.load(username)

            found = False
            for i, note in enumerate(notes):
                if note.name == name:
                    del notes[i]
                    found = True
                    break

            await self.save(username, notes)

        if found:
            logger.info("Deleted note %r for %s", name, username)
        else:
            logger.info("Delete of missing note %r for %s ignored", name, username)
        return found
