"""Pure operations on an in-memory note list.

The host keeps the list, applies one of these, then hands the result to
``NoteRepository.save_notes``. None of them mutate their input.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from agenda.core.models import Note


def sort_by_title(notes: Iterable[Note]) -> list[Note]:
    return sorted(notes, key=lambda note: note.title)


def find(notes: Sequence[Note], note_id: str) -> Note | None:
    for note in notes:
        if note.id == note_id:
            return note
    return None


def upsert(notes: Sequence[Note], note: Note) -> list[Note]:
    """Replace the note sharing ``note.id`` or append it when new."""
    updated = [note if existing.id == note.id else existing for existing in notes]
    if find(notes, note.id) is None:
        updated.append(note)
    return updated


def remove(notes: Sequence[Note], note_id: str) -> list[Note]:
    return [note for note in notes if note.id != note_id]
