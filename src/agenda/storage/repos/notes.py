"""Notes repository."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from agenda.core.collection import sort_by_title
from agenda.core.models import Note
from agenda.storage import codec
from agenda.storage.kv import KeyValueStore
from agenda.utils.time import today_display

logger = logging.getLogger(__name__)

NOTES_KEY = "notes_list"


class NoteRepository:
    """Sole reader and writer of the note list in a key-value store.

    Reads upgrade legacy data in place: the first successful legacy decode is
    written back in the current format. Data no decoder accepts is discarded
    and the key is removed. Decode failures never reach the caller; store
    write failures do, and so does saving two notes with the same id.
    """

    def __init__(self, store: KeyValueStore, key: str = NOTES_KEY) -> None:
        self._store = store
        self._key = key

    def get_notes(self) -> list[Note]:
        if not self._store.contains(self._key):
            return []

        today = today_display()
        for attempt in codec.DECODE_CHAIN:
            try:
                result = attempt(self._store, self._key, today)
            except codec.NoteDecodeError as exc:
                logger.debug("Decode attempt %s failed: %s", attempt.__name__, exc)
                continue
            if result.migrated:
                logger.info(
                    "Migrated %d notes at %r to the current format",
                    len(result.notes),
                    self._key,
                )
                self.save_notes(result.notes)
            return sort_by_title(result.notes)

        logger.warning("Discarding unreadable data at %r", self._key)
        self._store.remove(self._key)
        return []

    def save_notes(self, notes: Sequence[Note]) -> None:
        seen: set[str] = set()
        for note in notes:
            if note.id in seen:
                raise ValueError(f"Duplicate note id: {note.id}")
            seen.add(note.id)
        self._store.put_string(self._key, codec.encode_current(notes))
